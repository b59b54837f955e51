"""Exception-to-response translation.

The translator is the terminal handler for request failures: it classifies a
raised exception, builds the error entries for its kind and wraps them in the
standard envelope. It never raises.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from starlette.exceptions import HTTPException

from api_errors.catalog import HTTP_400, HTTP_500, ErrorCatalog
from api_errors.config import Settings, settings as default_settings
from api_errors.kinds import CLASSIFIED_TYPES, ExceptionKind, classify
from api_errors.logging import get_logger
from api_errors.messages import MessageKey
from api_errors.schemas.error import ErrorEntry, ErrorResponse

logger = get_logger(__name__)

EntryBuilder = Callable[[Any], list[ErrorEntry]]


def exception_message(exc: BaseException) -> str:
    """Message text of ``exc``, falling back to its class name when empty or unprintable."""
    try:
        text = str(exc)
    except Exception:
        text = ""
    return text or type(exc).__name__


def describe_validation_error(error: Mapping[str, Any]) -> str:
    """Render one pydantic/FastAPI error dict as ``"<dotted.loc>: <msg>"``."""
    loc = ".".join(str(part) for part in error.get("loc", ()))
    msg = str(error.get("msg", ""))
    return f"{loc}: {msg}" if loc else msg


class ErrorTranslator:
    """Turn any exception into ``(ErrorResponse, status)``.

    Holds only read-only collaborators, so one instance serves all requests.
    """

    def __init__(self, catalog: ErrorCatalog, settings: Settings | None = None) -> None:
        self.catalog = catalog
        self.max_unwrap_depth = (settings or default_settings).error_max_unwrap_depth
        self._builders: dict[ExceptionKind, EntryBuilder] = {
            ExceptionKind.BUSINESS_RULE: self._business_rule,
            ExceptionKind.VALIDATION_FIELD: self._validation,
            ExceptionKind.VALIDATION_CONSTRAINT: self._validation,
            ExceptionKind.TYPE_MISMATCH: self._type_mismatch,
            ExceptionKind.UPSTREAM_CLIENT_ERROR: self._upstream_client_error,
            ExceptionKind.UPSTREAM_SERVER_ERROR: self._upstream_server_error,
            ExceptionKind.RESOURCE_UNREACHABLE: self._upstream_server_error,
            ExceptionKind.TIMEOUT: self._timeout,
            ExceptionKind.WRAPPED_EXECUTION: self._wrapped_execution,
            ExceptionKind.UNCLASSIFIED: self._unclassified,
        }
        missing = set(ExceptionKind) - self._builders.keys()
        if missing:
            raise RuntimeError(f"no entry builder for kinds: {sorted(missing)}")

    @property
    def handled_exception_types(self) -> tuple[type[Exception], ...]:
        """Exception types with a dedicated kind; everything else is unclassified."""
        return CLASSIFIED_TYPES

    def translate(self, exc: BaseException, **context: Any) -> tuple[ErrorResponse, int]:
        """Classify ``exc`` and build its envelope and HTTP status.

        Extra keyword arguments (e.g. path, method) are added to the log event.
        """
        try:
            kind = classify(exc)
        except Exception:
            logger.exception("exception_classification_failed", **context)
            kind = ExceptionKind.UNCLASSIFIED

        logger.error(
            "exception_translated",
            kind=kind.value,
            exc_type=type(exc).__name__,
            exc_info=exc,
            **context,
        )

        try:
            errors = self._builders[kind](exc)
        except Exception:
            logger.exception("exception_translation_failed", kind=kind.value, **context)
            errors = [
                ErrorEntry(
                    status=HTTP_500,
                    key=str(MessageKey.GENERIC_SERVER_ERROR),
                    detail=exception_message(exc),
                )
            ]

        envelope = self.build_response(errors)
        return envelope, envelope.status

    def translate_http_exception(
        self, exc: HTTPException, **context: Any
    ) -> tuple[ErrorResponse, int]:
        """Wrap an HTTP error raised by the framework (unknown route, HTTPException).

        The status chosen by whoever raised it is kept.
        """
        logger.error(
            "http_exception_translated",
            status=exc.status_code,
            exc_type=type(exc).__name__,
            **context,
        )
        key = (
            MessageKey.GENERIC_SERVER_ERROR
            if exc.status_code >= HTTP_500
            else MessageKey.GENERIC_CLIENT_ERROR
        )
        errors = [self.catalog.build_error(exc.status_code, key, str(exc.detail))]
        envelope = self.build_response(errors)
        return envelope, envelope.status

    @staticmethod
    def build_response(errors: Iterable[ErrorEntry] | None) -> ErrorResponse:
        return ErrorResponse.build(errors)

    def _business_rule(self, exc: Any) -> list[ErrorEntry]:
        return list(exc.errors)

    def _validation(self, exc: Any) -> list[ErrorEntry]:
        return [
            self.catalog.build_error(
                HTTP_400, MessageKey.VALIDATION_FAILURE, describe_validation_error(error)
            )
            for error in exc.errors()
        ]

    def _type_mismatch(self, exc: BaseException) -> list[ErrorEntry]:
        return self.catalog.build_400_error_list(
            MessageKey.GENERIC_CLIENT_ERROR, exception_message(exc)
        )

    def _upstream_client_error(self, exc: BaseException) -> list[ErrorEntry]:
        return self.catalog.build_400_error_list(MessageKey.UPSTREAM_ERROR, exception_message(exc))

    def _upstream_server_error(self, exc: BaseException) -> list[ErrorEntry]:
        return self.catalog.build_500_error_list(MessageKey.UPSTREAM_ERROR, exception_message(exc))

    def _timeout(self, exc: BaseException) -> list[ErrorEntry]:
        return self.catalog.build_408_error_list(MessageKey.TIMEOUT, exception_message(exc))

    def _wrapped_execution(self, exc: BaseException) -> list[ErrorEntry]:
        # Unwrap at most max_unwrap_depth wrappers; whatever is left must be a
        # concrete kind, otherwise the outer wrapper is reported as unclassified.
        cause = exc.__cause__
        kind = ExceptionKind.WRAPPED_EXECUTION
        for _ in range(self.max_unwrap_depth):
            if cause is None:
                break
            kind = classify(cause)
            if kind is not ExceptionKind.WRAPPED_EXECUTION:
                break
            cause = cause.__cause__

        if cause is None or kind in (ExceptionKind.WRAPPED_EXECUTION, ExceptionKind.UNCLASSIFIED):
            return self._unclassified(exc)
        return self._builders[kind](cause)

    def _unclassified(self, exc: BaseException) -> list[ErrorEntry]:
        return self.catalog.build_500_error_list(
            MessageKey.GENERIC_SERVER_ERROR, exception_message(exc)
        )
