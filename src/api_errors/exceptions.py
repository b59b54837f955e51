"""Typed exceptions raised by application code and caught by the error translator.

Routes and services raise these to signal a specific failure kind.
The handlers registered in handlers.py translate them into the standard
error envelope: {"errors": [{"status": ..., "key": "...", "detail": "..."}]}.
"""

from collections.abc import Iterable

from api_errors.schemas.error import ErrorEntry


class BusinessError(Exception):
    """Raised when a business rule rejects the request.

    The caller builds the entries (usually with ``ErrorCatalog``); they are
    passed through to the response unchanged.
    """

    def __init__(self, errors: Iterable[ErrorEntry], message: str | None = None) -> None:
        self.errors = tuple(errors)
        if message is None:
            message = "; ".join(entry.detail for entry in self.errors) or "business rule violated"
        self.message = message
        super().__init__(message)


class ArgumentTypeMismatchError(ValueError):
    """Raised when a request parameter cannot be converted to the expected type."""

    def __init__(self, value: object, expected: type | str, parameter: str | None = None) -> None:
        self.value = value
        self.expected = expected.__name__ if isinstance(expected, type) else expected
        self.parameter = parameter
        message = f"cannot convert {value!r} to {self.expected}"
        if parameter is not None:
            message = f"{message} for parameter {parameter!r}"
        super().__init__(message)


class UpstreamError(Exception):
    """Base class for failed calls to a downstream service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UpstreamClientError(UpstreamError):
    """Downstream service rejected the call with a 4xx status."""


class UpstreamServerError(UpstreamError):
    """Downstream service failed with a 5xx status."""


class ResourceUnreachableError(ConnectionError):
    """Downstream resource could not be reached at all."""


class ExecutionError(Exception):
    """Wraps the failure of deferred work; the real error is the cause.

    Either pass ``cause`` or raise with ``raise ExecutionError(...) from exc``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause
