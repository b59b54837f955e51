"""Exception classification.

Maps a raised exception onto the closed set of kinds the translator knows
how to turn into error entries.
"""

from enum import StrEnum

import httpx
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api_errors.exceptions import (
    ArgumentTypeMismatchError,
    BusinessError,
    ExecutionError,
    UpstreamClientError,
    UpstreamServerError,
)

HTTP_500 = 500


class ExceptionKind(StrEnum):
    BUSINESS_RULE = "BusinessRule"
    VALIDATION_FIELD = "ValidationField"
    VALIDATION_CONSTRAINT = "ValidationConstraint"
    TYPE_MISMATCH = "TypeMismatch"
    UPSTREAM_CLIENT_ERROR = "UpstreamClientError"
    UPSTREAM_SERVER_ERROR = "UpstreamServerError"
    RESOURCE_UNREACHABLE = "ResourceUnreachable"
    TIMEOUT = "Timeout"
    WRAPPED_EXECUTION = "WrappedExecution"
    UNCLASSIFIED = "Unclassified"


# Timeouts come before transport errors: httpx.TimeoutException is a TransportError.
KIND_BY_TYPE: tuple[tuple[type[Exception], ExceptionKind], ...] = (
    (BusinessError, ExceptionKind.BUSINESS_RULE),
    (RequestValidationError, ExceptionKind.VALIDATION_FIELD),
    (ValidationError, ExceptionKind.VALIDATION_CONSTRAINT),
    (ArgumentTypeMismatchError, ExceptionKind.TYPE_MISMATCH),
    (UpstreamClientError, ExceptionKind.UPSTREAM_CLIENT_ERROR),
    (UpstreamServerError, ExceptionKind.UPSTREAM_SERVER_ERROR),
    (httpx.TimeoutException, ExceptionKind.TIMEOUT),
    (TimeoutError, ExceptionKind.TIMEOUT),
    (httpx.TransportError, ExceptionKind.RESOURCE_UNREACHABLE),
    (ConnectionError, ExceptionKind.RESOURCE_UNREACHABLE),
    (ExecutionError, ExceptionKind.WRAPPED_EXECUTION),
)

CLASSIFIED_TYPES: tuple[type[Exception], ...] = (
    httpx.HTTPStatusError,
    *(exc_type for exc_type, _ in KIND_BY_TYPE),
)


def classify(exc: BaseException) -> ExceptionKind:
    """Return the kind of ``exc``; anything not recognized is UNCLASSIFIED."""
    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code >= HTTP_500:
            return ExceptionKind.UPSTREAM_SERVER_ERROR
        return ExceptionKind.UPSTREAM_CLIENT_ERROR

    for exc_type, kind in KIND_BY_TYPE:
        if isinstance(exc, exc_type):
            return kind
    return ExceptionKind.UNCLASSIFIED
