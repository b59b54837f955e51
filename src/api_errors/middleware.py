"""FastAPI middleware that binds request context for error logging."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request_id, path and method to structlog contextvars.

    The translator logs every failure it answers; with this middleware
    installed those ``exception_translated`` events identify the request
    without the handlers passing anything along. The request ID (taken from
    X-Request-ID or generated) is echoed on every response that passes back
    through the middleware, so clients can quote it.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
