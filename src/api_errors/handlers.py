"""FastAPI wiring for the error translator.

Every exception that escapes a route ends up here and is answered with the
standard error envelope. Request path and method reach the translator's log
events through the context bound by RequestContextMiddleware.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api_errors.translator import ErrorTranslator


def register_error_handlers(app: FastAPI, translator: ErrorTranslator) -> None:
    """Route all exceptions raised during request handling through ``translator``.

    Recognized types are registered individually so they are answered inside the
    middleware stack; ``Exception`` is the terminal catch-all. Framework HTTP
    errors (unknown routes, ``HTTPException``) replace Starlette's default
    ``{"detail": ...}`` body.
    """

    async def translate_exception(_request: Request, exc: Exception) -> JSONResponse:
        envelope, status = translator.translate(exc)
        return JSONResponse(status_code=status, content=envelope.model_dump(mode="json"))

    async def translate_http_exception(_request: Request, exc: HTTPException) -> JSONResponse:
        envelope, status = translator.translate_http_exception(exc)
        return JSONResponse(
            status_code=status,
            content=envelope.model_dump(mode="json"),
            headers=exc.headers,
        )

    for exc_type in translator.handled_exception_types:
        app.add_exception_handler(exc_type, translate_exception)
    app.add_exception_handler(HTTPException, translate_http_exception)
    app.add_exception_handler(Exception, translate_exception)
