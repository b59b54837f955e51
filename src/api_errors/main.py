from fastapi import FastAPI

from api_errors.config import Settings, settings as default_settings
from api_errors.dependencies import get_error_catalog
from api_errors.handlers import register_error_handlers
from api_errors.middleware import RequestContextMiddleware
from api_errors.translator import ErrorTranslator


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an application whose failures all come back as the error envelope."""
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app, ErrorTranslator(get_error_catalog(), settings or default_settings))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok"}

    return app


app = create_app()
