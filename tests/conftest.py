from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from api_errors.catalog import ErrorCatalog
from api_errors.config import Settings
from api_errors.dependencies import Catalog
from api_errors.exceptions import (
    ArgumentTypeMismatchError,
    BusinessError,
    ExecutionError,
    UpstreamServerError,
)
from api_errors.main import create_app
from api_errors.translator import ErrorTranslator
from tests.factories import Order, make_http_status_error


@pytest.fixture
def catalog() -> ErrorCatalog:
    return ErrorCatalog()


@pytest.fixture
def translator(catalog: ErrorCatalog) -> ErrorTranslator:
    return ErrorTranslator(catalog, Settings(error_max_unwrap_depth=1))


@pytest.fixture
def app() -> FastAPI:
    """Application with routes that fail in every way the translator knows."""
    app = create_app(Settings(error_max_unwrap_depth=1))

    @app.get("/business")
    async def business(catalog: Catalog) -> None:
        raise BusinessError(
            [
                catalog.build_error(409, "E02-00-0001", "order already shipped"),
                catalog.build_error(422, "E02-00-0002", "quantity exceeds stock"),
            ]
        )

    @app.get("/items")
    async def items(limit: int, offset: int) -> dict[str, int]:
        return {"limit": limit, "offset": offset}

    @app.get("/orders/validate")
    async def validate_order() -> None:
        Order(quantity=0, sku="x")

    @app.get("/convert")
    async def convert(value: str) -> None:
        raise ArgumentTypeMismatchError(value, int)

    @app.get("/upstream/{status_code}")
    async def upstream(status_code: int) -> None:
        raise make_http_status_error(status_code)

    @app.get("/unreachable")
    async def unreachable() -> None:
        raise httpx.ConnectError("connection refused")

    @app.get("/timeout")
    async def timeout() -> None:
        raise TimeoutError("call exceeded 5000ms")

    @app.get("/wrapped")
    async def wrapped() -> None:
        try:
            raise UpstreamServerError("503 from downstream", status_code=503)
        except UpstreamServerError as exc:
            raise ExecutionError("task failed") from exc

    @app.get("/forbidden")
    async def forbidden() -> None:
        raise HTTPException(status_code=403, detail="nope")

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("unexpected failure")

    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client against the test app.

    Starlette re-raises unhandled exceptions after the catch-all handler has
    sent its response, so app exceptions must not be re-raised by the transport.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
