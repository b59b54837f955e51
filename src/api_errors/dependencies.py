"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routes import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from api_errors.catalog import ErrorCatalog


@lru_cache
def get_error_catalog() -> ErrorCatalog:
    """Process-wide catalog; read-only, so sharing it across requests is safe."""
    return ErrorCatalog()


Catalog = Annotated[ErrorCatalog, Depends(get_error_catalog)]
