"""
Main entrypoint for the Product Inventory API.

This module assembles the FastAPI application, sets up logging, error
handlers and the versioned routers.  ``create_app`` builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn inventory_api.app.main:app --port 3000

The v1 router is mounted at the root so the public paths are
``/products`` and ``/products/{id}``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.store import get_store

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ("GET", "/products"),
    ("GET", "/products/instock"),
    ("POST", "/products"),
    ("PUT", "/products/:id"),
    ("DELETE", "/products/:id"),
)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Loading once creates the products file if it does not exist yet.
        store = app.dependency_overrides.get(get_store, get_store)()
        products = store.load()
        logger.info(
            "%s running on port %s with %d products (%s)",
            settings.project_name,
            settings.port,
            len(products),
            getattr(store, "path", "in memory"),
        )
        logger.info("Available endpoints:")
        for method, path in ENDPOINTS:
            logger.info("  %-6s http://localhost:%s%s", method, settings.port, path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(v1_router)
    return app


app = create_app()
