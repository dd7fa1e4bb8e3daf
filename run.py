"""Entry point for the Product Inventory API.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``); the products file location from ``PRODUCTS_FILE``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from inventory_api.app.core.config import settings
from inventory_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    # log_config=None keeps the handlers installed by setup_logging().
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")


if __name__ == "__main__":
    main()
