"""Entry point for the Time Capsule API.

Starts the FastAPI application under Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``3000``); the capsule file is chosen with
``CAPSULE_DB_PATH``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from time_capsule_api.app.core.config import settings
from time_capsule_api.app.main import app


def build_config() -> Config:
    """Build the Uvicorn configuration from application settings."""
    return Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


async def main() -> None:
    """Serve the API until interrupted."""
    server = Server(build_config())
    logging.getLogger(__name__).info(
        "Server running on http://%s:%s", settings.host, settings.port
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
