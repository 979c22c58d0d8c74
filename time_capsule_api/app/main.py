"""
Main entrypoint for the Time Capsule API.

This module assembles the FastAPI application: it sets up logging,
registers the handlers that translate service errors into
``{"message": ...}`` responses and includes the API router.  The
``create_app`` function builds the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn time_capsule_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as api_router
from .core.config import get_store_path, settings
from .core.errors import CapsuleError, ValidationError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def capsule_error_handler(request: Request, exc: CapsuleError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as HTTP 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request."
    return JSONResponse(
        status_code=ValidationError.status_code, content={"message": message}
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured application instance ready to be served.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(CapsuleError, capsule_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/healthz", include_in_schema=False)
    async def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        logger.info("Serving capsules from %s", get_store_path())

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
