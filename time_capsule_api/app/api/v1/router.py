"""
Top-level API router.

Aggregates the domain routers.  The capsule API lives under
``/capsules``; the application mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import capsules

router = APIRouter()

router.include_router(capsules.router, prefix="/capsules", tags=["capsules"])
