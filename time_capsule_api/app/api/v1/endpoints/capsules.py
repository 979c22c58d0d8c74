"""
Capsule endpoints.

Creating, listing and deleting capsules.  Domain errors raised by
``CapsuleService`` are turned into ``{"message": ...}`` responses by
the exception handlers registered in ``app.main``, so the handlers
below only deal with the happy path.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from time_capsule_api.app.schemas.capsule import (
    CapsuleCreate,
    CapsuleRead,
    CapsuleView,
    MessageResponse,
)
from time_capsule_api.app.services.capsule_service import CapsuleService

router = APIRouter()


@router.post("", response_model=CapsuleRead, status_code=status.HTTP_201_CREATED)
async def create_capsule(capsule_in: CapsuleCreate) -> CapsuleRead:
    """Create a capsule.

    All of ``title``, ``message`` and ``openDate`` are required;
    a missing field yields HTTP 400.
    """
    return await CapsuleService.create_capsule(capsule_in)


@router.get("", response_model=List[Dict[str, Any]])
async def list_capsules() -> List[Dict[str, Any]]:
    """Return every capsule exactly as stored, messages included."""
    return await CapsuleService.list_capsules()


@router.get("/timeline", response_model=List[CapsuleView])
async def capsule_timeline(
    today: Optional[date] = Query(None, description="Reference date, defaults to the server's local date"),
) -> List[CapsuleView]:
    """Return capsules ordered for display.

    Unlocked capsules first, then locked ones, each by open date.
    Messages of locked capsules are withheld.
    """
    views = await CapsuleService.list_with_state(today)
    return [view.model_copy(update={"message": None}) if view.locked else view for view in views]


@router.delete("/{capsule_id}", response_model=MessageResponse)
async def delete_capsule(capsule_id: str) -> MessageResponse:
    """Delete a capsule by ID, or HTTP 404 if it does not exist."""
    await CapsuleService.delete_capsule(capsule_id)
    return MessageResponse(message="Capsule deleted successfully.")
