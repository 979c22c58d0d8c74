"""
Business logic for time capsules.

``CapsuleService`` layers the domain rules on top of ``CapsuleStore``:

* creation validates the three user fields, assigns an identifier and
  a creation timestamp and appends the capsule to the collection;
* listing returns the stored records untouched, or every capsule
  paired with its lock state, ordered unlocked first, then by open
  date;
* deletion removes a capsule by identifier and fails when there is
  nothing to remove.

Mutating operations hold the store lock across the whole
load-modify-save cycle.
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Union

import pydantic

from time_capsule_api.app.core.errors import (
    CapsuleNotFoundError,
    StoreCorruptError,
    ValidationError,
)
from time_capsule_api.app.core.store import get_store
from time_capsule_api.app.schemas.capsule import CapsuleCreate, CapsuleRead, CapsuleView

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "All fields are required!"
INVALID_DATE_MESSAGE = "openDate must be a date in YYYY-MM-DD format."


def parse_open_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` open date."""
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(INVALID_DATE_MESSAGE) from exc
    # strptime also accepts unpadded months and days.
    if parsed.isoformat() != value:
        raise ValidationError(INVALID_DATE_MESSAGE)
    return parsed


def is_locked(open_date: date, today: date) -> bool:
    """A capsule stays locked until its open date arrives."""
    return today < open_date


def _today(now: Union[date, datetime, None]) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def _next_id(capsules: List[Dict[str, Any]]) -> int:
    # Millisecond clock, bumped past every numeric id already stored.
    candidate = int(time.time() * 1000)
    numeric = [c["id"] for c in capsules if isinstance(c.get("id"), int)]
    if numeric:
        candidate = max(candidate, max(numeric) + 1)
    return candidate


def _validated(model, record: Dict[str, Any]):
    try:
        return model.model_validate(record)
    except pydantic.ValidationError as exc:
        logger.error("Stored capsule %s is malformed: %s", record.get("id"), exc)
        raise StoreCorruptError("Capsule store is corrupt.") from exc


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CapsuleService:
    """Service class for creating, listing and deleting capsules."""

    @classmethod
    async def create_capsule(cls, data: CapsuleCreate) -> CapsuleRead:
        """Validate ``data``, persist a new capsule and return it.

        Fields are stored exactly as given.  Raises ``ValidationError``
        when a field is missing, empty or only whitespace, or when the
        open date is not a calendar date.
        """
        title, message, open_date = data.title, data.message, data.open_date
        if not all(field and field.strip() for field in (title, message, open_date)):
            raise ValidationError(REQUIRED_MESSAGE)
        parse_open_date(open_date)

        store = get_store()
        with store.locked():
            capsules = store.load_all()
            record = {
                "id": _next_id(capsules),
                "title": title,
                "message": message,
                "openDate": open_date,
                "createdAt": _utc_timestamp(),
            }
            capsules.append(record)
            store.save_all(capsules)
        logger.info("Created capsule %s ('%s', opens %s)", record["id"], title, open_date)
        return CapsuleRead.model_validate(record)

    @classmethod
    async def list_capsules(cls) -> List[Dict[str, Any]]:
        """Return the stored records as they are, in stored order."""
        return get_store().load_all()

    @classmethod
    async def list_with_state(
        cls, now: Union[date, datetime, None] = None
    ) -> List[CapsuleView]:
        """Return every capsule together with its lock state.

        ``now`` defaults to the local date; the time of day is ignored.
        Unlocked capsules come first, each group ordered by ascending
        open date.  Capsules with the same open date keep their stored
        relative order.  Hiding the message of locked capsules is left
        to the caller.
        """
        today = _today(now)
        rows = []
        for capsule in get_store().load_all():
            try:
                opens = parse_open_date(capsule.get("openDate"))
            except ValidationError as exc:
                logger.error("Stored capsule %s has an invalid openDate", capsule.get("id"))
                raise StoreCorruptError("Capsule store is corrupt.") from exc
            locked = is_locked(opens, today)
            rows.append((locked, opens, capsule))
        rows.sort(key=lambda row: (row[0], row[1]))
        return [_validated(CapsuleView, {**capsule, "locked": locked}) for locked, _, capsule in rows]

    @classmethod
    async def delete_capsule(cls, capsule_id: Union[int, str]) -> None:
        """Delete the capsule with ``capsule_id``.

        Identifiers are compared by their string form, so ``"42"``
        matches a stored ``42``.  Raises ``CapsuleNotFoundError`` and
        leaves the store untouched when nothing matches.
        """
        key = str(capsule_id)
        store = get_store()
        with store.locked():
            capsules = store.load_all()
            remaining = [c for c in capsules if str(c.get("id")) != key]
            if len(remaining) == len(capsules):
                raise CapsuleNotFoundError("Capsule not found.")
            store.save_all(remaining)
        logger.info("Deleted capsule with ID: %s", key)

