"""Time Capsule API client.

A small wrapper around the REST API served by ``time_capsule_api``.
It offers the operations of the web front end:

* :meth:`TimeCapsuleAPI.list_capsules` – fetch every stored capsule.
* :meth:`TimeCapsuleAPI.create_capsule` – seal a new capsule.
* :meth:`TimeCapsuleAPI.delete_capsule` – remove a capsule by id.
* :meth:`TimeCapsuleAPI.timeline` – fetch capsules and order them for
  display, hiding the message of capsules that are still locked.

Every method returns a ``(data, error)`` tuple.  On failure ``data``
is empty and ``error`` is a dictionary with ``status_code`` and
``message``; exceptions from ``requests`` are logged, never raised.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

CAPSULES_PATH = "/api/capsules"


def _parse_open_date(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` date, or return ``None``."""
    if not isinstance(value, str) or len(value) != 10:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def order_for_display(capsules: List[Dict[str, Any]], today: date) -> List[Dict[str, Any]]:
    """Annotate capsules with ``locked`` and order them for display.

    Unlocked capsules come first, then locked ones, each group by
    ascending open date.  Locked capsules lose their ``message``.
    Capsules with an unreadable open date are skipped.
    """
    rows = []
    for capsule in capsules:
        opens = _parse_open_date(capsule.get("openDate"))
        if opens is None:
            logger.warning("Skipping capsule %s with invalid openDate", capsule.get("id"))
            continue
        locked = today < opens
        view = dict(capsule, locked=locked)
        if locked:
            view["message"] = None
        rows.append((locked, opens, view))
    rows.sort(key=lambda row: (row[0], row[1]))
    return [view for _, _, view in rows]


class TimeCapsuleAPI:
    """Client for the time capsule REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            session: Optional requests session.  A new one is created
                when not supplied.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request and decode the JSON response.

        Returns:
            ``(data, None)`` on success, ``(None, error)`` on failure.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method, url=url, json=json_body, timeout=self.timeout
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    message = exc.response.json().get("message", "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Capsule operations
    # ------------------------------------------------------------------
    def list_capsules(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve every capsule in stored order."""
        data, error = self._request("GET", CAPSULES_PATH)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def create_capsule(
        self, title: str, message: str, open_date: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Create a capsule.

        Inputs are trimmed and checked locally first so an obviously
        incomplete capsule never reaches the server.
        """
        payload = {
            "title": (title or "").strip(),
            "message": (message or "").strip(),
            "openDate": (open_date or "").strip(),
        }
        if not all(payload.values()):
            return None, {"status_code": None, "message": "Please fill out all fields."}
        return self._request("POST", CAPSULES_PATH, json_body=payload)

    def delete_capsule(self, capsule_id: Any) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a capsule by id."""
        _, error = self._request("DELETE", f"{CAPSULES_PATH}/{capsule_id}")
        if error:
            return False, error
        return True, None

    def timeline(
        self, today: Optional[date] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Fetch capsules and order them for display as of ``today``."""
        capsules, error = self.list_capsules()
        if error:
            return [], error
        return order_for_display(capsules, today or date.today()), None
