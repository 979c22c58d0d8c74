"""
JSON file store for capsules.

The whole capsule collection lives in a single JSON document (an
array of objects).  ``CapsuleStore`` reads and rewrites that document
as a unit; there is no incremental mode and no cache, so every call
performs fresh I/O.  Writes go to a temporary file in the same
directory which is then moved over the target with ``os.replace`` so
a crash never leaves a half-written store behind.

Services that modify the collection must hold ``CapsuleStore.locked()``
for the entire load-modify-save cycle.  The lock is shared by every
store instance that points at the same file, which serialises
concurrent requests inside one process.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from .config import get_store_path
from .errors import StoreCorruptError, StoreError

logger = logging.getLogger(__name__)

_locks: Dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: str) -> threading.RLock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.RLock()
        return lock


class CapsuleStore:
    """Whole-collection persistence of capsule records."""

    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)
        self._lock = _lock_for(self.path)

    @contextmanager
    def locked(self) -> Iterator["CapsuleStore"]:
        """Hold the store lock for a load-modify-save cycle."""
        with self._lock:
            yield self

    def load_all(self) -> List[Dict[str, Any]]:
        """Return every stored capsule.

        A missing file or a file with only whitespace is an empty
        store.  Anything else that does not decode to a JSON array of
        objects raises ``StoreCorruptError``.
        """
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = f.read()
        except OSError as exc:
            logger.error("Error reading capsule store %s: %s", self.path, exc)
            raise StoreError(f"Could not read capsule store: {exc}") from exc
        if not data.strip():
            return []
        try:
            capsules = json.loads(data)
        except json.JSONDecodeError as exc:
            logger.error("Capsule store %s is not valid JSON: %s", self.path, exc)
            raise StoreCorruptError("Capsule store is corrupt.") from exc
        if not isinstance(capsules, list) or not all(isinstance(c, dict) for c in capsules):
            logger.error("Capsule store %s does not hold a list of capsules", self.path)
            raise StoreCorruptError("Capsule store is corrupt.")
        logger.debug("Loaded %s capsules from %s", len(capsules), self.path)
        return capsules

    def save_all(self, capsules: List[Dict[str, Any]]) -> None:
        """Atomically replace the stored collection with ``capsules``."""
        directory = os.path.dirname(self.path)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=".capsules-", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(capsules, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error writing capsule store %s: %s", self.path, exc)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreError(f"Could not write capsule store: {exc}") from exc
        logger.debug("Saved %s capsules to %s", len(capsules), self.path)


def get_store() -> CapsuleStore:
    """Return a store bound to the currently configured file."""
    return CapsuleStore(get_store_path())
