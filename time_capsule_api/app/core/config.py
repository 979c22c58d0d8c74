"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can be started without any configuration at all; in a real
deployment you would at least point ``CAPSULE_DB_PATH`` at a
persistent volume.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Time Capsule API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Network binding used by ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Path of the JSON document holding every capsule.  A relative
    # path is resolved against the project root by ``get_store_path``.
    capsule_db_path: str = os.getenv("CAPSULE_DB_PATH", "db.json")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()


def get_store_path() -> str:
    """Compute the path to the capsule store file.

    If ``settings.capsule_db_path`` is an absolute path, use it
    directly.  Otherwise resolve it relative to the project root.
    The setting is read on every call so it can be changed at runtime.
    """
    db_path = settings.capsule_db_path
    if os.path.isabs(db_path):
        return db_path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_path).resolve())
