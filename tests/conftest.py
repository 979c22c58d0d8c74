"""Shared fixtures: every test gets its own capsule file."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from time_capsule_api.app.core.config import settings
from time_capsule_api.app.core.store import CapsuleStore
from time_capsule_api.app.main import app


@pytest.fixture(autouse=True)
def store_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the service at a fresh, not yet existing capsule file."""
    path = tmp_path / "db.json"
    monkeypatch.setattr(settings, "capsule_db_path", str(path))
    return path


@pytest.fixture
def store(store_path: Path) -> CapsuleStore:
    return CapsuleStore(str(store_path))


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def write_capsules(store_path: Path):
    """Write raw capsule records straight to the store file."""

    def _write(capsules) -> None:
        store_path.write_text(json.dumps(capsules), encoding="utf-8")

    return _write
