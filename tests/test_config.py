"""Tests for settings resolution and the launcher configuration."""

import os
from pathlib import Path

import pytest

import run
from time_capsule_api.app.core.config import get_store_path, settings


def test_absolute_store_path_is_used_as_is(store_path: Path) -> None:
    assert get_store_path() == str(store_path)


def test_relative_store_path_resolves_against_project_root(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "capsule_db_path", "data/db.json")

    resolved = get_store_path()

    assert os.path.isabs(resolved)
    assert resolved.endswith(os.path.join("data", "db.json"))
    assert (Path(resolved).parent.parent / "time_capsule_api").is_dir()


def test_launcher_uses_configured_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "host", "127.0.0.1")
    monkeypatch.setattr(settings, "port", 8123)

    config = run.build_config()

    assert config.host == "127.0.0.1"
    assert config.port == 8123
