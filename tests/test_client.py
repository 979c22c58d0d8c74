"""Tests for the requests-based API client, using a fake session."""

import json
import os
import subprocess
import sys
from datetime import date
from pathlib import Path

import requests

from time_capsule_client import TimeCapsuleAPI, order_for_display


def make_response(status_code: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = "Error" if status_code >= 400 else "OK"
    response.url = "http://capsules.test/api/capsules"
    response._content = json.dumps(body).encode() if body is not None else b""
    return response


class FakeSession:
    """Records requests and replays canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def test_list_capsules() -> None:
    session = FakeSession(make_response(200, [{"id": 1}]))
    api = TimeCapsuleAPI(base_url="http://capsules.test/", session=session)

    capsules, error = api.list_capsules()

    assert capsules == [{"id": 1}]
    assert error is None
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://capsules.test/api/capsules"


def test_create_capsule_posts_trimmed_payload() -> None:
    created = {"id": 7, "title": "Letter", "message": "Hi", "openDate": "2030-01-01"}
    session = FakeSession(make_response(201, created))
    api = TimeCapsuleAPI(base_url="http://capsules.test", session=session)

    data, error = api.create_capsule(" Letter ", "Hi\n", "2030-01-01")

    assert (data, error) == (created, None)
    assert session.calls[0]["json"] == {"title": "Letter", "message": "Hi", "openDate": "2030-01-01"}


def test_create_capsule_refuses_empty_fields_locally() -> None:
    session = FakeSession()
    api = TimeCapsuleAPI(base_url="http://capsules.test", session=session)

    data, error = api.create_capsule("Letter", "   ", "2030-01-01")

    assert data is None
    assert error["message"] == "Please fill out all fields."
    assert session.calls == []


def test_delete_not_found_reports_server_message() -> None:
    session = FakeSession(make_response(404, {"message": "Capsule not found."}))
    api = TimeCapsuleAPI(base_url="http://capsules.test", session=session)

    ok, error = api.delete_capsule(42)

    assert ok is False
    assert error == {"status_code": 404, "message": "Capsule not found."}
    assert session.calls[0]["url"].endswith("/api/capsules/42")


def test_transport_failure_is_reported() -> None:
    session = FakeSession(requests.ConnectionError("connection refused"))
    api = TimeCapsuleAPI(base_url="http://capsules.test", session=session)

    capsules, error = api.list_capsules()

    assert capsules == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_timeline_orders_locally() -> None:
    raw = [
        {"id": 1, "title": "Future", "message": "Shh", "openDate": "2999-01-01"},
        {"id": 2, "title": "Letter", "message": "Hi", "openDate": "2020-01-01"},
    ]
    api = TimeCapsuleAPI(base_url="http://capsules.test", session=FakeSession(make_response(200, raw)))

    rows, error = api.timeline(today=date(2025, 1, 1))

    assert error is None
    assert [(r["id"], r["locked"], r["message"]) for r in rows] == [(2, False, "Hi"), (1, True, None)]


def test_order_for_display_skips_bad_dates() -> None:
    rows = order_for_display([{"id": 1, "openDate": "later"}, {"id": 2, "openDate": "2020-01-01"}], date(2025, 1, 1))
    assert [r["id"] for r in rows] == [2]


def test_client_import_does_not_load_the_server() -> None:
    root = Path(__file__).resolve().parent.parent
    env = dict(os.environ, PYTHONPATH=str(root))
    check = (
        "import logging, sys, time_capsule_client; "
        "assert 'fastapi' not in sys.modules, 'fastapi imported'; "
        "assert 'time_capsule_api' not in sys.modules, 'server imported'; "
        "assert not logging.getLogger().handlers, 'root logger configured'"
    )

    result = subprocess.run([sys.executable, "-c", check], cwd=root, env=env, capture_output=True, text=True)

    assert result.returncode == 0, result.stderr
