from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.timebook.timebook.core.enums import EntrySource
from src.timebook.timebook.core.exceptions import ValidationError
from src.timebook.timebook.entries.controller import register


class BrokenDashboard:
    def get_dashboard(self, *, user_id, period="day", now=None):
        raise RuntimeError("Lost connection to MySQL server")


class PickyDashboard:
    def get_dashboard(self, *, user_id, period="day", now=None):
        raise ValidationError("Grouping must be one of day, week, month, year")


class RecordingEntries:
    def __init__(self):
        self.created = []

    def create_entry(self, **kwargs):
        self.created.append(kwargs)
        return "t1"


def _client(dashboard=None, entries=None):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register(app, SimpleNamespace(dashboard_service=dashboard, time_entry_service=entries))
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = "ana"
        sess["role"] = "EMPLOYEE"
    return client


def test_dashboard_store_failure_is_a_json_500(caplog):
    res = _client(dashboard=BrokenDashboard()).get("/dashboard")

    assert res.status_code == 500
    assert res.get_json() == {"success": False, "message": "Internal error"}
    assert "Unexpected error while loading the dashboard" in caplog.text


def test_dashboard_validation_error_is_a_400():
    res = _client(dashboard=PickyDashboard()).get("/dashboard?period=fortnight")

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_dashboard_requires_sign_in():
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register(app, SimpleNamespace(dashboard_service=BrokenDashboard(), time_entry_service=None))

    assert app.test_client().get("/dashboard").status_code == 401


@pytest.mark.parametrize(
    "payload, block_id, source",
    [
        ({"block_id": "101"}, "101", EntrySource.MANUAL),
        ({"block_id": "101", "block_id_override": "202"}, "202", EntrySource.QUICK_SELECT),
    ],
)
def test_quick_select_override(payload, block_id, source):
    entries = RecordingEntries()
    body = {"date": "2024-03-15", "start": "09:00", "end": "10:00", **payload}

    res = _client(entries=entries).post("/entries", json=body)

    assert res.status_code == 201
    assert entries.created[0]["block_id"] == block_id
    assert entries.created[0]["source"] == source
    assert entries.created[0]["user_id"] == "ana"
