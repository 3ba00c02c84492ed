from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.timebook.timebook.management.controller import register
from src.timebook.timebook.management.export import build_overview_csv, export_filename
from src.timebook.timebook.management.model import ManagementOverview, Totals, UserSummary


def sample_overview() -> ManagementOverview:
    return ManagementOverview(
        range_start="2024-01-01T00:00:00",
        range_end="2024-01-07T23:59:59.999999",
        totals=Totals(total_minutes=2600, billable_minutes=600, non_billable_minutes=2000),
        per_user=[
            UserSummary(
                user_id="u1",
                name='Doe, "JD" John',
                email="jd@example.com",
                total_minutes=2000,
                billable_minutes=600,
                expected_minutes=2400,
                overtime_minutes=-400,
            ),
            UserSummary(
                user_id="u2",
                name="Bo",
                email="bo@example.com",
                total_minutes=600,
                overtime_minutes=600,
            ),
        ],
    )


def test_csv_rows_follow_per_user_order_and_quote_specials():
    lines = build_overview_csv(sample_overview()).splitlines()

    assert lines == [
        "Name,Email,Total-Min,Billable-Min,Expected-Min,Overtime-Min",
        '"Doe, ""JD"" John",jd@example.com,2000,600,2400,-400',
        "Bo,bo@example.com,600,0,0,600",
    ]


def test_csv_for_empty_overview_is_header_only():
    overview = ManagementOverview(range_start="2024-01-01T00:00:00", range_end="2024-01-01T23:59:59", totals=Totals())

    assert build_overview_csv(overview) == "Name,Email,Total-Min,Billable-Min,Expected-Min,Overtime-Min\n"


def test_export_filename_uses_range_dates():
    assert export_filename(sample_overview()) == "management-export-2024-01-01-2024-01-07.csv"


class FakeManagementService:
    def __init__(self):
        self.calls = []

    def get_overview(self, *, range_start, range_end, user_id=None):
        self.calls.append({"range_start": range_start, "range_end": range_end, "user_id": user_id})
        return sample_overview()


@pytest.fixture()
def client_and_service():
    app = Flask(__name__)
    app.secret_key = "test-secret"
    service = FakeManagementService()
    register(app, SimpleNamespace(management_service=service))
    return app.test_client(), service


def _sign_in(client, role: str):
    with client.session_transaction() as sess:
        sess["user_id"] = "m1"
        sess["name"] = "Manager"
        sess["role"] = role


def test_export_requires_sign_in(client_and_service):
    client, service = client_and_service

    res = client.get("/api/management/export")

    assert res.status_code == 401
    assert res.get_json()["success"] is False
    assert service.calls == []


def test_export_rejects_employees_with_401(client_and_service):
    client, service = client_and_service
    _sign_in(client, "EMPLOYEE")

    res = client.get("/api/management/export")

    assert res.status_code == 401
    assert service.calls == []


def test_export_returns_csv_attachment(client_and_service):
    client, service = client_and_service
    _sign_in(client, "MANAGER")

    res = client.get("/api/management/export?period=custom&from=2024-01-01&to=2024-01-07&userId=")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "management-export-2024-01-01-2024-01-07.csv" in res.headers["Content-Disposition"]
    body = res.data.decode("utf-8-sig")
    assert body.startswith("Name,Email,Total-Min")
    assert service.calls[0]["user_id"] is None
    assert service.calls[0]["range_start"].isoformat() == "2024-01-01T00:00:00"


def test_overview_forbidden_for_employees(client_and_service):
    client, _ = client_and_service
    _sign_in(client, "EMPLOYEE")

    assert client.get("/management/overview").status_code == 403


def test_overview_json_for_admin(client_and_service):
    client, service = client_and_service
    _sign_in(client, "ADMIN")

    res = client.get("/management/overview?period=week&userId=u2")

    assert res.status_code == 200
    assert res.get_json()["per_user"][0]["overtime_minutes"] == -400
    assert service.calls[0]["user_id"] == "u2"
