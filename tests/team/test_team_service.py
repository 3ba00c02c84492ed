from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest
from werkzeug.security import check_password_hash

from src.timebook.timebook.core.enums import Role
from src.timebook.timebook.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.timebook.timebook.entries.model import EntryStats
from src.timebook.timebook.team.service import TeamService
from src.timebook.timebook.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self.by_id: dict[str, User] = {u.user_id: u for u in users}
        self.schedules: list[dict] = []

    def get_by_id(self, user_id):
        return self.by_id.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.by_id.values() if u.email == email), None)

    def list_by_role(self, role):
        return sorted((u for u in self.by_id.values() if u.role == role), key=lambda u: u.name)

    def create_employee(self, *, name, email, password_hash, valid_from, weekly_minutes, created_by_id):
        user_id = f"u{len(self.by_id) + 1}"
        self.by_id[user_id] = User(
            user_id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=Role.EMPLOYEE,
        )
        self.schedules.append({"user_id": user_id, "valid_from": valid_from, "weekly_minutes": weekly_minutes})
        return user_id

    def deactivate(self, user_id):
        self.by_id[user_id] = replace(self.by_id[user_id], is_active=False, password_hash=None)
        return True


class FakeEntryStats:
    def __init__(self, stats):
        self._stats = stats
        self.asked_for = None

    def entry_stats(self, user_ids):
        self.asked_for = list(user_ids)
        return {k: v for k, v in self._stats.items() if k in user_ids}


def _user(user_id, name, *, role=Role.EMPLOYEE, active=True):
    return User(
        user_id=user_id,
        name=name,
        email=f"{user_id}@example.com",
        password_hash="hash",
        role=role,
        is_active=active,
        created_at=datetime(2024, 1, 1, 8, 0),
    )


def test_overview_splits_active_and_inactive_employees():
    users = InMemoryUsers(
        [
            _user("e2", "Zoe"),
            _user("e1", "Abe"),
            _user("e3", "Max", active=False),
            _user("m1", "Boss", role=Role.MANAGER),
        ]
    )
    stats = FakeEntryStats({"e1": EntryStats(user_id="e1", entry_count=3, last_active_at=datetime(2024, 2, 1, 9, 0))})

    overview = TeamService(users, stats).overview()

    assert [m.name for m in overview.active] == ["Abe", "Zoe"]
    assert [m.name for m in overview.inactive] == ["Max"]
    assert overview.active[0].entry_count == 3
    assert overview.active[0].last_active_at == "2024-02-01T09:00:00"
    assert overview.active[1].entry_count == 0
    assert overview.active[1].last_active_at is None
    assert "m1" not in stats.asked_for
    assert overview.to_dict()["inactive"][0]["is_active"] is False


def test_create_employee_with_default_schedule():
    users = InMemoryUsers([_user("m1", "Boss", role=Role.MANAGER)])
    svc = TeamService(users, FakeEntryStats({}))

    user_id = svc.create_employee(
        current_role=Role.MANAGER,
        created_by_id="m1",
        name="  New Hire ",
        email="New.Hire@Example.com",
        password="s3cret-pass",
        confirm_password="s3cret-pass",
        today=date(2024, 5, 2),
    )

    created = users.by_id[user_id]
    assert created.email == "new.hire@example.com"
    assert created.name == "New Hire"
    assert created.role == Role.EMPLOYEE
    assert check_password_hash(created.password_hash, "s3cret-pass")
    assert users.schedules == [{"user_id": user_id, "valid_from": date(2024, 5, 2), "weekly_minutes": 2400}]


@pytest.mark.parametrize(
    "name, email, password, confirm",
    [
        ("A", "a@example.com", "s3cret-pass", "s3cret-pass"),
        ("Ana", "not-an-email", "s3cret-pass", "s3cret-pass"),
        ("Ana", "a@example.com", "short", "short"),
        ("Ana", "a@example.com", "s3cret-pass", "other-pass"),
        ("Ana", "e1@example.com", "s3cret-pass", "s3cret-pass"),
    ],
)
def test_create_employee_validation(name, email, password, confirm):
    svc = TeamService(InMemoryUsers([_user("e1", "Abe")]), FakeEntryStats({}))

    with pytest.raises(ValidationError):
        svc.create_employee(
            current_role=Role.ADMIN,
            created_by_id="a1",
            name=name,
            email=email,
            password=password,
            confirm_password=confirm,
        )


def test_employees_cannot_manage_the_team():
    svc = TeamService(InMemoryUsers([_user("e1", "Abe")]), FakeEntryStats({}))

    with pytest.raises(AuthorizationError):
        svc.create_employee(
            current_role=Role.EMPLOYEE,
            created_by_id="e1",
            name="Ana",
            email="ana@example.com",
            password="s3cret-pass",
            confirm_password="s3cret-pass",
        )
    with pytest.raises(AuthorizationError):
        svc.deactivate_employee(current_role=Role.EMPLOYEE, current_user_id="e1", user_id="e1")


def test_deactivate_employee_clears_credentials():
    users = InMemoryUsers([_user("e1", "Abe")])

    TeamService(users, FakeEntryStats({})).deactivate_employee(current_role=Role.MANAGER, current_user_id="m1", user_id="e1")

    assert users.by_id["e1"].is_active is False
    assert users.by_id["e1"].password_hash is None


def test_deactivate_rules():
    users = InMemoryUsers([_user("m1", "Boss", role=Role.MANAGER), _user("m2", "Other", role=Role.MANAGER)])
    svc = TeamService(users, FakeEntryStats({}))

    with pytest.raises(ValidationError):
        svc.deactivate_employee(current_role=Role.MANAGER, current_user_id="m1", user_id="m1")
    with pytest.raises(NotFoundError):
        svc.deactivate_employee(current_role=Role.MANAGER, current_user_id="m1", user_id="m2")
    with pytest.raises(NotFoundError):
        svc.deactivate_employee(current_role=Role.MANAGER, current_user_id="m1", user_id="ghost")
