from __future__ import annotations

from datetime import date

import pytest

from src.timebook.timebook.core.enums import Role
from src.timebook.timebook.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.timebook.timebook.schedules.model import WorkSchedule
from src.timebook.timebook.schedules.service import ScheduleService
from src.timebook.timebook.users.model import User


class FakeScheduleRepo:
    def __init__(self):
        self._items: list[WorkSchedule] = []
        self._next_id = 1

    def list_for_users(self, user_ids):
        return [s for s in self._items if s.user_id in set(user_ids)]

    def exists(self, *, user_id, valid_from):
        return any(s.user_id == user_id and s.valid_from == valid_from for s in self._items)

    def create(self, *, user_id, valid_from, weekly_minutes, created_by_id=None):
        sid = self._next_id
        self._next_id += 1
        self._items.append(
            WorkSchedule(
                schedule_id=sid,
                user_id=user_id,
                valid_from=valid_from,
                weekly_minutes=weekly_minutes,
                created_by_id=created_by_id,
            )
        )
        return sid


class FakeUserRepo:
    def __init__(self, users):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._users.get(user_id)


@pytest.fixture()
def svc():
    users = FakeUserRepo([User(user_id="e1", name="Emp", email="e1@example.com", password_hash=None, role=Role.EMPLOYEE)])
    return ScheduleService(FakeScheduleRepo(), users)


def test_add_and_list_newest_first(svc):
    svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="e1", weekly_minutes=2400, valid_from=date(2024, 1, 1))
    svc.add_schedule(current_role=Role.ADMIN, created_by_id="a1", user_id="e1", weekly_minutes="1200", valid_from=date(2024, 6, 1))

    items = svc.list_for_user(current_role=Role.MANAGER, user_id="e1")

    assert [s.weekly_minutes for s in items] == [1200, 2400]
    assert svc.history_for(["e1"]).active_as_of("e1", date(2024, 7, 1)).weekly_minutes == 1200


def test_same_valid_from_is_rejected(svc):
    svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="e1", weekly_minutes=2400, valid_from=date(2024, 1, 1))

    with pytest.raises(ValidationError):
        svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="e1", weekly_minutes=2000, valid_from=date(2024, 1, 1))


@pytest.mark.parametrize("weekly", [-1, 10081, "abc", None])
def test_weekly_minutes_bounds(svc, weekly):
    with pytest.raises(ValidationError):
        svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="e1", weekly_minutes=weekly, valid_from=date(2024, 1, 1))


def test_zero_and_full_week_are_allowed(svc):
    svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="e1", weekly_minutes=0, valid_from=date(2024, 1, 1))
    svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="e1", weekly_minutes=10080, valid_from=date(2024, 1, 2))


def test_unknown_user(svc):
    with pytest.raises(NotFoundError):
        svc.add_schedule(current_role=Role.MANAGER, created_by_id="m1", user_id="nobody", weekly_minutes=2400, valid_from=date(2024, 1, 1))


def test_employees_cannot_touch_schedules(svc):
    with pytest.raises(AuthorizationError):
        svc.add_schedule(current_role=Role.EMPLOYEE, created_by_id="e1", user_id="e1", weekly_minutes=2400, valid_from=date(2024, 1, 1))
    with pytest.raises(AuthorizationError):
        svc.list_for_user(current_role=None, user_id="e1")
