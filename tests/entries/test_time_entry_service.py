from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.timebook.timebook.catalog.model import ActivityBlock
from src.timebook.timebook.core.enums import EntrySource, Role
from src.timebook.timebook.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.timebook.timebook.entries.model import FavoriteBlock, TimeEntry
from src.timebook.timebook.entries.service import TimeEntryService

NOW = datetime(2024, 3, 15, 18, 0)


class InMemoryEntries:
    def __init__(self):
        self.entries: dict[str, TimeEntry] = {}
        self.favorites: dict[tuple[str, int], FavoriteBlock] = {}

    def _touch_favorite(self, user_id, block_id, used_at):
        if used_at is None:
            return
        fav = self.favorites.get((user_id, block_id))
        self.favorites[(user_id, block_id)] = FavoriteBlock(
            favorite_id=fav.favorite_id if fav else len(self.favorites) + 1,
            user_id=user_id,
            block_id=block_id,
            last_used_at=used_at,
        )

    def get_by_id(self, entry_id):
        e = self.entries.get(entry_id)
        return e if e and e.deleted_at is None else None

    def create_entry(self, *, user_id, block_id, start, end, duration_minutes, note, source, favorite_used_at=None):
        entry_id = f"t{len(self.entries) + 1}"
        self.entries[entry_id] = TimeEntry(
            entry_id=entry_id,
            user_id=user_id,
            block_id=block_id,
            start=start,
            end=end,
            duration_minutes=duration_minutes,
            note=note,
            source=source,
        )
        self._touch_favorite(user_id, block_id, favorite_used_at)
        return entry_id

    def update_entry(
        self, *, entry_id, user_id, block_id, start, end, duration_minutes, note, edited_by_id, source=None, favorite_used_at=None
    ):
        current = self.entries[entry_id]
        self.entries[entry_id] = replace(
            current,
            block_id=block_id,
            start=start,
            end=end,
            duration_minutes=duration_minutes,
            note=note,
            edited_by_id=edited_by_id,
            source=source or current.source,
        )
        self._touch_favorite(user_id, block_id, favorite_used_at)
        return True

    def soft_delete(self, *, entry_id, user_id, deleted_at):
        self.entries[entry_id] = replace(self.entries[entry_id], deleted_at=deleted_at)
        return True


class InMemoryBlocks:
    def __init__(self, blocks):
        self._blocks = {b.block_id: b for b in blocks}

    def get_block(self, block_id):
        return self._blocks.get(block_id)


@pytest.fixture()
def repo():
    return InMemoryEntries()


@pytest.fixture()
def svc(repo):
    blocks = InMemoryBlocks(
        [
            ActivityBlock(block_id=101, label="Coding", category_id=1, is_billable=True),
            ActivityBlock(block_id=102, label="Review", category_id=1),
            ActivityBlock(block_id=199, label="Retired", category_id=1, active=False),
        ]
    )
    return TimeEntryService(repo, blocks)


def _create(svc, **overrides):
    fields = {
        "user_id": "ana",
        "block_id": "101",
        "work_date": "2024-03-15",
        "start": "09:00",
        "end": "10:30",
        "note": "  ",
        "now": NOW,
    }
    fields.update(overrides)
    return svc.create_entry(**fields)


def test_create_entry_computes_duration_and_touches_favorite(svc, repo):
    entry_id = _create(svc)

    entry = repo.entries[entry_id]
    assert entry.start == datetime(2024, 3, 15, 9, 0)
    assert entry.end == datetime(2024, 3, 15, 10, 30)
    assert entry.duration_minutes == 90
    assert entry.note is None
    assert entry.source == EntrySource.MANUAL
    assert repo.favorites[("ana", 101)].last_used_at == NOW


def test_quick_select_source_is_kept(svc, repo):
    entry_id = _create(svc, source=EntrySource.QUICK_SELECT)

    assert repo.entries[entry_id].source == EntrySource.QUICK_SELECT


def test_zero_length_entry_is_allowed(svc, repo):
    entry_id = _create(svc, start="09:00", end="09:00")

    assert repo.entries[entry_id].duration_minutes == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"block_id": ""},
        {"block_id": "999"},
        {"block_id": "199"},
        {"work_date": "15.03.2024"},
        {"start": "9am"},
        {"start": "10:00", "end": "09:59"},
    ],
)
def test_create_entry_validation(svc, overrides):
    with pytest.raises(ValidationError):
        _create(svc, **overrides)


def test_update_entry_by_owner(svc, repo):
    entry_id = _create(svc)

    svc.update_entry(
        user_id="ana",
        entry_id=entry_id,
        block_id=102,
        work_date="2024-03-15",
        start="13:00",
        end="13:45",
        note="pairing",
        now=NOW,
    )

    entry = repo.entries[entry_id]
    assert entry.block_id == 102
    assert entry.duration_minutes == 45
    assert entry.note == "pairing"
    assert entry.edited_by_id == "ana"
    assert ("ana", 102) in repo.favorites


def test_other_users_entries_are_not_found(svc):
    entry_id = _create(svc)

    with pytest.raises(NotFoundError):
        svc.update_entry(user_id="bo", entry_id=entry_id, block_id=101, work_date="2024-03-15", start="09:00", end="10:00")
    with pytest.raises(NotFoundError):
        svc.delete_entry(user_id="bo", entry_id=entry_id)


def test_delete_is_soft(svc, repo):
    entry_id = _create(svc)

    svc.delete_entry(user_id="ana", entry_id=entry_id, now=NOW)

    assert repo.entries[entry_id].deleted_at == NOW
    with pytest.raises(NotFoundError):
        svc.delete_entry(user_id="ana", entry_id=entry_id, now=NOW)


def test_admin_adjustment(svc, repo):
    entry_id = _create(svc)
    favorites_before = dict(repo.favorites)

    svc.adjust_entry(
        current_role=Role.ADMIN,
        editor_id="admin",
        entry_id=entry_id,
        block_id=102,
        work_date="2024-03-14",
        start="08:00",
        end="12:00",
    )

    entry = repo.entries[entry_id]
    assert entry.user_id == "ana"
    assert entry.source == EntrySource.ADMIN_ADJUSTMENT
    assert entry.edited_by_id == "admin"
    assert entry.duration_minutes == 240
    assert repo.favorites == favorites_before


def test_only_admins_adjust(svc):
    entry_id = _create(svc)

    with pytest.raises(AuthorizationError):
        svc.adjust_entry(
            current_role=Role.MANAGER,
            editor_id="m1",
            entry_id=entry_id,
            block_id=101,
            work_date="2024-03-15",
            start="09:00",
            end="10:00",
        )
