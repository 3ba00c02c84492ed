from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..catalog.repository import CatalogRepository
from ..common.datetime_utils import combine_date_time, now_local, parse_clock_time, parse_iso_date
from ..common.time_math import duration_minutes
from ..common.validators import optional_text, require_positive_int
from ..core.enums import EntrySource, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .repository import TimeEntryRepository


@dataclass(frozen=True)
class EntryInterval:
    block_id: int
    start: datetime
    end: datetime
    duration_minutes: int
    note: Optional[str]


class TimeEntryService:
    """Use case: a user logs, edits and removes their own time entries.

    Every create/update also refreshes the user's favorite for the block, in the same transaction.
    """

    def __init__(self, entries: TimeEntryRepository, catalog: CatalogRepository):
        self._entries = entries
        self._catalog = catalog

    def _parse_interval(self, *, block_id, work_date: str, start: str, end: str, note: Optional[str]) -> EntryInterval:
        block_id = require_positive_int(block_id, "Activity block")
        block = self._catalog.get_block(block_id)
        if not block:
            raise ValidationError("Activity block does not exist")
        if not block.active:
            raise ValidationError("Activity block is inactive")

        try:
            day = parse_iso_date((work_date or "").strip())
            start_at = combine_date_time(day, parse_clock_time((start or "").strip()))
            end_at = combine_date_time(day, parse_clock_time((end or "").strip()))
        except ValueError:
            raise ValidationError("Date must be YYYY-MM-DD and times HH:MM")

        if end_at < start_at:
            raise ValidationError("End time must not be before start time")

        return EntryInterval(
            block_id=block_id,
            start=start_at,
            end=end_at,
            duration_minutes=duration_minutes(start_at, end_at),
            note=optional_text(note),
        )

    def create_entry(
        self,
        *,
        user_id: str,
        block_id,
        work_date: str,
        start: str,
        end: str,
        note: Optional[str] = None,
        source: EntrySource = EntrySource.MANUAL,
        now: Optional[datetime] = None,
    ) -> str:
        interval = self._parse_interval(block_id=block_id, work_date=work_date, start=start, end=end, note=note)
        return self._entries.create_entry(
            user_id=user_id,
            block_id=interval.block_id,
            start=interval.start,
            end=interval.end,
            duration_minutes=interval.duration_minutes,
            note=interval.note,
            source=source,
            favorite_used_at=now or now_local(),
        )

    def update_entry(
        self,
        *,
        user_id: str,
        entry_id: str,
        block_id,
        work_date: str,
        start: str,
        end: str,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        existing = self._entries.get_by_id(entry_id)
        if not existing or existing.user_id != user_id:
            raise NotFoundError("Time entry not found")

        interval = self._parse_interval(block_id=block_id, work_date=work_date, start=start, end=end, note=note)
        self._entries.update_entry(
            entry_id=entry_id,
            user_id=user_id,
            block_id=interval.block_id,
            start=interval.start,
            end=interval.end,
            duration_minutes=interval.duration_minutes,
            note=interval.note,
            edited_by_id=user_id,
            favorite_used_at=now or now_local(),
        )

    def delete_entry(self, *, user_id: str, entry_id: str, now: Optional[datetime] = None) -> None:
        existing = self._entries.get_by_id(entry_id)
        if not existing or existing.user_id != user_id:
            raise NotFoundError("Time entry not found")

        if not self._entries.soft_delete(entry_id=entry_id, user_id=user_id, deleted_at=now or now_local()):
            raise NotFoundError("Time entry not found")

    def adjust_entry(
        self,
        *,
        current_role: Optional[Role],
        editor_id: str,
        entry_id: str,
        block_id,
        work_date: str,
        start: str,
        end: str,
        note: Optional[str] = None,
    ) -> None:
        """Administrator correction of any user's entry; the owner's favorites stay untouched."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can adjust other users' entries")

        existing = self._entries.get_by_id(entry_id)
        if not existing:
            raise NotFoundError("Time entry not found")

        interval = self._parse_interval(block_id=block_id, work_date=work_date, start=start, end=end, note=note)
        self._entries.update_entry(
            entry_id=entry_id,
            user_id=existing.user_id,
            block_id=interval.block_id,
            start=interval.start,
            end=interval.end,
            duration_minutes=interval.duration_minutes,
            note=interval.note,
            edited_by_id=editor_id,
            source=EntrySource.ADMIN_ADJUSTMENT,
        )
