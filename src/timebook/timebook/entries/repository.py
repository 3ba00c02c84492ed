from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EntrySource
from .model import EntryStats, FavoriteBlock, TimeEntry, TimeEntryReportRow


class TimeEntryRepository(Protocol):
    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        """Non-deleted entry or None."""

        raise NotImplementedError

    def list_for_user_since(self, user_id: str, since: datetime) -> Sequence[TimeEntry]:
        """Non-deleted entries of a user starting at/after `since`, newest first."""

        raise NotImplementedError

    def create_entry(
        self,
        *,
        user_id: str,
        block_id: int,
        start: datetime,
        end: Optional[datetime],
        duration_minutes: Optional[int],
        note: Optional[str],
        source: EntrySource,
        favorite_used_at: Optional[datetime] = None,
    ) -> str:
        """Insert an entry; with `favorite_used_at` also upsert the (user, block) favorite.

        Both writes belong to one transaction. Returns entry_id.
        """

        raise NotImplementedError

    def update_entry(
        self,
        *,
        entry_id: str,
        user_id: str,
        block_id: int,
        start: datetime,
        end: Optional[datetime],
        duration_minutes: Optional[int],
        note: Optional[str],
        edited_by_id: str,
        source: Optional[EntrySource] = None,
        favorite_used_at: Optional[datetime] = None,
    ) -> bool:
        """Update a non-deleted entry owned by `user_id` (and the favorite, same transaction)."""

        raise NotImplementedError

    def soft_delete(self, *, entry_id: str, user_id: str, deleted_at: datetime) -> bool:
        raise NotImplementedError

    def list_favorites(self, user_id: str) -> Sequence[FavoriteBlock]:
        """Favorites ordered by last use, most recent first."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
    ) -> Sequence[TimeEntryReportRow]:
        """Non-deleted entries with start in [start, end], newest first, joined for reporting."""

        raise NotImplementedError

    def entry_stats(self, user_ids: Sequence[str]) -> dict[str, EntryStats]:
        """Count and latest start of non-deleted entries per user (users without entries omitted)."""

        raise NotImplementedError
