from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..catalog.model import ActivityBlock, ActivityCategory
from ..core.enums import EntrySource


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one logged work interval.

    `block_id` is None once the referenced block row is gone. Entries are soft-deleted only.
    """

    entry_id: str
    user_id: str
    block_id: Optional[int]
    start: datetime
    end: Optional[datetime]
    duration_minutes: Optional[int]
    note: Optional[str] = None
    source: EntrySource = EntrySource.MANUAL
    edited_by_id: Optional[str] = None
    deleted_at: Optional[datetime] = None


@dataclass(frozen=True)
class FavoriteBlock:
    favorite_id: int
    user_id: str
    block_id: int
    last_used_at: Optional[datetime] = None


@dataclass(frozen=True)
class TimeEntryReportRow:
    """Read-model for reports: an entry joined to its user, block and category.

    `block` and `category` are None when the join does not resolve.
    """

    entry: TimeEntry
    user_name: str
    user_email: str
    block: Optional[ActivityBlock] = None
    category: Optional[ActivityCategory] = None


@dataclass(frozen=True)
class EntryStats:
    user_id: str
    entry_count: int
    last_active_at: Optional[datetime]
