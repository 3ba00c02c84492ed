from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class WorkSchedule:
    """Contracted weekly minutes, effective from `valid_from` until a later record supersedes it.

    Records are immutable: changing hours means inserting a new record.
    """

    schedule_id: int
    user_id: str
    valid_from: date
    weekly_minutes: int
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
