from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def list_for_users(self, user_ids: Sequence[str]) -> Sequence[WorkSchedule]:
        """All schedule records of the given users (any order)."""

        raise NotImplementedError

    def exists(self, *, user_id: str, valid_from: date) -> bool:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        valid_from: date,
        weekly_minutes: int,
        created_by_id: Optional[str] = None,
    ) -> int:
        """Append a schedule record.

        Returns schedule_id.
        """

        raise NotImplementedError
