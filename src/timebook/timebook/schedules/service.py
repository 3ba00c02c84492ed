from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.constants import MAX_WEEKLY_MINUTES
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .history import ScheduleHistory
from .model import WorkSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, users: UserRepository):
        self._schedules = schedules
        self._users = users

    def history_for(self, user_ids: Sequence[str]) -> ScheduleHistory:
        return ScheduleHistory(self._schedules.list_for_users(list(user_ids)))

    def list_for_user(self, *, current_role: Optional[Role], user_id: str) -> list[WorkSchedule]:
        if current_role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You are not allowed to view schedules")

        history = self.history_for([user_id])
        return list(reversed(history.for_user(user_id)))

    def add_schedule(
        self,
        *,
        current_role: Optional[Role],
        created_by_id: str,
        user_id: str,
        weekly_minutes: int,
        valid_from: date,
    ) -> int:
        """Append a new schedule record; existing records are never edited."""

        if current_role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You are not allowed to change schedules")

        try:
            weekly_minutes = int(weekly_minutes)
        except (TypeError, ValueError):
            raise ValidationError("Weekly minutes must be a number")
        if weekly_minutes < 0 or weekly_minutes > MAX_WEEKLY_MINUTES:
            raise ValidationError(f"Weekly minutes must be between 0 and {MAX_WEEKLY_MINUTES}")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        if self._schedules.exists(user_id=user_id, valid_from=valid_from):
            raise ValidationError("A schedule already starts on this date; choose a later date")

        schedule_id = self._schedules.create(
            user_id=user_id,
            valid_from=valid_from,
            weekly_minutes=weekly_minutes,
            created_by_id=created_by_id,
        )
        logger.info(
            "Schedule %s added for user %s: %s min/week from %s",
            schedule_id, user_id, weekly_minutes, valid_from.isoformat(),
        )
        return schedule_id
