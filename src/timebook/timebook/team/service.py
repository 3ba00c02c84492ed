from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import to_iso
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_WEEKLY_MINUTES, MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..entries.repository import TimeEntryRepository
from ..users.repository import UserRepository
from .model import TeamMember, TeamOverview

logger = logging.getLogger(__name__)


class TeamService:
    """Use case: managers look after the employee roster."""

    def __init__(self, users: UserRepository, entries: TimeEntryRepository):
        self._users = users
        self._entries = entries

    def overview(self) -> TeamOverview:
        employees = list(self._users.list_by_role(Role.EMPLOYEE))
        stats = self._entries.entry_stats([u.user_id for u in employees]) if employees else {}

        active: list[TeamMember] = []
        inactive: list[TeamMember] = []
        for u in employees:
            s = stats.get(u.user_id)
            member = TeamMember(
                user_id=u.user_id,
                name=u.name,
                email=u.email,
                is_active=u.is_active,
                created_at=to_iso(u.created_at),
                last_active_at=to_iso(s.last_active_at) if s else None,
                entry_count=s.entry_count if s else 0,
            )
            (active if u.is_active else inactive).append(member)

        return TeamOverview(
            active=sorted(active, key=lambda m: m.name),
            inactive=sorted(inactive, key=lambda m: m.name),
        )

    def create_employee(
        self,
        *,
        current_role: Optional[Role],
        created_by_id: Optional[str],
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        today: Optional[date] = None,
    ) -> str:
        """Create an EMPLOYEE plus a default 40h schedule valid from today, in one transaction."""

        if current_role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You are not allowed to add employees")

        name = require_non_empty(name, "Name")
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(f"Name must be at least {MIN_NAME_LENGTH} characters")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if password != confirm_password:
            raise ValidationError("Passwords do not match")

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user_id = self._users.create_employee(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            valid_from=today or date.today(),
            weekly_minutes=DEFAULT_WEEKLY_MINUTES,
            created_by_id=created_by_id,
        )
        logger.info("Employee %s created by %s", user_id, created_by_id)
        return user_id

    def deactivate_employee(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: str,
        user_id: str,
    ) -> None:
        if current_role not in MANAGEMENT_ROLES:
            raise AuthorizationError("You are not allowed to deactivate employees")

        if user_id == current_user_id:
            raise ValidationError("You cannot deactivate your own account")

        user = self._users.get_by_id(user_id)
        if not user or user.role != Role.EMPLOYEE:
            raise NotFoundError("Employee not found")

        self._users.deactivate(user_id)
        logger.info("Employee %s deactivated by %s", user_id, current_user_id)
