from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User, UserRef


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self) -> Sequence[UserRef]:
        """Active users ordered by name (filter pickers)."""

        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        """All users of a role, active or not, ordered by name."""

        raise NotImplementedError

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        valid_from: date,
        weekly_minutes: int,
        created_by_id: Optional[str],
    ) -> str:
        """Create an EMPLOYEE together with its first work schedule, atomically.

        Returns user_id.
        """

        raise NotImplementedError

    def deactivate(self, user_id: str) -> bool:
        """Clear credentials and flip is_active off; the row is never deleted."""

        raise NotImplementedError

    def update_password(self, user_id: str, password_hash: str) -> bool:
        raise NotImplementedError
