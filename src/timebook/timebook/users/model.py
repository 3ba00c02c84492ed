from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: a plain data object (no DB access code). A deactivated user keeps its row so past
    entries stay attributed; only the credentials are cleared.
    """

    user_id: str
    name: str
    email: str
    password_hash: Optional[str]
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class UserRef:
    """Minimal user projection for pickers and filters."""

    user_id: str
    name: str
    email: str
