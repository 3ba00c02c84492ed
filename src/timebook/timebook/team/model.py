from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TeamMember:
    user_id: str
    name: str
    email: str
    is_active: bool
    created_at: Optional[str]
    last_active_at: Optional[str]
    entry_count: int


@dataclass(frozen=True)
class TeamOverview:
    active: list[TeamMember] = field(default_factory=list)
    inactive: list[TeamMember] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
