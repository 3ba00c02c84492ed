from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional

from ..users.model import UserRef


@dataclass
class Totals:
    total_minutes: int = 0
    billable_minutes: int = 0
    non_billable_minutes: int = 0


@dataclass
class UserSummary:
    user_id: str
    name: str
    email: str
    total_minutes: int = 0
    billable_minutes: int = 0
    expected_minutes: int = 0
    overtime_minutes: int = 0


@dataclass
class CategorySummary:
    category_id: int
    name: str
    minutes: int = 0
    billable_minutes: int = 0


@dataclass
class BlockSummary:
    block_id: int
    label: str
    category_name: str
    minutes: int = 0
    billable_minutes: int = 0


@dataclass(frozen=True)
class EntryDetail:
    entry_id: str
    user_id: str
    user_name: str
    block_id: Optional[int]
    block_label: str
    category_name: str
    start: str
    end: Optional[str]
    duration_minutes: int
    note: Optional[str]
    is_billable: bool


@dataclass(frozen=True)
class ManagementOverview:
    range_start: str
    range_end: str
    totals: Totals
    per_user: list[UserSummary] = field(default_factory=list)
    per_category: list[CategorySummary] = field(default_factory=list)
    per_block: list[BlockSummary] = field(default_factory=list)
    entries: list[EntryDetail] = field(default_factory=list)
    users: list[UserRef] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
