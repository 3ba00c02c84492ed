from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ActivityTag:
    tag_id: int
    name: str
    category_id: Optional[int] = None
    description: Optional[str] = None
    sort_order: int = 0
    active: bool = True


@dataclass(frozen=True)
class ActivityCategory:
    category_id: int
    name: str
    color: Optional[str] = None
    description: Optional[str] = None
    sort_order: int = 0
    active: bool = True
    tags: tuple[ActivityTag, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ActivityBlock:
    """Smallest unit users log time against. Billability lives here, not on entries."""

    block_id: int
    label: str
    category_id: int
    tag_id: Optional[int] = None
    description: Optional[str] = None
    is_billable: bool = False
    active: bool = True
    sort_order: int = 0


@dataclass(frozen=True)
class CatalogData:
    categories: list[ActivityCategory]
    blocks: list[ActivityBlock]
    tags: list[ActivityTag]
