"""Employee dashboard: the last week of one's own entries, totals and grouped views."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..catalog.model import ActivityBlock, ActivityCategory, CatalogData
from ..catalog.service import CatalogService
from ..common.datetime_utils import now_local, start_of_day, to_iso
from ..common.time_math import bucket_key, duration_minutes, hours_label
from ..core.constants import DASHBOARD_DAYS, UNASSIGNED_CATEGORY_LABEL, UNKNOWN_DASHBOARD_BLOCK_LABEL
from ..core.enums import GroupingPeriod
from ..core.exceptions import ValidationError
from .repository import TimeEntryRepository


@dataclass(frozen=True)
class DashboardEntry:
    entry_id: str
    block_id: Optional[int]
    block_label: str
    category_name: str
    category_color: Optional[str]
    is_billable: bool
    start: str
    end: Optional[str]
    duration_minutes: int
    duration_label: str
    note: Optional[str]
    source: str


@dataclass(frozen=True)
class EntryGroup:
    group_key: str
    minutes: int
    minutes_label: str
    entries: list[DashboardEntry] = field(default_factory=list)


@dataclass(frozen=True)
class TimeSummary:
    total_minutes: int
    billable_minutes: int
    non_billable_minutes: int
    working_days: int


@dataclass(frozen=True)
class FavoriteView:
    block_id: int
    label: str
    category_name: str
    last_used_at: Optional[str]


@dataclass(frozen=True)
class DashboardData:
    period: str
    range_start: str
    range_end: str
    totals: TimeSummary
    entries: list[DashboardEntry]
    groups: list[EntryGroup]
    favorites: list[FavoriteView]
    catalog: CatalogData

    def to_dict(self) -> dict:
        return asdict(self)


class DashboardService:
    def __init__(self, entries: TimeEntryRepository, catalog: CatalogService):
        self._entries = entries
        self._catalog = catalog

    def get_dashboard(
        self,
        *,
        user_id: str,
        period: str = GroupingPeriod.DAY.value,
        now: Optional[datetime] = None,
    ) -> DashboardData:
        try:
            grouping = GroupingPeriod(period)
        except ValueError:
            raise ValidationError("Grouping must be one of day, week, month, year")

        now = now or now_local()
        range_start = start_of_day(now) - timedelta(days=DASHBOARD_DAYS - 1)

        # Lookups span inactive records too; the picker and favorites only show active ones.
        everything = self._catalog.full_catalog()
        category_map = {c.category_id: c for c in everything.categories}
        block_map = {b.block_id: b for b in everything.blocks}

        own_entries = sorted(
            self._entries.list_for_user_since(user_id, range_start), key=lambda e: e.start, reverse=True
        )
        enriched = [self._enrich(entry, block_map, category_map) for entry in own_entries]

        active_catalog = self._catalog.active_catalog()
        active_block_ids = {b.block_id for b in active_catalog.blocks}
        favorites = [
            FavoriteView(
                block_id=f.block_id,
                label=block_map[f.block_id].label,
                category_name=self._category_name(block_map[f.block_id], category_map),
                last_used_at=to_iso(f.last_used_at),
            )
            for f in self._entries.list_favorites(user_id)
            if f.block_id in active_block_ids
        ]

        return DashboardData(
            period=grouping.value,
            range_start=range_start.isoformat(),
            range_end=now.isoformat(),
            totals=self._totals(enriched),
            entries=enriched,
            groups=self._group(enriched, grouping),
            favorites=favorites,
            catalog=active_catalog,
        )

    @staticmethod
    def _category_name(block: ActivityBlock, category_map: dict[int, ActivityCategory]) -> str:
        category = category_map.get(block.category_id)
        return category.name if category else UNASSIGNED_CATEGORY_LABEL

    def _enrich(self, entry, block_map, category_map) -> DashboardEntry:
        block = block_map.get(entry.block_id) if entry.block_id is not None else None
        category = category_map.get(block.category_id) if block else None
        minutes = entry.duration_minutes
        if minutes is None:
            minutes = duration_minutes(entry.start, entry.end)

        return DashboardEntry(
            entry_id=entry.entry_id,
            block_id=block.block_id if block else None,
            block_label=block.label if block else UNKNOWN_DASHBOARD_BLOCK_LABEL,
            category_name=category.name if category else UNASSIGNED_CATEGORY_LABEL,
            category_color=category.color if category else None,
            is_billable=bool(block and block.is_billable),
            start=entry.start.isoformat(),
            end=to_iso(entry.end),
            duration_minutes=minutes,
            duration_label=hours_label(minutes),
            note=entry.note,
            source=entry.source.value,
        )

    @staticmethod
    def _totals(entries: list[DashboardEntry]) -> TimeSummary:
        total = billable = 0
        days: set[str] = set()
        for e in entries:
            total += e.duration_minutes
            if e.is_billable:
                billable += e.duration_minutes
            days.add(e.start[:10])
        return TimeSummary(
            total_minutes=total,
            billable_minutes=billable,
            non_billable_minutes=total - billable,
            working_days=len(days),
        )

    @staticmethod
    def _group(entries: list[DashboardEntry], grouping: GroupingPeriod) -> list[EntryGroup]:
        grouped: dict[str, list[DashboardEntry]] = {}
        for e in entries:
            grouped.setdefault(bucket_key(e.start, grouping), []).append(e)

        out: list[EntryGroup] = []
        for key, items in grouped.items():
            minutes = sum(e.duration_minutes for e in items)
            out.append(EntryGroup(group_key=key, minutes=minutes, minutes_label=hours_label(minutes), entries=items))
        return out
