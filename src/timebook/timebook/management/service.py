from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.time_math import duration_minutes, round_half_up
from ..core.constants import (
    MISSING_CATEGORY_PLACEHOLDER,
    TOP_BLOCK_LIMIT,
    UNASSIGNED_CATEGORY_LABEL,
    UNKNOWN_BLOCK_LABEL,
    WORKDAYS_PER_WEEK,
)
from ..entries.model import TimeEntryReportRow
from ..entries.repository import TimeEntryRepository
from ..schedules.history import ScheduleHistory
from ..schedules.repository import ScheduleRepository
from ..users.repository import UserRepository
from .model import (
    BlockSummary,
    CategorySummary,
    EntryDetail,
    ManagementOverview,
    Totals,
    UserSummary,
)
from .ranges import count_workdays


class ManagementService:
    """Folds the time entries of a window into the management overview.

    Every call re-reads the store; all accumulators are local to the call.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        schedules: ScheduleRepository,
        users: UserRepository,
    ):
        self._entries = entries
        self._schedules = schedules
        self._users = users

    def get_overview(
        self,
        *,
        range_start: datetime,
        range_end: datetime,
        user_id: Optional[str] = None,
    ) -> ManagementOverview:
        rows = list(self._entries.get_report_rows(start=range_start, end=range_end, user_id=user_id or None))

        user_ids = list(dict.fromkeys(r.entry.user_id for r in rows))
        history = ScheduleHistory(self._schedules.list_for_users(user_ids))
        workdays = count_workdays(range_start, range_end)
        reference_date = range_end.date()

        totals = Totals()
        user_map: dict[str, UserSummary] = {}
        category_map: dict[int, CategorySummary] = {}
        block_map: dict[int, BlockSummary] = {}
        details: list[EntryDetail] = []

        for r in rows:
            entry = r.entry
            minutes = entry.duration_minutes
            if minutes is None:
                minutes = duration_minutes(entry.start, entry.end)
            billable = bool(r.block and r.block.is_billable)
            billable_minutes = minutes if billable else 0

            totals.total_minutes += minutes
            totals.billable_minutes += billable_minutes

            u = user_map.get(entry.user_id)
            if not u:
                u = UserSummary(user_id=entry.user_id, name=r.user_name, email=r.user_email)
                user_map[entry.user_id] = u
            u.total_minutes += minutes
            u.billable_minutes += billable_minutes

            if r.block:
                if r.category:
                    c = category_map.get(r.category.category_id)
                    if not c:
                        c = CategorySummary(category_id=r.category.category_id, name=r.category.name)
                        category_map[r.category.category_id] = c
                    c.minutes += minutes
                    c.billable_minutes += billable_minutes

                b = block_map.get(r.block.block_id)
                if not b:
                    b = BlockSummary(
                        block_id=r.block.block_id,
                        label=r.block.label,
                        category_name=r.category.name if r.category else MISSING_CATEGORY_PLACEHOLDER,
                    )
                    block_map[r.block.block_id] = b
                b.minutes += minutes
                b.billable_minutes += billable_minutes

            details.append(self._detail(r, minutes, billable))

        totals.non_billable_minutes = totals.total_minutes - totals.billable_minutes

        for u in user_map.values():
            schedule = history.active_as_of(u.user_id, reference_date)
            if schedule:
                u.expected_minutes = round_half_up(workdays * schedule.weekly_minutes / WORKDAYS_PER_WEEK)
            u.overtime_minutes = u.total_minutes - u.expected_minutes

        per_user = sorted(user_map.values(), key=lambda x: x.total_minutes, reverse=True)
        per_category = sorted(category_map.values(), key=lambda x: x.minutes, reverse=True)
        per_block = sorted(block_map.values(), key=lambda x: x.minutes, reverse=True)[:TOP_BLOCK_LIMIT]

        users = list(self._users.list_active())

        return ManagementOverview(
            range_start=range_start.isoformat(),
            range_end=range_end.isoformat(),
            totals=totals,
            per_user=per_user,
            per_category=per_category,
            per_block=per_block,
            entries=details,
            users=users,
        )

    @staticmethod
    def _detail(r: TimeEntryReportRow, minutes: int, billable: bool) -> EntryDetail:
        entry = r.entry
        return EntryDetail(
            entry_id=entry.entry_id,
            user_id=entry.user_id,
            user_name=r.user_name,
            block_id=r.block.block_id if r.block else None,
            block_label=r.block.label if r.block else UNKNOWN_BLOCK_LABEL,
            category_name=r.category.name if r.category else UNASSIGNED_CATEGORY_LABEL,
            start=entry.start.isoformat(),
            end=entry.end.isoformat() if entry.end else None,
            duration_minutes=minutes,
            note=entry.note,
            is_billable=billable,
        )
