from __future__ import annotations

from bisect import bisect_right
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from .model import WorkSchedule


class ScheduleHistory:
    """Per-user schedule log ordered by (valid_from, schedule_id).

    `active_as_of` returns the record with the greatest valid_from <= reference date; among
    records sharing that date the highest schedule_id wins.
    """

    def __init__(self, schedules: Iterable[WorkSchedule]):
        grouped: dict[str, list[WorkSchedule]] = defaultdict(list)
        for schedule in schedules:
            grouped[schedule.user_id].append(schedule)

        self._by_user: dict[str, tuple[WorkSchedule, ...]] = {}
        self._keys: dict[str, list[date]] = {}
        for user_id, items in grouped.items():
            ordered = tuple(sorted(items, key=lambda s: (s.valid_from, s.schedule_id)))
            self._by_user[user_id] = ordered
            self._keys[user_id] = [s.valid_from for s in ordered]

    def for_user(self, user_id: str) -> Sequence[WorkSchedule]:
        return self._by_user.get(user_id, ())

    def active_as_of(self, user_id: str, reference: date) -> Optional[WorkSchedule]:
        keys = self._keys.get(user_id)
        if not keys:
            return None
        idx = bisect_right(keys, reference)
        if idx == 0:
            return None
        return self._by_user[user_id][idx - 1]
