"""Report window helpers: turning a period token into a range and counting workdays in it."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import end_of_day, now_local, parse_optional_date, start_of_day
from ..core.constants import MONTH_WINDOW_DAYS, WEEK_WINDOW_DAYS, YEAR_WINDOW_DAYS
from ..core.enums import RangePeriod

_SATURDAY = 5


def determine_range(
    period: Optional[str],
    from_: Optional[str] = None,
    to: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> tuple[datetime, datetime]:
    """Resolve `period` ('week' | 'month' | 'year' | 'custom') into [range_start, range_end].

    The upper bound is the end of `to` (or of today). Windows are inclusive of both days, so a
    week spans 7 calendar days. Unknown periods fall back to a week; malformed dates are ignored.
    A reversed custom range is swapped rather than rejected.
    """

    to_date = parse_optional_date(to)
    from_date = parse_optional_date(from_)

    upper = end_of_day(to_date) if to_date else end_of_day(now or now_local())

    if period == RangePeriod.MONTH.value:
        lower = start_of_day(upper - timedelta(days=MONTH_WINDOW_DAYS - 1))
    elif period == RangePeriod.YEAR.value:
        lower = start_of_day(upper - timedelta(days=YEAR_WINDOW_DAYS - 1))
    elif period == RangePeriod.CUSTOM.value and from_date:
        lower = start_of_day(from_date)
    else:
        lower = start_of_day(upper - timedelta(days=WEEK_WINDOW_DAYS - 1))

    if lower > upper:
        lower, upper = start_of_day(upper), end_of_day(lower)

    return lower, upper


def count_workdays(range_start: datetime | date, range_end: datetime | date) -> int:
    """Monday-Friday dates between the two days, inclusive. Holidays are not excluded."""

    cursor = start_of_day(range_start).date()
    last = start_of_day(range_end).date()
    count = 0
    while cursor <= last:
        if cursor.weekday() < _SATURDAY:
            count += 1
        cursor += timedelta(days=1)
    return count
