"""Pure time arithmetic shared by the entry service, the dashboard and the management reports.

All functions are stateless. Minute values are whole integers; labels are ``[-]HH:MM``.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional, Union

from ..core.enums import GroupingPeriod
from .datetime_utils import parse_iso_datetime

INVALID_BUCKET = "invalid"
UNKNOWN_BUCKET = "unknown"


def round_half_up(value: float) -> int:
    """Round .5 toward +infinity (stored durations were produced this way)."""
    return int(math.floor(value + 0.5))


def duration_minutes(start: datetime, end: Optional[datetime] = None) -> int:
    """Whole minutes between start and end, never negative; 0 while the entry has no end."""
    if end is None:
        return 0
    minutes = round_half_up((end - start).total_seconds() / 60)
    return max(minutes, 0)


def hours_label(minutes: int) -> str:
    """Format signed minutes as HH:MM, e.g. 125 -> '02:05', -65 -> '-01:05'."""
    sign = "-" if minutes < 0 else ""
    hours, rest = divmod(abs(int(minutes)), 60)
    return f"{sign}{hours:02d}:{rest:02d}"


def bucket_key(timestamp: Union[datetime, str, None], period: Union[GroupingPeriod, str]) -> str:
    """Calendar bucket id for grouping.

    day -> YYYY-MM-DD, week -> YYYY-KWww (ISO-8601 week-numbering year and week),
    month -> YYYY-MM, year -> YYYY. Aware timestamps are bucketed by their UTC date.
    """

    if isinstance(timestamp, str):
        try:
            timestamp = parse_iso_datetime(timestamp)
        except ValueError:
            return INVALID_BUCKET
    if not isinstance(timestamp, datetime):
        return INVALID_BUCKET

    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)

    try:
        period = GroupingPeriod(period)
    except ValueError:
        return UNKNOWN_BUCKET

    if period == GroupingPeriod.DAY:
        return timestamp.strftime("%Y-%m-%d")
    if period == GroupingPeriod.WEEK:
        iso_year, iso_week, _ = timestamp.date().isocalendar()
        return f"{iso_year}-KW{iso_week:02d}"
    if period == GroupingPeriod.MONTH:
        return f"{timestamp.year:04d}-{timestamp.month:02d}"
    return f"{timestamp.year:04d}"
