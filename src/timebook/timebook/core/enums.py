from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


MANAGEMENT_ROLES = frozenset({Role.MANAGER, Role.ADMIN})


class EntrySource(str, Enum):
    """How a time entry came into the system."""

    MANUAL = "MANUAL"
    QUICK_SELECT = "QUICK_SELECT"
    IMPORT = "IMPORT"
    ADMIN_ADJUSTMENT = "ADMIN_ADJUSTMENT"


class GroupingPeriod(str, Enum):
    """Calendar bucket used to group entries on the dashboard."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class RangePeriod(str, Enum):
    """Report window selected on the management pages."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"
