"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WEEKLY_MINUTES = 40 * 60
WORKDAYS_PER_WEEK = 5
MAX_WEEKLY_MINUTES = 7 * 24 * 60
MIN_PASSWORD_LENGTH = 8
MIN_NAME_LENGTH = 2

DASHBOARD_DAYS = 7
TOP_BLOCK_LIMIT = 15

WEEK_WINDOW_DAYS = 7
MONTH_WINDOW_DAYS = 30
YEAR_WINDOW_DAYS = 365

UNKNOWN_BLOCK_LABEL = "Unknown"
UNKNOWN_DASHBOARD_BLOCK_LABEL = "Unknown block"
UNASSIGNED_CATEGORY_LABEL = "Unassigned"
MISSING_CATEGORY_PLACEHOLDER = "-"
