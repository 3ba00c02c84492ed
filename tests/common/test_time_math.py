from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.timebook.timebook.common.time_math import bucket_key, duration_minutes, hours_label, round_half_up


def test_hours_label():
    assert hours_label(125) == "02:05"
    assert hours_label(-65) == "-01:05"
    assert hours_label(0) == "00:00"
    assert hours_label(6000) == "100:00"


def test_duration_minutes():
    start = datetime(2024, 1, 1, 9, 0)

    assert duration_minutes(start) == 0
    assert duration_minutes(start, start + timedelta(minutes=90)) == 90
    assert duration_minutes(start, start + timedelta(seconds=30)) == 1
    assert duration_minutes(start, start + timedelta(seconds=29)) == 0
    assert duration_minutes(start, start - timedelta(minutes=5)) == 0


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (1.49, 1)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_bucket_key_periods():
    ts = datetime(2024, 3, 15, 10, 0)

    assert bucket_key(ts, "day") == "2024-03-15"
    assert bucket_key(ts, "week") == "2024-KW11"
    assert bucket_key(ts, "month") == "2024-03"
    assert bucket_key(ts, "year") == "2024"


def test_bucket_key_iso_week_year_boundaries():
    assert bucket_key("2024-01-01T00:00:00Z", "week") == "2024-KW01"
    assert bucket_key("2021-01-03T12:00:00", "week") == "2020-KW53"
    assert bucket_key("2024-12-30T08:00:00", "week") == "2025-KW01"


def test_bucket_key_aware_values_use_utc_date():
    ts = datetime(2024, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))

    assert bucket_key(ts, "day") == "2023-12-31"


def test_bucket_key_invalid_inputs():
    assert bucket_key("yesterday", "day") == "invalid"
    assert bucket_key(None, "day") == "invalid"
    assert bucket_key(datetime(2024, 1, 1), "quarter") == "unknown"
