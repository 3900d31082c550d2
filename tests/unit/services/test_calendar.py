"""Tests for calendar window helpers."""

from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo

from stockledger.core.services.calendar import day_bounds, ensure_aware, local_date, week_bounds


def test_ensure_aware_attaches_zone():
    naive = datetime(2024, 3, 1, 9, 0)
    assert ensure_aware(naive, UTC).tzinfo is UTC
    assert ensure_aware(naive).tzinfo is not None


def test_ensure_aware_keeps_existing_zone():
    aware = datetime(2024, 3, 1, 9, 0, tzinfo=ZoneInfo("Africa/Kinshasa"))
    assert ensure_aware(aware, UTC) is aware


def test_local_date_converts_zone():
    late_utc = datetime(2024, 2, 29, 23, 30, tzinfo=UTC)
    assert local_date(late_utc, UTC) == date(2024, 2, 29)
    assert local_date(late_utc, ZoneInfo("Africa/Kinshasa")) == date(2024, 3, 1)


def test_day_bounds_are_inclusive():
    start, end = day_bounds(date(2024, 3, 1), UTC)
    assert start == datetime.combine(date(2024, 3, 1), time.min, tzinfo=UTC)
    assert end == datetime.combine(date(2024, 3, 1), time.max, tzinfo=UTC)


def test_week_bounds_monday_to_sunday():
    assert week_bounds(date(2024, 3, 4)) == (date(2024, 3, 4), date(2024, 3, 10))
    assert week_bounds(date(2024, 3, 10)) == (date(2024, 3, 4), date(2024, 3, 10))
    # Year boundary
    assert week_bounds(date(2025, 1, 1)) == (date(2024, 12, 30), date(2025, 1, 5))
