"""Unit tests for SRS time helpers."""

from datetime import date, datetime, timedelta, timezone

from studyloop.srs.time import (
    add_days_iso,
    date_to_iso_z,
    days_ago_iso,
    parse_iso_z,
    to_date,
    to_utc_datetime,
    utc_datetime_to_iso_z,
)


def test_utc_datetime_to_iso_z_second_precision():
    dt = datetime(2025, 12, 13, 0, 0, 0, 999999, tzinfo=timezone.utc)
    assert utc_datetime_to_iso_z(dt) == "2025-12-13T00:00:00Z"


def test_utc_datetime_to_iso_z_converts_offsets():
    dt = datetime(2025, 12, 13, 1, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert utc_datetime_to_iso_z(dt) == "2025-12-12T23:00:00Z"


def test_parse_iso_z_accepts_z_fractional_seconds_and_dates():
    assert parse_iso_z("2025-12-13T00:00:00Z").tzinfo is not None
    assert parse_iso_z("2025-12-13T00:00:00.123456Z").tzinfo is not None
    assert parse_iso_z("2025-12-13") == datetime(2025, 12, 13, tzinfo=timezone.utc)


def test_to_date_uses_utc_calendar_day():
    assert to_date("2025-12-13T23:30:00-02:00") == date(2025, 12, 14)
    assert to_date(date(2025, 12, 13)) == date(2025, 12, 13)
    assert to_date(datetime(2025, 12, 13, 5, 0)) == date(2025, 12, 13)


def test_to_utc_datetime_from_date_is_midnight():
    assert to_utc_datetime(date(2025, 12, 13)) == datetime(2025, 12, 13, tzinfo=timezone.utc)


def test_date_to_iso_z():
    assert date_to_iso_z(date(2026, 1, 3)) == "2026-01-03T00:00:00Z"


def test_add_days_iso_rollover():
    now = datetime(2025, 12, 30, 0, 0, 0, tzinfo=timezone.utc)
    assert add_days_iso(now, 4) == "2026-01-03T00:00:00Z"


def test_days_ago_iso():
    now = datetime(2026, 1, 10, 6, 0, 0, tzinfo=timezone.utc)
    assert days_ago_iso(now, 30) == "2025-12-11T06:00:00Z"
