"""UTC time helpers for SRS scheduling.

All ISO strings produced by this module are UTC and end with 'Z', with second precision:
YYYY-MM-DDTHH:MM:SSZ

Review scheduling works on calendar days, so due dates are stored as midnight UTC
of the day the card becomes due.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Return the current UTC calendar date."""
    return utc_now().date()


def utc_now_iso() -> str:
    """Return current time as UTC ISO string with second precision and trailing 'Z'."""
    return utc_datetime_to_iso_z(utc_now())


def utc_datetime_to_iso_z(dt: datetime) -> str:
    """Format a datetime as UTC ISO string with second precision and trailing 'Z'."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    dt = dt.replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


def parse_iso_z(s: str) -> datetime:
    """Parse an ISO-8601 string ending with 'Z' (or '+00:00') into UTC datetime.

    Accepts both second precision and fractional seconds, and bare dates
    (YYYY-MM-DD), which are read as midnight UTC.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_datetime(value: str | date | datetime) -> datetime:
    """Coerce an ISO string, date or datetime into an aware UTC datetime."""
    if isinstance(value, str):
        return parse_iso_z(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def to_date(value: str | date | datetime) -> date:
    """Return the UTC calendar date of an ISO string, date or datetime."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_utc_datetime(value).date()


def date_to_iso_z(d: date) -> str:
    """Format a calendar date as midnight UTC ('YYYY-MM-DDT00:00:00Z')."""
    return utc_datetime_to_iso_z(to_utc_datetime(d))


def add_days_iso(now: datetime, days: int) -> str:
    return utc_datetime_to_iso_z(now + timedelta(days=days))


def days_ago_iso(now: datetime, days: int) -> str:
    return add_days_iso(now, -days)
