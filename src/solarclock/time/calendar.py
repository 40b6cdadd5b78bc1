"""UTC calendar helpers shared by the solver and its callers."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta, timezone

ONE_DAY = timedelta(days=1)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to timezone-aware UTC, assuming UTC for naive values."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def day_of_year(dt: datetime) -> int:
    """Return the 1-based ordinal day of the year of `dt` in UTC."""
    return to_utc(dt).timetuple().tm_yday


def utc_day(dt: datetime) -> date:
    """Return the UTC calendar date of `dt`."""
    return to_utc(dt).date()


def utc_midnight(dt: datetime) -> datetime:
    """Return midnight UTC at the start of the UTC day containing `dt`."""
    return to_utc(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def iter_days(start_utc: datetime, end_utc: datetime) -> Iterator[datetime]:
    """Yield instants one day apart from `start_utc` while before `end_utc`."""
    current = to_utc(start_utc)
    end = to_utc(end_utc)
    if end < current:
        raise ValueError("end must be after start")
    while current < end:
        yield current
        current = current + ONE_DAY


def with_utc_offset(dt: datetime, offset_hours: float) -> datetime:
    """Present an instant in a fixed UTC offset. No timezone database is used."""
    if not -24.0 < offset_hours < 24.0:
        raise ValueError("offset_hours must be within (-24, 24)")
    return to_utc(dt).astimezone(timezone(timedelta(hours=offset_hours)))
