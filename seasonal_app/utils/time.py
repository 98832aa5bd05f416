"""
Time semantics utilities for exchange-local calendar reasoning.

US equity releases are scheduled in Eastern time, so intraday extractors
convert bar timestamps to Eastern wall-clock time with the explicit US
daylight saving rule: DST starts on the second Sunday of March at 2:00 AM
local (07:00 UTC) and ends on the first Sunday of November at 2:00 AM local
(06:00 UTC). Naive timestamps are treated as exchange-local already, which is
how daily bars are delivered.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Union

EST_OFFSET = timedelta(hours=-5)
EDT_OFFSET = timedelta(hours=-4)

DateLike = Union[date, datetime]


def _nth_sunday(year: int, month: int, n: int) -> date:
    first = date(year, month, 1)
    offset = (6 - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def dst_bounds_utc(year: int) -> tuple[datetime, datetime]:
    """
    Get the UTC instants at which US daylight saving time starts and ends.

    Args:
        year: Calendar year

    Returns:
        (start, end) as timezone-aware UTC datetimes
    """
    start = _nth_sunday(year, 3, 2)
    end = _nth_sunday(year, 11, 1)
    return (
        datetime(start.year, start.month, start.day, 7, tzinfo=timezone.utc),
        datetime(end.year, end.month, end.day, 6, tzinfo=timezone.utc),
    )


def is_us_dst(dt: datetime) -> bool:
    """Check whether an aware (or naive UTC) instant falls inside US DST."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc_dt = dt.astimezone(timezone.utc)
    start, end = dst_bounds_utc(utc_dt.year)
    return start <= utc_dt < end


def to_exchange_time(dt: datetime) -> datetime:
    """
    Convert a timestamp to naive Eastern exchange wall-clock time.

    Aware datetimes are shifted by the EST/EDT offset in force at that
    instant. Naive datetimes are returned unchanged.
    """
    if dt.tzinfo is None:
        return dt
    utc_dt = dt.astimezone(timezone.utc)
    offset = EDT_OFFSET if is_us_dst(utc_dt) else EST_OFFSET
    return (utc_dt + offset).replace(tzinfo=None)


def eastern_hour(dt: datetime) -> int:
    """Get the Eastern exchange-time hour (0-23) of a timestamp."""
    return to_exchange_time(dt).hour


def exchange_date(value: DateLike) -> date:
    """Get the exchange-local calendar date for a date or timestamp."""
    if isinstance(value, datetime):
        return to_exchange_time(value).date()
    return value


def week_start(value: DateLike) -> date:
    """Monday of the week containing the given date."""
    d = exchange_date(value)
    return d - timedelta(days=d.weekday())


def week_end(value: DateLike) -> date:
    """Sunday of the week containing the given date."""
    return week_start(value) + timedelta(days=6)


def same_week(a: DateLike, b: DateLike) -> bool:
    """Check whether two dates share a Monday-Sunday week."""
    return week_start(a) == week_start(b)


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed number of calendar days from start to end."""
    return (exchange_date(end) - exchange_date(start)).days
