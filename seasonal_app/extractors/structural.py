"""
Structural calendar extractors.

Month, quarter, weekday and intraday labels that depend only on the
timestamp itself. Each extractor also provides ``sort_key`` so buckets come
out in natural calendar order rather than alphabetically.
"""

import calendar as std_calendar
from datetime import datetime, timedelta
from typing import Optional

from ..utils.time import DateLike, exchange_date, to_exchange_time
from .base import DAILY, HOURLY

MONTH_NAMES = tuple(std_calendar.month_name[1:])
WEEKDAY_NAMES = tuple(std_calendar.day_name)

# Eastern minutes-of-day boundaries, start inclusive
MARKET_SESSIONS: tuple[tuple[str, int, int], ...] = (
    ("Pre-Market", 4 * 60, 9 * 60 + 30),
    ("Market-Open", 9 * 60 + 30, 11 * 60),
    ("Mid-Day", 11 * 60, 12 * 60),
    ("Lunch-Hour", 12 * 60, 13 * 60),
    ("Afternoon", 13 * 60, 15 * 60),
    ("Power-Hour", 15 * 60, 16 * 60),
    ("After-Hours", 16 * 60, 20 * 60),
)
SESSION_NAMES = tuple(name for name, _, _ in MARKET_SESSIONS)


def _label_number(label: str) -> int:
    digits = "".join(ch for ch in label if ch.isdigit())
    return int(digits) if digits else 0


class MonthOfYearExtractor:
    name = "month-of-year"
    period_type = "month-of-year"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return MONTH_NAMES[exchange_date(timestamp).month - 1]

    def sort_key(self, label: str) -> int:
        return MONTH_NAMES.index(label) if label in MONTH_NAMES else len(MONTH_NAMES)


class QuarterExtractor:
    name = "quarter"
    period_type = "quarter"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return f"Q{(exchange_date(timestamp).month - 1) // 3 + 1}"

    def sort_key(self, label: str) -> int:
        return _label_number(label)


class DayOfWeekExtractor:
    name = "day-of-week"
    period_type = "day-of-week"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return WEEKDAY_NAMES[exchange_date(timestamp).weekday()]

    def sort_key(self, label: str) -> int:
        return WEEKDAY_NAMES.index(label) if label in WEEKDAY_NAMES else len(WEEKDAY_NAMES)


class HourOfDayExtractor:
    """Eastern exchange-time hour; only meaningful for intraday bars."""

    name = "hour-of-day"
    period_type = "hour-of-day"
    granularity = HOURLY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        if not isinstance(timestamp, datetime):
            return None
        return f"Hour-{to_exchange_time(timestamp).hour:02d}"

    def sort_key(self, label: str) -> int:
        return _label_number(label)


class MarketSessionExtractor:
    """US equity session, DST-aware through the Eastern time conversion."""

    name = "market-session"
    period_type = "market-session"
    granularity = HOURLY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        if not isinstance(timestamp, datetime):
            return None
        local = to_exchange_time(timestamp)
        minutes = local.hour * 60 + local.minute
        for name, start, end in MARKET_SESSIONS:
            if start <= minutes < end:
                return name
        return None

    def sort_key(self, label: str) -> int:
        return SESSION_NAMES.index(label) if label in SESSION_NAMES else len(SESSION_NAMES)


class DayOfMonthExtractor:
    name = "day-of-month"
    period_type = "day-of-month"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return f"Day-{exchange_date(timestamp).day:02d}"

    def sort_key(self, label: str) -> int:
        return _label_number(label)


class WeekOfMonthExtractor:
    """Week-N where N = ceil(day / 7), so days 29-31 form Week-5."""

    name = "week-of-month"
    period_type = "week-of-month"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return f"Week-{(exchange_date(timestamp).day - 1) // 7 + 1}"

    def sort_key(self, label: str) -> int:
        return _label_number(label)


class WeekOfYearExtractor:
    name = "week-of-year"
    period_type = "week-of-year"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return f"Week-{exchange_date(timestamp).isocalendar()[1]:02d}"

    def sort_key(self, label: str) -> int:
        return _label_number(label)


class WeekPositionExtractor:
    """
    Position of a weekday within its month.

    ``Last-<Weekday>`` for the final occurrence, ``First-<Weekday>`` for the
    first, otherwise ``Week<N>-<Weekday>``.
    """

    name = "week-position"
    period_type = "week-position"
    granularity = DAILY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        d = exchange_date(timestamp)
        weekday = WEEKDAY_NAMES[d.weekday()]
        if (d + timedelta(days=7)).month != d.month:
            return f"Last-{weekday}"
        occurrence = (d.day - 1) // 7 + 1
        if occurrence == 1:
            return f"First-{weekday}"
        return f"Week{occurrence}-{weekday}"

    def sort_key(self, label: str) -> tuple[int, int]:
        position, _, weekday = label.partition("-")
        if position == "First":
            rank = 1
        elif position == "Last":
            rank = 6
        else:
            rank = _label_number(position)
        day_rank = WEEKDAY_NAMES.index(weekday) if weekday in WEEKDAY_NAMES else len(WEEKDAY_NAMES)
        return (rank, day_rank)
