"""
Deterministic calendar rules.

Pure date arithmetic for recurring release schedules. None of these
functions consult a table; tables live in ``calendar.data``.
"""

from datetime import date, timedelta
from typing import Callable, Optional

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

HolidayCheck = Callable[[date], bool]


def _never(_: date) -> bool:
    return False


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """
    Get the nth occurrence of a weekday in a month.

    Args:
        year: Calendar year
        month: Month number 1-12
        weekday: Weekday number, Monday=0
        n: Occurrence, starting at 1

    Returns:
        The matching date

    Raises:
        ValueError: If the month has no nth occurrence
    """
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    result = first + timedelta(days=offset + 7 * (n - 1))
    if result.month != month:
        raise ValueError(f"Month {year}-{month:02d} has no occurrence {n} of weekday {weekday}")
    return result


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """Get the last occurrence of a weekday in a month."""
    if month == 12:
        last = date(year, 12, 31)
    else:
        last = date(year, month + 1, 1) - timedelta(days=1)
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def first_friday(year: int, month: int) -> date:
    """Labor report day: always a Friday between the 1st and the 7th."""
    return nth_weekday_of_month(year, month, FRIDAY, 1)


def third_friday(year: int, month: int) -> date:
    """Monthly options expiry Friday."""
    return nth_weekday_of_month(year, month, FRIDAY, 3)


def is_weekend(d: date) -> bool:
    return d.weekday() >= SATURDAY


def next_business_day(d: date, is_holiday: HolidayCheck = _never) -> date:
    """Shift forward until the date is a weekday that is not a holiday."""
    while is_weekend(d) or is_holiday(d):
        d += timedelta(days=1)
    return d


def previous_business_day(d: date, is_holiday: HolidayCheck = _never) -> date:
    """Shift backward until the date is a weekday that is not a holiday."""
    while is_weekend(d) or is_holiday(d):
        d -= timedelta(days=1)
    return d


def labor_day(year: int) -> date:
    return nth_weekday_of_month(year, 9, MONDAY, 1)


def thanksgiving(year: int) -> date:
    return nth_weekday_of_month(year, 11, THURSDAY, 4)


def is_ism_holiday(d: date) -> bool:
    """New Year's Day, Independence Day or Labor Day."""
    return (d.month, d.day) in ((1, 1), (7, 4)) or d == labor_day(d.year)


def first_business_day(year: int, month: int, is_holiday: HolidayCheck = _never) -> date:
    """
    Manufacturing index release day.

    Starts at the 1st and moves forward through weekends, the New Year,
    Independence Day and Labor Day holidays, and any extra holidays the
    caller supplies, until a qualifying weekday is found.
    """
    return next_business_day(
        date(year, month, 1),
        lambda d: is_ism_holiday(d) or is_holiday(d),
    )


def is_claims_holiday(d: date) -> bool:
    """Thursdays on which weekly jobless claims are not released."""
    return (d.month, d.day) in ((1, 1), (7, 4), (12, 25)) or d == thanksgiving(d.year)


def is_claims_day(d: date) -> bool:
    return d.weekday() == THURSDAY and not is_claims_holiday(d)


def election_day(year: int) -> Optional[date]:
    """
    First Tuesday after the first Monday of November in an election year.

    Returns None for odd years.
    """
    if year % 2 != 0:
        return None
    first_monday = nth_weekday_of_month(year, 11, MONDAY, 1)
    return first_monday + timedelta(days=1)


def election_kind(year: int) -> Optional[str]:
    """Presidential every 4 years, midterm two years after."""
    if year % 4 == 0:
        return "Presidential"
    if year % 4 == 2:
        return "Midterm"
    return None


def algorithmic_cpi_date(year: int, month: int) -> date:
    """Mid-month price index release: first Wednesday on or after the 10th."""
    tenth = date(year, month, 10)
    return tenth + timedelta(days=(WEDNESDAY - tenth.weekday()) % 7)


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
