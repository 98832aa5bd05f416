"""
Eager validation of calendar date tables and configuration.

Every configured date string must parse and round-trip to the exact
``YYYY-MM-DD`` form. Anything else is a construction-time error that names
the offending entry, so a typo in a table can never silently drop an event.
"""

from datetime import date, datetime, timedelta
from typing import Any, Iterable, Mapping, Optional

from ..errors import CalendarConfigurationError
from ..logging.config import get_calendar_logger

logger = get_calendar_logger(__name__)


def parse_iso_date(value: Any, index: Optional[int], context: str) -> date:
    """
    Parse a strict ISO calendar date.

    Args:
        value: Candidate date string
        index: Position of the value in its source list, if any
        context: Human-readable name of the source table or setting

    Returns:
        The parsed date

    Raises:
        CalendarConfigurationError: If the value is not a valid YYYY-MM-DD date
    """
    location = f"{context}[{index}]" if index is not None else context

    if not isinstance(value, str):
        raise CalendarConfigurationError(
            f"Invalid date at {location}: expected ISO string, got {type(value).__name__}",
            index=index,
            config_context=context,
            value=value,
        )

    try:
        parsed = date.fromisoformat(value)
    except ValueError as e:
        raise CalendarConfigurationError(
            f"Invalid date at {location}: {value!r} ({e})",
            index=index,
            config_context=context,
            value=value,
        ) from e

    if parsed.isoformat() != value:
        raise CalendarConfigurationError(
            f"Invalid date at {location}: {value!r} does not round-trip as YYYY-MM-DD",
            index=index,
            config_context=context,
            value=value,
        )

    return parsed


def validate_iso_dates(values: Iterable[Any], context: str) -> list[date]:
    """Parse every entry of a date table, failing on the first bad one."""
    return [parse_iso_date(value, i, context) for i, value in enumerate(values)]


def check_table_staleness(
    tables: Mapping[str, Iterable[date]],
    now: datetime,
    warning_days: int = 183,
) -> list[str]:
    """
    Warn about date tables that run out soon.

    A table is stale when its furthest date is less than ``warning_days``
    after ``now``.

    Returns:
        Names of the stale tables
    """
    today = now.date()
    threshold = today + timedelta(days=warning_days)
    stale = []

    for name, dates in tables.items():
        dates = list(dates)
        if not dates:
            continue
        furthest = max(dates)
        if furthest < threshold:
            stale.append(name)
            logger.warning(
                "Calendar table expires soon",
                table=name,
                furthest_date=furthest.isoformat(),
                days_remaining=(furthest - today).days,
            )

    return stale
