"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

import pytest

from seasonal_app.calendar.engine import EventCalendar
from seasonal_app.models.patterns import PriceBar

# Returns by weekday outside December and September: Monday strong, the rest mixed.
WEEKDAY_RETURNS = (0.3, -0.2, 0.1, -0.2, -0.05)
DECEMBER_RETURN = 0.4
SEPTEMBER_RETURN = -0.4


def seasonal_return(d: date) -> float:
    """Deterministic percent return with a December rally and a September slump."""
    if d.month == 12:
        return DECEMBER_RETURN
    if d.month == 9:
        return SEPTEMBER_RETURN
    return WEEKDAY_RETURNS[d.weekday()]


def build_bars(
    timestamps: list[datetime],
    return_for: Callable[[datetime], float],
    start_price: float = 100.0,
) -> list[PriceBar]:
    """Chain bars so each close-to-close return equals ``return_for(timestamp)``."""
    bars = []
    close = start_price
    for ts in timestamps:
        open_ = close
        close = open_ * (1 + return_for(ts) / 100)
        bars.append(PriceBar(
            timestamp=ts,
            open=open_,
            high=max(open_, close) * 1.001,
            low=min(open_, close) * 0.999,
            close=close,
            volume=1_000.0,
        ))
    return bars


def weekday_timestamps(start: date, end: date) -> list[datetime]:
    """Naive midnights for every Monday-Friday in [start, end]."""
    stamps = []
    d = start
    while d <= end:
        if d.weekday() < 5:
            stamps.append(datetime(d.year, d.month, d.day))
        d += timedelta(days=1)
    return stamps


@pytest.fixture(scope="session")
def calendar() -> EventCalendar:
    """Calendar covering every dated table, built at a fixed reference time."""
    return EventCalendar(
        start_year=2019,
        end_year=2026,
        now=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_daily_bars() -> Callable[..., list[PriceBar]]:
    """Factory for weekday daily bars with the seasonal return profile."""
    def factory(
        start: date = date(2019, 1, 1),
        end: date = date(2023, 12, 31),
        return_for: Optional[Callable[[datetime], float]] = None,
    ) -> list[PriceBar]:
        return build_bars(
            weekday_timestamps(start, end),
            return_for or (lambda ts: seasonal_return(ts.date())),
        )
    return factory


@pytest.fixture
def daily_bars(make_daily_bars: Callable[..., list[PriceBar]]) -> list[PriceBar]:
    """Five years of weekday daily bars, 2019 through 2023."""
    return make_daily_bars()


@pytest.fixture
def hourly_bars() -> list[PriceBar]:
    """UTC-stamped hourly bars for July 2024, 13:00-20:00 UTC (09:00-16:00 EDT)."""
    stamps = [
        datetime(2024, 7, day, hour, tzinfo=timezone.utc)
        for day in range(1, 32)
        if date(2024, 7, day).weekday() < 5
        for hour in range(13, 21)
    ]
    # Rising into the 15:00 EDT hour, flat-to-weak otherwise.
    return build_bars(stamps, lambda ts: 0.2 if ts.hour == 19 else -0.05)


@pytest.fixture
def raw_daily_bars(daily_bars: list[PriceBar]) -> list[dict]:
    """The daily series as a provider would deliver it: ISO dates and numeric strings."""
    return [
        {
            "date": bar.timestamp.date().isoformat(),
            "open": str(bar.open),
            "high": bar.high,
            "low": bar.low,
            "close": bar.close,
            "volume": bar.volume,
        }
        for bar in daily_bars
    ]


@pytest.fixture
def bar_builder() -> Callable[..., list[PriceBar]]:
    """Expose ``build_bars`` to tests that need custom return profiles."""
    return build_bars
