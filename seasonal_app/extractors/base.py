"""
Extractor capability contract and event window analysis.

Extractors are plain classes that satisfy the ``PeriodExtractor`` protocol.
Release-driven extractors additionally provide ``release_date_for`` and
``analyze_event_window``, both built on the helpers below.
"""

import math
from bisect import bisect_left
from datetime import date, time, timedelta
from typing import Iterable, Optional, Protocol, Sequence, runtime_checkable

from ..config.defaults import EventWindowParams
from ..models.patterns import EventWindowAnalysis, PriceBar
from ..utils.time import DateLike, exchange_date, same_week, to_exchange_time

# Date-level labels, valid for daily and intraday bars
DAILY = "daily"
# Needs intraday timestamps
HOURLY = "hourly"
# Date-level, refined with the intraday hour when available
ANY = "any"

CUSTOM_EVENT = "custom-event"


@runtime_checkable
class PeriodExtractor(Protocol):
    """Maps a timestamp to a period label."""

    name: str
    period_type: str
    granularity: str    # DAILY, HOURLY or ANY

    def extract(self, timestamp: DateLike) -> Optional[str]:
        ...


def nearest_date(target: date, candidates: Iterable[date]) -> Optional[date]:
    """Closest candidate to the target, earlier dates winning ties."""
    best = None
    for candidate in candidates:
        if best is None:
            best = candidate
            continue
        distance = abs((candidate - target).days)
        best_distance = abs((best - target).days)
        if distance < best_distance or (distance == best_distance and candidate < best):
            best = candidate
    return best


def week_label(value: DateLike, release: Optional[date], prefix: str) -> Optional[str]:
    """'<prefix>-Day' on the release date, '<prefix>-Week' elsewhere in its week."""
    if release is None:
        return None
    d = exchange_date(value)
    if d == release:
        return f"{prefix}-Day"
    if same_week(d, release):
        return f"{prefix}-Week"
    return None


def log_return_volatility(closes: Sequence[float]) -> Optional[float]:
    """
    Population standard deviation of log returns.

    Returns None when fewer than two returns can be formed, so callers never
    see a volatility computed from an empty or single-point window.
    """
    returns = [
        math.log(curr / prev)
        for prev, curr in zip(closes, closes[1:])
        if prev > 0 and curr > 0
    ]
    if len(returns) < 2:
        return None
    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    return math.sqrt(variance)


def _closes_between(bars: Sequence[PriceBar], start: date, end: date) -> list[float]:
    return [
        bar.close for bar in bars
        if start <= exchange_date(bar.timestamp) <= end
    ]


def _release_hour_move(bars: Sequence[PriceBar], release: date, release_time: time) -> Optional[float]:
    moves = []
    for bar in bars:
        local = to_exchange_time(bar.timestamp)
        if local.date() != release or local.hour != release_time.hour:
            continue
        if bar.open > 0:
            moves.append(abs(bar.close - bar.open) / bar.open * 100)
    return max(moves) if moves else None


def analyze_release_window(
    value: DateLike,
    release: Optional[date],
    bars: Sequence[PriceBar],
    event_name: str,
    expected_impact: str,
    release_time: Optional[time] = None,
    params: Optional[EventWindowParams] = None,
) -> EventWindowAnalysis:
    """
    Compare realized volatility around a release with a trailing baseline.

    The event window is T-N..T+N and the baseline is T-30..T-14 (both
    configurable). The change is reported as a percentage increase over the
    baseline and is None whenever either window is too thin to measure.
    """
    params = params or EventWindowParams()
    d = exchange_date(value)

    if release is None:
        return EventWindowAnalysis(
            is_event_week=False,
            days_until_release=-1,
            expected_impact=expected_impact,
            insights=(f"No {event_name} release near {d.isoformat()}",),
        )

    days_until = (release - d).days
    window = timedelta(days=params.window_days)
    event_vol = log_return_volatility(
        _closes_between(bars, release - window, release + window)
    )
    baseline_vol = log_return_volatility(_closes_between(
        bars,
        release - timedelta(days=params.baseline_start_days),
        release - timedelta(days=params.baseline_end_days),
    ))

    change = None
    if event_vol is not None and baseline_vol is not None and baseline_vol > 0:
        change = (event_vol / baseline_vol - 1) * 100

    insights = []
    if change is None:
        insights.append(f"Not enough price history around {event_name} release to measure volatility")
    elif change > params.extreme_pct:
        insights.append(f"{event_name} window volatility is extreme: +{change:.0f}% vs baseline")
    elif change > params.elevated_pct:
        insights.append(f"{event_name} window volatility is elevated: +{change:.0f}% vs baseline")
    elif change < 0:
        insights.append(f"{event_name} window volatility is below baseline ({change:.0f}%)")
    else:
        insights.append(f"{event_name} window volatility is in line with baseline (+{change:.0f}%)")

    if days_until == 0:
        insights.append(f"{event_name} release today: watch for immediate reaction")
    elif days_until == 1:
        insights.append(f"{event_name} release tomorrow: positioning ahead of the announcement")
    elif 1 < days_until <= params.window_days:
        insights.append(f"{event_name} release in {days_until} days: event window active")
    elif -params.window_days <= days_until < 0:
        insights.append(f"{event_name} released {-days_until} days ago: post-release window")

    hour_move = None
    if release_time is not None:
        hour_move = _release_hour_move(bars, release, release_time)
        if hour_move is not None and hour_move > params.intraday_spike_pct:
            insights.append(
                f"Intraday spike at {event_name} release hour: {hour_move:.2f}% move"
            )

    return EventWindowAnalysis(
        is_event_week=same_week(d, release),
        days_until_release=days_until,
        expected_impact=expected_impact,
        volatility_change=change,
        insights=tuple(insights),
        release_date=release,
        event_volatility=event_vol,
        baseline_volatility=baseline_vol,
        release_hour_move=hour_move,
    )


def decision_in_week(dates: Sequence[date], value: DateLike) -> Optional[date]:
    """First date of a sorted schedule falling in the value's Monday-Sunday week."""
    d = exchange_date(value)
    i = bisect_left(dates, d - timedelta(days=6))
    for candidate in dates[i:i + 3]:
        if same_week(d, candidate):
            return candidate
    return None
