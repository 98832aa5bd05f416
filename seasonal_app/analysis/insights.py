"""
Narrative insight generation.

A fixed, ordered rule set over computed patterns. Output depends only on
the patterns and thresholds, so identical inputs always yield identical
insight lists.
"""

from typing import Iterable, Mapping, Optional, Sequence

from ..config.defaults import StatisticsParams
from ..models.patterns import PatternSummary, SeasonalPattern

NAMED_PATTERN = "named-pattern"
MAX_EVENT_LABELS = 3


def _significant(patterns: Iterable[SeasonalPattern]) -> list[SeasonalPattern]:
    return [p for p in patterns if p.is_significant]


def _best(patterns: Sequence[SeasonalPattern]) -> Optional[SeasonalPattern]:
    if not patterns:
        return None
    return max(patterns, key=lambda p: (p.avg_return, p.win_rate, p.label))


def _worst(patterns: Sequence[SeasonalPattern]) -> Optional[SeasonalPattern]:
    if not patterns:
        return None
    return min(patterns, key=lambda p: (p.avg_return, p.win_rate, p.label))


def _describe(p: SeasonalPattern) -> str:
    return f"avg {p.avg_return:+.3f}%, win rate {p.win_rate:.1f}%, n={p.sample_count}"


def summarize_patterns(
    patterns: Mapping[str, Sequence[SeasonalPattern]],
    params: StatisticsParams,
) -> PatternSummary:
    """Best, worst and strong significant buckets across all period types."""
    candidates = _significant(p for buckets in patterns.values() for p in buckets)

    by_return = sorted(candidates, key=lambda p: (-p.avg_return, p.key))
    strong = sorted(
        (p for p in candidates if p.win_rate > params.strong_win_rate and p.avg_return > 0),
        key=lambda p: (-p.win_rate, -p.avg_return, p.key),
    )

    return PatternSummary(
        best_periods=tuple(p.key for p in by_return[:params.top_n]),
        worst_periods=tuple(p.key for p in reversed(by_return[-params.top_n:])) if by_return else (),
        strong_patterns=tuple(p.key for p in strong),
    )


def generate_insights(
    patterns: Mapping[str, Sequence[SeasonalPattern]],
    params: StatisticsParams,
) -> list[str]:
    """Ordered human-readable insights for an aggregation result."""
    insights = []

    months = _significant(patterns.get("month-of-year", ()))
    strong_months = [
        p.label for p in months
        if p.win_rate > params.strong_win_rate and p.avg_return > 0
    ]
    if strong_months:
        insights.append(
            f"Strong seasonal months: {', '.join(strong_months)} "
            f"(win rate above {params.strong_win_rate:.0f}%)"
        )
    weak_months = [
        p.label for p in months
        if p.win_rate < params.weak_win_rate and p.avg_return < 0
    ]
    if weak_months:
        insights.append(
            f"Weak seasonal months: {', '.join(weak_months)} "
            f"(win rate below {params.weak_win_rate:.0f}%)"
        )

    ordinary = _significant(
        p for period_type, buckets in patterns.items()
        if period_type != NAMED_PATTERN
        for p in buckets
    )
    best = _best(ordinary)
    worst = _worst(ordinary)
    if best is not None:
        insights.append(f"Best period: {best.key} ({_describe(best)})")
    if worst is not None and worst is not best:
        insights.append(f"Worst period: {worst.key} ({_describe(worst)})")

    quarter = _best(_significant(patterns.get("quarter", ())))
    if quarter is not None:
        insights.append(f"Strongest quarter: {quarter.label} (avg return {quarter.avg_return:+.3f}%)")

    weekday = _best(_significant(patterns.get("day-of-week", ())))
    if weekday is not None:
        insights.append(f"Best day of week: {weekday.label} ({_describe(weekday)})")

    session = _best(_significant(patterns.get("market-session", ())))
    if session is not None:
        insights.append(f"Best market session: {session.label} ({_describe(session)})")

    events = _significant(patterns.get("custom-event", ()))
    favourable = sorted(
        (p for p in events if p.win_rate > params.event_win_rate and p.avg_return > 0),
        key=lambda p: (-p.avg_return, p.label),
    )[:MAX_EVENT_LABELS]
    if favourable:
        insights.append(
            "Favourable event periods: " + ", ".join(
                f"{p.label} ({p.avg_return:+.3f}%)" for p in favourable
            )
        )
    unfavourable = sorted(
        (p for p in events if p.win_rate < 100 - params.event_win_rate and p.avg_return < 0),
        key=lambda p: (p.avg_return, p.label),
    )[:MAX_EVENT_LABELS]
    if unfavourable:
        insights.append(
            "Unfavourable event periods: " + ", ".join(
                f"{p.label} ({p.avg_return:+.3f}%)" for p in unfavourable
            )
        )

    for p in _significant(patterns.get(NAMED_PATTERN, ())):
        if p.win_rate > params.strong_win_rate:
            insights.append(f"Confirmed pattern: {p.label} ({_describe(p)})")
        else:
            insights.append(f"Pattern not confirmed: {p.label} (win rate {p.win_rate:.1f}%)")

    if not insights:
        insights.append("No statistically significant seasonal patterns found")

    return insights
