"""
Bucket statistics for seasonal patterns.

Plain-Python reductions over per-bar percentage returns. Every function
guards its divisions so that no NaN or infinity can leave this module;
buckets that cannot be summarized are dropped by the caller.
"""

import math
from collections import defaultdict
from typing import Optional, Sequence

from ..errors import StatisticsCalculationError
from ..models.patterns import PriceBar, SeasonalPattern
from ..utils.time import exchange_date


def percent_return(prev_close: float, close: float) -> Optional[float]:
    """Close-to-close return in percent, None when undefined."""
    if prev_close <= 0:
        return None
    value = (close - prev_close) / prev_close * 100
    return value if math.isfinite(value) else None


def compute_returns(bars: Sequence[PriceBar]) -> list[tuple[PriceBar, float]]:
    """
    Pair each bar with its return from the previous bar.

    The first bar has no predecessor and is not included.
    """
    samples = []
    for prev, curr in zip(bars, bars[1:]):
        value = percent_return(prev.close, curr.close)
        if value is not None:
            samples.append((curr, value))
    return samples


def mean(values: Sequence[float]) -> float:
    if not values:
        raise StatisticsCalculationError("Mean of empty sample", metric_name="mean")
    return sum(values) / len(values)


def population_std_dev(values: Sequence[float]) -> float:
    if not values:
        raise StatisticsCalculationError("Std dev of empty sample", metric_name="std_dev")
    avg = mean(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def summarize_bucket(
    period_type: str,
    label: str,
    samples: Sequence[tuple[int, float]],
    significance_min_samples: int = 10,
) -> Optional[SeasonalPattern]:
    """
    Aggregate (year, return) samples for one bucket.

    Wins are positive returns; flat and negative returns count as losses so
    that wins plus losses always equal the sample count.

    Returns:
        The pattern, or None if the bucket is empty or not finite
    """
    if not samples:
        return None

    returns = [r for _, r in samples]
    avg = mean(returns)
    std = population_std_dev(returns)
    if not (math.isfinite(avg) and math.isfinite(std)):
        return None

    win_count = sum(1 for r in returns if r > 0)
    sample_count = len(returns)

    by_year: dict[int, float] = defaultdict(float)
    for year, value in samples:
        by_year[year] += value
    best_year = max(sorted(by_year), key=lambda y: by_year[y])
    worst_year = min(sorted(by_year), key=lambda y: by_year[y])

    return SeasonalPattern(
        period_type=period_type,
        label=label,
        avg_return=avg,
        return_std_dev=std,
        win_rate=win_count / sample_count * 100,
        win_count=win_count,
        loss_count=sample_count - win_count,
        sample_count=sample_count,
        best_occurrence=str(best_year),
        worst_occurrence=str(worst_year),
        is_significant=sample_count >= significance_min_samples,
    )


def sample_year(bar: PriceBar) -> int:
    return exchange_date(bar.timestamp).year
