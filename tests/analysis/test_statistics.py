"""Tests for bucket statistics."""

from datetime import datetime

import pytest

from seasonal_app.analysis.statistics import (
    compute_returns,
    mean,
    percent_return,
    population_std_dev,
    summarize_bucket,
)
from seasonal_app.errors import StatisticsCalculationError
from seasonal_app.models.patterns import PriceBar


def bar(day: int, close: float) -> PriceBar:
    return PriceBar(datetime(2024, 1, day), close, close, close, close)


class TestReturns:
    """Test per-bar return calculation."""

    def test_percent_return(self):
        assert percent_return(100.0, 101.0) == pytest.approx(1.0)
        assert percent_return(0.0, 101.0) is None

    def test_compute_returns_skips_first_bar(self):
        samples = compute_returns([bar(2, 100.0), bar(3, 110.0), bar(4, 99.0)])
        assert [s[0].timestamp.day for s in samples] == [3, 4]
        assert samples[0][1] == pytest.approx(10.0)
        assert samples[1][1] == pytest.approx(-10.0)


class TestReductions:
    """Test guarded mean and standard deviation."""

    def test_mean_and_std_dev(self):
        assert mean([1.0, 2.0, 3.0]) == 2.0
        assert population_std_dev([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == 2.0

    def test_empty_sample_raises(self):
        with pytest.raises(StatisticsCalculationError):
            mean([])
        with pytest.raises(StatisticsCalculationError) as exc_info:
            population_std_dev([])
        assert exc_info.value.metric_name == "std_dev"


class TestSummarizeBucket:
    """Test bucket aggregation."""

    def test_summary_fields(self):
        pattern = summarize_bucket(
            "month-of-year", "January",
            [(2020, 1.0), (2020, -0.5), (2021, 2.0), (2021, 0.0)],
            significance_min_samples=10,
        )
        assert pattern.avg_return == pytest.approx(0.625)
        assert pattern.win_count == 2
        assert pattern.loss_count == 2
        assert pattern.win_rate == 50.0
        assert pattern.sample_count == 4
        assert pattern.best_occurrence == "2021"
        assert pattern.worst_occurrence == "2020"
        assert pattern.is_significant is False
        assert pattern.key == "month-of-year: January"

    def test_flat_returns_count_as_losses(self):
        pattern = summarize_bucket("quarter", "Q1", [(2020, 0.0)] * 3)
        assert pattern.win_count == 0
        assert pattern.loss_count == 3
        assert pattern.return_std_dev == 0.0

    def test_significance_threshold(self):
        samples = [(2020, 0.1)] * 10
        assert summarize_bucket("quarter", "Q1", samples, 10).is_significant is True
        assert summarize_bucket("quarter", "Q1", samples[:9], 10).is_significant is False

    def test_empty_bucket(self):
        assert summarize_bucket("quarter", "Q1", []) is None

    def test_non_finite_bucket_dropped(self):
        assert summarize_bucket("quarter", "Q1", [(2020, float("inf")), (2020, 1.0)]) is None
