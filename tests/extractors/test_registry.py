"""Tests for the extractor registry."""

from datetime import date

from seasonal_app.extractors import DAILY, HOURLY
from seasonal_app.extractors.combined import CombinedEventDetector
from seasonal_app.extractors.events import DividendExDateExtractor
from seasonal_app.extractors.registry import (
    build_event_extractors,
    build_structural_extractors,
    get_compatible_extractors,
)


class TestRegistry:
    """Test extractor construction and timeframe filtering."""

    def test_structural_keys(self):
        extractors = build_structural_extractors()
        assert set(extractors) == {
            "month-of-year", "quarter", "day-of-week", "hour-of-day", "market-session",
            "day-of-month", "week-of-month", "week-of-year", "week-position",
        }

    def test_event_extractors_end_with_combined(self, calendar):
        extractors = build_event_extractors(calendar)
        assert isinstance(extractors[-1], CombinedEventDetector)
        assert not any(isinstance(e, DividendExDateExtractor) for e in extractors)
        names = {e.name for e in extractors}
        assert {"cpi", "nfp", "fed-decision", "ecb-decision", "boe-decision", "boj-decision",
                "configured-event", "election"} <= names

    def test_dividend_extractor_added_with_dates(self, calendar):
        extractors = build_event_extractors(calendar, [date(2024, 2, 9)])
        assert any(isinstance(e, DividendExDateExtractor) for e in extractors)

    def test_daily_drops_intraday_extractors(self):
        extractors = build_structural_extractors().values()
        daily = get_compatible_extractors(extractors, DAILY)
        assert {e.period_type for e in daily} == {
            "month-of-year", "quarter", "day-of-week", "day-of-month",
            "week-of-month", "week-of-year", "week-position",
        }
        assert len(get_compatible_extractors(extractors, HOURLY)) == 9
