"""Tests for the combined event detector."""

from datetime import date, datetime, timedelta, timezone

import pytest

from seasonal_app.calendar import EventCalendar
from seasonal_app.config.defaults import CalendarConfig
from seasonal_app.extractors.combined import (
    COMBINATION_CATALOG,
    ELECTION,
    EARNINGS_SEASON,
    HIGH_IMPACT_TYPES,
    LABOR_REPORT,
    PAIR_PRIORITY,
    OPTIONS_EXPIRY,
    PRICE_INDEX,
    RATE_DECISION,
    TRIPLE_WITCHING,
    CombinedEventDetector,
)


class TestActiveEventTypes:
    """Test week-level event type detection."""

    def test_fomc_and_cpi_same_day(self, calendar):
        active = CombinedEventDetector(calendar).get_active_event_types(date(2024, 6, 12))
        assert {RATE_DECISION, PRICE_INDEX} <= active
        assert EARNINGS_SEASON not in active

    def test_election_window_counts(self, calendar):
        active = CombinedEventDetector(calendar).get_active_event_types(date(2024, 11, 12))
        assert ELECTION in active

    def test_quiet_week(self, calendar):
        assert CombinedEventDetector(calendar).get_active_event_types(date(2026, 5, 20)) == frozenset()

    def test_triple_witching_without_expiry_events(self):
        cal = EventCalendar(
            CalendarConfig(options_expiry_enabled=False),
            start_year=2024, end_year=2024,
            now=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        detector = CombinedEventDetector(cal)
        active = detector.get_active_event_types(date(2024, 9, 18))
        assert TRIPLE_WITCHING in active
        assert OPTIONS_EXPIRY not in active
        assert detector.detect_event_combination(date(2024, 9, 18)).type == "FOMC+TripleWitching-Week"


class TestDetectCombination:
    """Test catalog classification and priority."""

    def test_fomc_cpi(self, calendar):
        combo = CombinedEventDetector(calendar).detect_event_combination(date(2024, 6, 12))
        assert combo.type == "FOMC+CPI-Week"
        assert combo.volatility_multiplier == 2.6
        assert combo.expected_impact == "very-high"
        assert combo.week_start == date(2024, 6, 10)
        assert combo.week_end == date(2024, 6, 16)
        assert combo.triggering_event_types == (RATE_DECISION, PRICE_INDEX)

    @pytest.mark.parametrize("d", [date(2024, 9, 18), date(2024, 12, 18)])
    def test_fomc_triple_witching(self, calendar, d):
        combo = CombinedEventDetector(calendar).detect_event_combination(d)
        assert combo.type == "FOMC+TripleWitching-Week"
        assert combo.volatility_multiplier == 2.8

    def test_election_fomc(self, calendar):
        combo = CombinedEventDetector(calendar).detect_event_combination(date(2024, 11, 6))
        assert combo.type == "Election+FOMC-Week"
        assert combo.volatility_multiplier == 3.1
        assert combo.expected_impact == "extreme"

    def test_fomc_nfp_beats_earnings_pairs(self, calendar):
        # Jan 29 - Feb 4 2024: FOMC Jan 31, payrolls Feb 2, earnings season.
        combo = CombinedEventDetector(calendar).detect_event_combination(date(2024, 1, 31))
        assert combo.type == "FOMC+NFP-Week"
        assert set(combo.triggering_event_types) == {RATE_DECISION, LABOR_REPORT}

    def test_cpi_earnings(self, calendar):
        combo = CombinedEventDetector(calendar).detect_event_combination(date(2024, 4, 10))
        assert combo.type == "CPI+Earnings-Week"

    def test_multiple_high_impact(self):
        cal = EventCalendar(
            CalendarConfig(custom_events=({
                "date": "2024-11-08",
                "name": "Special Price Index Print",
                "type": "price-index-release",
                "impact": "high",
            },)),
            start_year=2024, end_year=2024,
            now=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        combo = CombinedEventDetector(cal).detect_event_combination(date(2024, 11, 4))
        assert combo.type == "Multiple-HighImpact-Week"
        assert combo.volatility_multiplier == 3.5
        assert 3.0 <= combo.volatility_multiplier <= 4.0
        assert set(combo.triggering_event_types) == {RATE_DECISION, PRICE_INDEX, ELECTION}

    def test_no_combination(self, calendar):
        detector = CombinedEventDetector(calendar)
        assert detector.detect_event_combination(date(2026, 5, 20)) is None
        assert detector.extract(date(2026, 5, 20)) is None

    def test_extract_returns_type(self, calendar):
        assert CombinedEventDetector(calendar).extract(date(2024, 6, 12)) == "FOMC+CPI-Week"

    def test_find_combinations(self, calendar):
        combos = CombinedEventDetector(calendar).find_combinations(date(2024, 9, 1), date(2024, 12, 31))
        by_week = {c.week_start: c.type for c in combos}
        assert by_week[date(2024, 9, 16)] == "FOMC+TripleWitching-Week"
        assert by_week[date(2024, 11, 4)] == "Election+FOMC-Week"
        assert by_week[date(2024, 12, 16)] == "FOMC+TripleWitching-Week"
        starts = [c.week_start for c in combos]
        assert starts == sorted(starts)


class TestOutsideHorizon:
    """Weeks before the generated horizon classify like weeks inside it."""

    @pytest.fixture
    def narrow(self):
        return CombinedEventDetector(EventCalendar(
            start_year=2026, end_year=2026,
            now=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ))

    def test_matches_wide_horizon(self, calendar, narrow):
        wide = CombinedEventDetector(calendar)
        week = date(2019, 1, 7)
        while week < date(2024, 1, 1):
            assert narrow.extract(week) == wide.extract(week), week
            week += timedelta(days=7)

    def test_older_cpi_week(self, narrow):
        # June 2019: FOMC on the 19th, triple witching on the 21st.
        assert narrow.extract(date(2019, 6, 19)) == "FOMC+TripleWitching-Week"
        assert PRICE_INDEX in narrow.get_active_event_types(date(2015, 4, 14))


class TestCatalog:
    """Test the static combination catalog."""

    def test_catalog_size(self):
        combos = CombinedEventDetector.get_all_combinations()
        assert len(combos) == 17
        assert len({c.type for c in combos}) == 17

    def test_priority_covers_pairs(self):
        pair_types = {c.type for c in COMBINATION_CATALOG if len(c.event_types) == 2}
        assert set(PAIR_PRIORITY) == pair_types - {"TripleWitching+FOMC-Week"}

    def test_volatility_multiplier(self):
        assert CombinedEventDetector.get_volatility_multiplier("FOMC+NFP-Week") == 2.9
        assert CombinedEventDetector.get_volatility_multiplier("TripleWitching+FOMC-Week") == 2.8
        assert CombinedEventDetector.get_volatility_multiplier("Unknown-Week") == 1.0

    def test_high_impact_types(self):
        assert EARNINGS_SEASON not in HIGH_IMPACT_TYPES
        assert len(HIGH_IMPACT_TYPES) == 5
