"""Tests for the EventCalendar."""

from datetime import date, datetime, timezone

import pytest

from seasonal_app.calendar import CalendarEvent, EventCalendar, EventImpact, EventType, data
from seasonal_app.calendar.rules import thanksgiving
from seasonal_app.config.defaults import CalendarConfig
from seasonal_app.errors import CalendarConfigurationError

REFERENCE_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build(**config) -> EventCalendar:
    return EventCalendar(
        CalendarConfig(**config), start_year=2023, end_year=2025, now=REFERENCE_NOW
    )


class TestReleaseDates:
    """Test per-month release date resolution."""

    def test_cpi_from_table(self, calendar):
        assert calendar.cpi_release_date(2024, 6) == date(2024, 6, 12)

    def test_cpi_falls_back_to_rule(self, calendar):
        assert calendar.cpi_release_date(2026, 5) == date(2026, 5, 13)

    def test_nfp(self, calendar):
        assert calendar.nfp_release_date(2024, 3) == date(2024, 3, 1)

    def test_ism(self, calendar):
        assert calendar.ism_release_date(2024, 6) == date(2024, 6, 3)
        assert calendar.ism_release_date(2024, 9) == date(2024, 9, 3)
        assert calendar.ism_release_date(2024, 1) == date(2024, 1, 2)

    def test_retail_sales(self, calendar):
        assert calendar.retail_sales_release_date(2024, 1) == date(2024, 1, 17)

    def test_options_expiry_moves_before_good_friday(self, calendar):
        assert calendar.options_expiry_date(2025, 4) == date(2025, 4, 17)
        assert calendar.options_expiry_date(2024, 6) == date(2024, 6, 21)

    def test_russell_reconstitution(self, calendar):
        assert calendar.russell_reconstitution_date(2024) == date(2024, 6, 28)

    def test_gdp_releases(self, calendar):
        releases = calendar.gdp_releases(2024)
        assert len(releases) == 12
        advance = releases[0]
        assert advance.date == date(2024, 1, 29)  # Jan 27 is a Saturday
        assert advance.estimate == "Advance"
        assert advance.quarter == "Q4-2023"

    def test_election(self, calendar):
        assert calendar.election(2024) == (date(2024, 11, 5), "Presidential")
        assert calendar.election(2022) == (date(2022, 11, 8), "Midterm")
        assert calendar.election(2023) is None


class TestQueries:
    """Test calendar lookups."""

    def test_market_holidays(self, calendar):
        assert calendar.is_market_holiday(date(2024, 7, 4))
        assert not calendar.is_business_day(date(2024, 7, 4))
        assert not calendar.is_business_day(date(2024, 7, 6))
        assert calendar.is_business_day(date(2024, 7, 5))

    def test_earnings_season(self, calendar):
        assert calendar.is_earnings_season(date(2024, 4, 15))
        assert not calendar.is_earnings_season(date(2024, 5, 15))

    def test_is_event_week(self, calendar):
        assert calendar.is_event_week(date(2024, 6, 10), EventType.RATE_DECISION)
        assert not calendar.is_event_week(date(2024, 6, 3), EventType.RATE_DECISION)

    def test_earnings_week_spanning_month_boundary(self, calendar):
        """The week of Mar 25-31 2024 has no April days, Apr 1-7 does."""
        assert not calendar.is_event_week(date(2024, 3, 27), EventType.EARNINGS_SEASON)
        assert calendar.is_event_week(date(2024, 4, 2), EventType.EARNINGS_SEASON)

    def test_events_for_date_orders_week_events_first(self, calendar):
        names = [e.name for e in calendar.get_events_for_date(date(2024, 6, 12))]
        assert names[0] == "FOMC Week"
        assert {"FOMC Rate Decision", "CPI Release"} <= set(names)
        assert "Earnings Season" not in names

    def test_events_by_type_in_range(self, calendar):
        decisions = calendar.get_events_by_type(
            EventType.RATE_DECISION, date(2024, 1, 1), date(2024, 12, 31)
        )
        assert [e.date for e in decisions] == [
            date(2024, 1, 31), date(2024, 3, 20), date(2024, 5, 1), date(2024, 6, 12),
            date(2024, 7, 31), date(2024, 9, 18), date(2024, 11, 7), date(2024, 12, 18),
        ]

    def test_events_for_month(self, calendar):
        names = {e.name for e in calendar.get_events_for_month(2024, 6)}
        assert {"Triple Witching", "Russell Reconstitution", "Juneteenth"} <= names

    def test_no_claims_on_thanksgiving(self, calendar):
        events = calendar.get_events_for_date(date(2024, 11, 28))
        assert "Initial Jobless Claims" not in [e.name for e in events]

    def test_events_sorted(self, calendar):
        dates = [e.date for e in calendar.events]
        assert dates == sorted(dates)

    def test_triple_witching_is_high_impact(self, calendar):
        expiries = calendar.get_events_by_type(
            EventType.OPTIONS_EXPIRY, date(2024, 6, 1), date(2024, 6, 30)
        )
        assert [(e.name, e.impact) for e in expiries] == [("Triple Witching", EventImpact.HIGH)]


class TestConfiguration:
    """Test configuration handling at construction."""

    def test_rate_decision_override(self):
        cal = build(rate_decision_dates=("2024-02-14", "2024-01-10"))
        assert cal.rate_decision_dates == (date(2024, 1, 10), date(2024, 2, 14))
        assert cal.is_event_week(date(2024, 2, 12), EventType.RATE_DECISION)
        assert not cal.is_event_week(date(2024, 1, 31), EventType.RATE_DECISION)

    def test_invalid_rate_decision_override(self):
        with pytest.raises(CalendarConfigurationError) as exc_info:
            build(rate_decision_dates=("2024-13-01",))
        assert exc_info.value.index == 0
        assert "rate decision overrides[0]" in str(exc_info.value)

    def test_custom_event_from_mapping(self):
        cal = build(custom_events=({
            "date": "2024-05-14",
            "name": "PPI Release",
            "type": "economic-indicator",
            "impact": "medium",
        },))
        matching = [e for e in cal.get_events_for_date(date(2024, 5, 14)) if e.name == "PPI Release"]
        assert len(matching) == 1
        assert matching[0].type == EventType.ECONOMIC_INDICATOR

    def test_custom_event_instance(self):
        event = CalendarEvent(
            date=date(2024, 5, 14), name="Investor Day",
            type=EventType.CUSTOM, impact=EventImpact.LOW,
        )
        cal = build(custom_events=(event,))
        assert event in cal.get_events_for_date(date(2024, 5, 14))

    @pytest.mark.parametrize("raw", [
        {"date": "2024-05-14", "name": "X", "type": "unknown-type"},
        {"date": "2024-05-14", "name": "", "type": "custom"},
        {"date": "14/05/2024", "name": "X"},
        "2024-05-14",
    ])
    def test_invalid_custom_event(self, raw):
        with pytest.raises(CalendarConfigurationError):
            build(custom_events=(raw,))

    def test_invalid_earnings_months(self):
        with pytest.raises(CalendarConfigurationError):
            build(earnings_months=(0, 13))

    def test_empty_horizon(self):
        with pytest.raises(CalendarConfigurationError):
            EventCalendar(start_year=2025, end_year=2024, now=REFERENCE_NOW)

    def test_options_expiry_disabled(self):
        cal = build(options_expiry_enabled=False)
        assert cal.get_events_by_type(EventType.OPTIONS_EXPIRY) == []
        names = [e.name for e in cal.get_events_for_date(date(2024, 6, 19))]
        assert "Options Expiry Week" not in names
        # Rebalancing still follows the expiry schedule.
        assert cal.get_events_by_type(EventType.INDEX_REBALANCING, date(2024, 6, 21), date(2024, 6, 21))


class TestStaleness:
    """Test expiry warnings for dated tables."""

    def test_fresh_tables(self, calendar):
        assert calendar.stale_tables == []

    def test_stale_tables_near_expiry(self):
        cal = EventCalendar(start_year=2026, end_year=2026, now=datetime(2026, 10, 18, tzinfo=timezone.utc))
        assert {"Market holidays", "CPI release dates", "FOMC decision dates"} <= set(cal.stale_tables)
        assert {"ECB decision dates", "BoE decision dates", "BoJ decision dates"} <= set(cal.stale_tables)

    def test_override_skips_fomc_staleness(self):
        cal = EventCalendar(
            CalendarConfig(rate_decision_dates=("2026-01-28",)),
            start_year=2026, end_year=2026,
            now=datetime(2026, 10, 18, tzinfo=timezone.utc),
        )
        assert "FOMC decision dates" not in cal.stale_tables


class TestCentralBankTables:
    """Test validation and access of foreign central bank schedules."""

    def test_schedules_exposed(self, calendar):
        ecb = calendar.central_bank_decision_dates("ECB")
        assert date(2024, 6, 6) in ecb
        assert list(ecb) == sorted(ecb)
        assert date(2024, 8, 1) in calendar.central_bank_decision_dates("BoE")
        assert date(2024, 7, 31) in calendar.central_bank_decision_dates("BoJ")

    def test_unknown_bank(self, calendar):
        with pytest.raises(ValueError):
            calendar.central_bank_decision_dates("SNB")

    @pytest.mark.parametrize("table", ["ECB decision dates", "BoE decision dates", "BoJ decision dates"])
    def test_malformed_entry_fails_construction(self, monkeypatch, table):
        monkeypatch.setitem(data.DATED_TABLES, table, ("2024-03-07", "2024-13-01"))
        with pytest.raises(CalendarConfigurationError) as exc_info:
            EventCalendar(start_year=2024, end_year=2024, now=REFERENCE_NOW)
        assert f"{table}[1]" in str(exc_info.value)

    def test_table_version_recorded(self, calendar):
        assert calendar.table_version == data.TABLE_VERSION


class TestScheduleProperties:
    """Properties that hold for every generated year."""

    @pytest.mark.parametrize("year", range(2019, 2027))
    def test_nfp_is_early_friday(self, calendar, year):
        for month in range(1, 13):
            release = calendar.nfp_release_date(year, month)
            assert release.weekday() == 4
            assert 1 <= release.day <= 7

    def test_claims_never_on_holiday(self, calendar):
        claims = [e for e in calendar.events if e.name == "Initial Jobless Claims"]
        assert claims
        for event in claims:
            assert event.date.weekday() == 3
            assert (event.date.month, event.date.day) not in ((1, 1), (7, 4), (12, 25))
            assert event.date != thanksgiving(event.date.year)

    def test_release_dates_are_business_days(self, calendar):
        for month in range(1, 13):
            assert calendar.is_business_day(calendar.ism_release_date(2025, month))
            assert calendar.is_business_day(calendar.options_expiry_date(2025, month))
