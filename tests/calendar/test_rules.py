"""Tests for deterministic calendar rules."""

from datetime import date

import pytest

from seasonal_app.calendar import rules


class TestWeekdayArithmetic:
    """Test nth/last weekday helpers."""

    def test_nth_weekday_of_month(self):
        assert rules.nth_weekday_of_month(2024, 11, rules.MONDAY, 1) == date(2024, 11, 4)
        assert rules.nth_weekday_of_month(2024, 11, rules.THURSDAY, 4) == date(2024, 11, 28)

    def test_missing_occurrence_raises(self):
        """February 2023 has only four Wednesdays."""
        with pytest.raises(ValueError):
            rules.nth_weekday_of_month(2023, 2, rules.WEDNESDAY, 5)

    def test_last_weekday_of_month(self):
        assert rules.last_weekday_of_month(2024, 6, rules.FRIDAY) == date(2024, 6, 28)
        assert rules.last_weekday_of_month(2024, 12, rules.TUESDAY) == date(2024, 12, 31)

    def test_first_and_third_friday(self):
        assert rules.first_friday(2024, 3) == date(2024, 3, 1)
        assert rules.third_friday(2024, 6) == date(2024, 6, 21)


class TestBusinessDays:
    """Test business day shifting."""

    def test_next_business_day_skips_weekend(self):
        assert rules.next_business_day(date(2024, 6, 1)) == date(2024, 6, 3)

    def test_previous_business_day_skips_holiday(self):
        holidays = {date(2025, 4, 18)}
        assert rules.previous_business_day(date(2025, 4, 18), holidays.__contains__) == date(2025, 4, 17)

    def test_first_business_day_skips_labor_day(self):
        assert rules.first_business_day(2024, 9) == date(2024, 9, 3)

    def test_first_business_day_skips_new_year(self):
        assert rules.first_business_day(2024, 1) == date(2024, 1, 2)

    def test_first_business_day_regular_month(self):
        assert rules.first_business_day(2024, 6) == date(2024, 6, 3)


class TestReleaseRules:
    """Test claims, election and CPI rules."""

    def test_claims_skip_thanksgiving(self):
        assert not rules.is_claims_day(date(2024, 11, 28))
        assert rules.is_claims_day(date(2024, 11, 21))
        assert not rules.is_claims_day(date(2024, 11, 22))

    def test_election_day(self):
        assert rules.election_day(2024) == date(2024, 11, 5)
        assert rules.election_day(2022) == date(2022, 11, 8)
        assert rules.election_day(2023) is None

    def test_election_day_when_month_starts_on_tuesday(self):
        """Nov 1 2022 is a Tuesday, so the election is the following week."""
        assert rules.election_day(2022) != date(2022, 11, 1)

    def test_election_kind(self):
        assert rules.election_kind(2024) == "Presidential"
        assert rules.election_kind(2026) == "Midterm"
        assert rules.election_kind(2025) is None

    def test_algorithmic_cpi_date(self):
        assert rules.algorithmic_cpi_date(2026, 5) == date(2026, 5, 13)
        assert rules.algorithmic_cpi_date(2024, 7) == date(2024, 7, 10)

    def test_add_months_wraps_year(self):
        assert rules.add_months(2024, 12, 1) == (2025, 1)
        assert rules.add_months(2024, 1, -1) == (2023, 12)
