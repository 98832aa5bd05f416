"""
Tests for exchange time utilities.

Verifies the explicit US daylight saving rule and the Monday-Sunday week
helpers used by every event extractor.
"""

from datetime import date, datetime, timezone

import pytest

from seasonal_app.utils.time import (
    days_between,
    dst_bounds_utc,
    eastern_hour,
    exchange_date,
    is_us_dst,
    same_week,
    to_exchange_time,
    week_end,
    week_start,
)


class TestDaylightSaving:
    """Test DST boundaries and conversion."""

    def test_bounds_2024(self):
        start, end = dst_bounds_utc(2024)
        assert start == datetime(2024, 3, 10, 7, tzinfo=timezone.utc)
        assert end == datetime(2024, 11, 3, 6, tzinfo=timezone.utc)

    def test_transition_instants(self):
        assert not is_us_dst(datetime(2024, 3, 10, 6, 59, tzinfo=timezone.utc))
        assert is_us_dst(datetime(2024, 3, 10, 7, 0, tzinfo=timezone.utc))
        assert is_us_dst(datetime(2024, 11, 3, 5, 59, tzinfo=timezone.utc))
        assert not is_us_dst(datetime(2024, 11, 3, 6, 0, tzinfo=timezone.utc))

    def test_to_exchange_time(self):
        assert to_exchange_time(datetime(2024, 7, 1, 18, 0, tzinfo=timezone.utc)) == datetime(2024, 7, 1, 14, 0)
        assert to_exchange_time(datetime(2024, 1, 2, 18, 0, tzinfo=timezone.utc)) == datetime(2024, 1, 2, 13, 0)

    def test_naive_is_already_local(self):
        naive = datetime(2024, 7, 1, 9, 30)
        assert to_exchange_time(naive) is naive
        assert eastern_hour(naive) == 9

    def test_exchange_date_crosses_midnight(self):
        assert exchange_date(datetime(2024, 7, 2, 2, 0, tzinfo=timezone.utc)) == date(2024, 7, 1)
        assert exchange_date(date(2024, 7, 2)) == date(2024, 7, 2)


class TestWeeks:
    """Test Monday-Sunday week helpers."""

    @pytest.mark.parametrize("d", [date(2024, 6, 10), date(2024, 6, 12), date(2024, 6, 16)])
    def test_week_bounds(self, d):
        assert week_start(d) == date(2024, 6, 10)
        assert week_end(d) == date(2024, 6, 16)

    def test_same_week(self):
        assert same_week(date(2024, 6, 10), date(2024, 6, 16))
        assert not same_week(date(2024, 6, 16), date(2024, 6, 17))

    def test_days_between(self):
        assert days_between(date(2024, 6, 10), date(2024, 6, 12)) == 2
        assert days_between(date(2024, 6, 12), date(2024, 6, 10)) == -2
