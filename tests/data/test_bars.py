"""Tests for price bar normalization."""

import math
from datetime import date, datetime, timezone

import pytest

from seasonal_app.data.bars import normalize_bar, normalize_bars, parse_timestamp
from seasonal_app.errors import MalformedDataError, MissingDataError
from seasonal_app.models.patterns import PriceBar


def raw(**overrides):
    bar = {"timestamp": "2024-06-12", "open": 100, "high": 102, "low": 99, "close": 101}
    bar.update(overrides)
    return bar


class TestParseTimestamp:
    """Test timestamp coercion."""

    def test_iso_date_is_naive_midnight(self):
        assert parse_timestamp("2024-06-12") == datetime(2024, 6, 12)

    def test_iso_datetime_with_zulu(self):
        assert parse_timestamp("2024-06-12T13:30:00Z") == datetime(2024, 6, 12, 13, 30, tzinfo=timezone.utc)

    def test_epoch_seconds_and_millis(self):
        expected = datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert parse_timestamp(int(expected.timestamp())) == expected
        assert parse_timestamp(int(expected.timestamp() * 1000)) == expected

    def test_date_and_datetime(self):
        assert parse_timestamp(date(2024, 6, 12)) == datetime(2024, 6, 12)
        ts = datetime(2024, 6, 12, 9, 30)
        assert parse_timestamp(ts) is ts

    @pytest.mark.parametrize("value", ["yesterday", None, True])
    def test_invalid(self, value):
        with pytest.raises(MalformedDataError):
            parse_timestamp(value)


class TestNormalizeBar:
    """Test single-bar validation."""

    def test_mapping(self):
        bar = normalize_bar(raw(close="101.5", volume="2500"))
        assert bar.close == 101.5
        assert bar.volume == 2500.0
        assert bar.timestamp == datetime(2024, 6, 12)

    def test_date_key_accepted(self):
        data = raw()
        data["date"] = data.pop("timestamp")
        assert normalize_bar(data).timestamp == datetime(2024, 6, 12)

    def test_missing_fields(self):
        with pytest.raises(MissingDataError) as exc_info:
            normalize_bar({"timestamp": "2024-06-12", "open": 1, "high": 1, "low": 1})
        assert exc_info.value.data_type == "close"

        with pytest.raises(MissingDataError):
            normalize_bar({"open": 1, "high": 1, "low": 1, "close": 1})

    @pytest.mark.parametrize("overrides", [
        {"close": "abc"},
        {"close": math.nan},
        {"high": 98},
        {"low": -1},
    ])
    def test_malformed(self, overrides):
        with pytest.raises(MalformedDataError):
            normalize_bar(raw(**overrides))

    def test_unsupported_type(self):
        with pytest.raises(MalformedDataError):
            normalize_bar([1, 2, 3, 4])


class TestNormalizeBars:
    """Test series normalization."""

    def test_drops_sorts_and_dedupes(self):
        bars = normalize_bars([
            raw(timestamp="2024-06-13", close=101.5),
            raw(timestamp="2024-06-12"),
            raw(timestamp="2024-06-14", high=1),
            raw(timestamp="2024-06-12", close=100.5),
            PriceBar(datetime(2024, 6, 11), 100, 101, 99, 100),
        ])
        assert [b.timestamp.day for b in bars] == [11, 12, 13]
        assert bars[1].close == 100.5

    def test_mixed_naive_and_aware(self):
        bars = normalize_bars([
            raw(timestamp="2024-06-12T14:00:00+00:00"),
            raw(timestamp="2024-06-12"),
        ])
        assert bars[0].timestamp == datetime(2024, 6, 12)
