"""
Price bar normalization.

Providers return bars in loosely typed shapes (dataclasses, mappings with
ISO strings, epoch milliseconds or numeric strings). This module converts
them into validated PriceBar objects, raising structured data quality
errors for anything that cannot be repaired.
"""

import math
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Union

import structlog

from ..errors import DataQualityError, MalformedDataError, MissingDataError
from ..models.patterns import PriceBar

logger = structlog.get_logger(__name__)

PRICE_FIELDS = ("open", "high", "low", "close")

RawBar = Union[PriceBar, Mapping[str, Any]]


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a bar timestamp.

    Date-only values become naive exchange-local midnights. Epoch values
    (milliseconds when large) become aware UTC datetimes.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > 1e11 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return datetime.combine(date.fromisoformat(text), datetime.min.time())
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise MalformedDataError(
                f"Unparseable bar timestamp: {value!r}",
                raw_data=str(value)[:100],
                expected_format="ISO 8601 date or datetime",
            ) from e
    raise MalformedDataError(
        f"Unsupported bar timestamp type: {type(value).__name__}",
        raw_data=str(value)[:100],
        expected_format="ISO 8601 date or datetime",
    )


def _parse_price(raw: Mapping[str, Any], name: str) -> float:
    value = raw.get(name)
    if value is None:
        raise MissingDataError(f"Bar missing {name}", data_type=name)
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(
            f"Invalid {name} value: {value!r}",
            raw_data=str(value)[:100],
            expected_format="number",
        ) from e
    if not math.isfinite(price):
        raise MalformedDataError(f"Non-finite {name} value", raw_data=str(value)[:100])
    return price


def normalize_bar(raw: RawBar) -> PriceBar:
    """
    Convert a raw provider bar into a validated PriceBar.

    Raises:
        MissingDataError: If a required field is absent
        MalformedDataError: If a field cannot be parsed or OHLC is inconsistent
    """
    if isinstance(raw, PriceBar):
        bar = raw
    elif isinstance(raw, Mapping):
        stamp = raw.get("timestamp", raw.get("date"))
        if stamp is None:
            raise MissingDataError("Bar missing timestamp", data_type="timestamp")
        volume = raw.get("volume")
        bar = PriceBar(
            timestamp=parse_timestamp(stamp),
            open=_parse_price(raw, "open"),
            high=_parse_price(raw, "high"),
            low=_parse_price(raw, "low"),
            close=_parse_price(raw, "close"),
            volume=float(volume) if volume is not None else 0.0,
        )
    else:
        raise MalformedDataError(
            f"Unsupported bar type: {type(raw).__name__}",
            raw_data=str(raw)[:100],
            expected_format="PriceBar or mapping",
        )

    if not bar.is_valid():
        raise MalformedDataError(
            "Inconsistent or non-positive OHLC prices",
            raw_data=str(raw)[:100],
            context={"timestamp": bar.timestamp.isoformat()},
        )
    return bar


def normalize_bars(raw_bars: Iterable[RawBar]) -> list[PriceBar]:
    """
    Normalize a provider series, dropping bars that fail validation.

    Returns:
        Valid bars sorted by timestamp with duplicate timestamps removed
    """
    bars: dict[datetime, PriceBar] = {}
    rejected = 0

    for raw in raw_bars:
        try:
            bar = normalize_bar(raw)
        except DataQualityError as e:
            rejected += 1
            logger.debug("Bar rejected", error=str(e), error_type=type(e).__name__)
            continue
        bars[bar.timestamp] = bar

    if rejected:
        logger.warning("Rejected malformed bars", rejected_count=rejected, accepted_count=len(bars))

    return sort_bars(bars.values())


def sort_bars(bars: Iterable[PriceBar]) -> list[PriceBar]:
    """Chronological order; naive timestamps compare as if they were UTC."""
    def key(bar: PriceBar) -> datetime:
        ts = bar.timestamp
        return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts

    return sorted(bars, key=key)
