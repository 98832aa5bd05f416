"""
Result cache key contract.

Aggregation results are pure functions of (symbol, years, timeframe) and
the schema version, so callers may memoize them under the key built here.
Entries written under an older schema are rejected by
``is_cache_entry_current`` and must be recomputed.
"""

from typing import Any, Mapping

from ..models.patterns import SCHEMA_VERSION

CACHE_NAMESPACE = "seasonal"

REQUIRED_FIELDS = (
    "symbol",
    "timeframe",
    "period",
    "data_point_count",
    "patterns",
    "summary",
    "insights",
    "schema_version",
)


def build_cache_key(symbol: str, years: int, timeframe: str,
                    schema_version: int = SCHEMA_VERSION) -> str:
    """Versioned key, e.g. ``seasonal:v3:SPY:5:daily``."""
    return f"{CACHE_NAMESPACE}:v{schema_version}:{symbol.upper()}:{years}:{timeframe}"


def is_cache_entry_current(entry: Any) -> bool:
    """Check that a cached result dict was written by the current schema."""
    if not isinstance(entry, Mapping):
        return False
    if entry.get("schema_version") != SCHEMA_VERSION:
        return False
    return all(name in entry for name in REQUIRED_FIELDS)
