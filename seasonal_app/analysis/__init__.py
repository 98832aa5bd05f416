"""
Seasonal statistics aggregation.

Bucketing, per-bucket statistics, narrative insights and the versioned
cache key contract for analysis results.
"""

from .aggregator import SeasonalAggregator
from .cache import build_cache_key, is_cache_entry_current

__all__ = ["SeasonalAggregator", "build_cache_key", "is_cache_entry_current"]
