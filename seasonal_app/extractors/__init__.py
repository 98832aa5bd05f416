"""
Period extractors.

Each extractor maps a timestamp to a period label (or None) using the
EventCalendar as a read-only reference. The aggregator and the combined
event detector iterate a registered list of them.
"""

from .base import ANY, CUSTOM_EVENT, DAILY, HOURLY, PeriodExtractor

__all__ = ["ANY", "CUSTOM_EVENT", "DAILY", "HOURLY", "PeriodExtractor"]
