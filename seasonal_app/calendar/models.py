"""
Calendar event data models.

Events are immutable once constructed and are shared read-only between the
calendar indices, extractors and the combined event detector.
"""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Any, Optional


class EventType(str, Enum):
    """Calendar event categories."""
    RATE_DECISION = "macro-rate-decision"
    PRICE_INDEX_RELEASE = "price-index-release"
    LABOR_REPORT = "labor-report"
    OPTIONS_EXPIRY = "options-expiry"
    EARNINGS_SEASON = "earnings-season"
    ELECTION = "election"
    INDEX_REBALANCING = "index-rebalancing"
    DIVIDEND_EX_DATE = "dividend-ex-date"
    ECONOMIC_INDICATOR = "economic-indicator"
    MARKET_HOLIDAY = "market-holiday"
    CUSTOM = "custom"


class EventImpact(str, Enum):
    """Expected market impact of an event."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class CalendarEvent:
    """A single scheduled market event."""
    date: date
    name: str
    type: EventType
    impact: EventImpact
    description: str = ""
    ticker: Optional[str] = None
    release_time: Optional[time] = None    # Eastern exchange time, if scheduled

    @property
    def year_month(self) -> tuple[int, int]:
        """Index key for the by-month lookup."""
        return (self.date.year, self.date.month)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-ready data."""
        return {
            "date": self.date.isoformat(),
            "name": self.name,
            "type": self.type.value,
            "impact": self.impact.value,
            "description": self.description,
            "ticker": self.ticker,
            "release_time": self.release_time.strftime("%H:%M") if self.release_time else None,
        }


@dataclass(frozen=True)
class GDPRelease:
    """A scheduled GDP estimate release."""
    date: date
    estimate: str       # Advance, Second or Third
    quarter: str        # e.g. Q4-2023
