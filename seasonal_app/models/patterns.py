"""Data models for seasonal pattern analysis"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

# Bump when result fields or period types change so cached results are recomputed.
SCHEMA_VERSION = 3

STATUS_OK = "ok"
STATUS_INSUFFICIENT_DATA = "insufficient-data"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class PriceBar:
    """OHLCV bar. Naive timestamps are exchange-local, aware ones are converted."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def is_valid(self) -> bool:
        """Prices must be finite and positive with a consistent range."""
        prices = (self.open, self.high, self.low, self.close)
        if not all(isinstance(p, (int, float)) and math.isfinite(p) and p > 0 for p in prices):
            return False
        return self.low <= min(self.open, self.close) and self.high >= max(self.open, self.close)


@dataclass(frozen=True)
class SeasonalPattern:
    """Aggregate statistics for one period bucket"""
    period_type: str
    label: str
    avg_return: float          # Mean per-bar return, percent
    return_std_dev: float      # Population std dev of per-bar returns, percent
    win_rate: float            # Percent of positive returns, 0-100
    win_count: int
    loss_count: int            # Non-positive returns
    sample_count: int
    best_occurrence: Optional[str] = None    # Year with highest summed return
    worst_occurrence: Optional[str] = None   # Year with lowest summed return
    is_significant: bool = False

    @property
    def key(self) -> str:
        return f"{self.period_type}: {self.label}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_type": self.period_type,
            "label": self.label,
            "avg_return": self.avg_return,
            "return_std_dev": self.return_std_dev,
            "win_rate": self.win_rate,
            "win_count": self.win_count,
            "loss_count": self.loss_count,
            "sample_count": self.sample_count,
            "best_occurrence": self.best_occurrence,
            "worst_occurrence": self.worst_occurrence,
            "is_significant": self.is_significant,
        }


@dataclass(frozen=True)
class EventCombination:
    """A week in which several market-moving events coincide"""
    type: str
    week_start: date
    week_end: date
    triggering_event_types: tuple[str, ...]
    volatility_multiplier: float
    expected_impact: str       # extreme, very-high or high
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "triggering_event_types": list(self.triggering_event_types),
            "volatility_multiplier": self.volatility_multiplier,
            "expected_impact": self.expected_impact,
            "description": self.description,
        }


@dataclass(frozen=True)
class EventWindowAnalysis:
    """Realized volatility around a scheduled release"""
    is_event_week: bool
    days_until_release: int
    expected_impact: str
    volatility_change: Optional[float] = None      # Percent increase over baseline
    insights: tuple[str, ...] = ()
    release_date: Optional[date] = None
    event_volatility: Optional[float] = None
    baseline_volatility: Optional[float] = None
    release_hour_move: Optional[float] = None      # Largest release-hour move, percent


@dataclass(frozen=True)
class SeasonalAnalysisRequest:
    """Parameters of one seasonal analysis run"""
    symbol: str
    years: int = 5
    timeframe: str = "daily"             # daily or hourly
    period_types: tuple[str, ...] = ()   # Empty selects the timeframe defaults
    include_events: bool = True


@dataclass(frozen=True)
class PatternSummary:
    """Best, worst and strong buckets across all period types"""
    best_periods: tuple[str, ...] = ()
    worst_periods: tuple[str, ...] = ()
    strong_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class SeasonalAnalysisResult:
    """Immutable snapshot returned by the aggregator"""
    symbol: str
    timeframe: str
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    data_point_count: int = 0
    patterns: dict[str, tuple[SeasonalPattern, ...]] = field(default_factory=dict)
    summary: PatternSummary = field(default_factory=PatternSummary)
    insights: tuple[str, ...] = ()
    status: str = STATUS_OK
    error_msg: Optional[str] = None
    schema_version: int = SCHEMA_VERSION

    @classmethod
    def success(cls, symbol: str, timeframe: str, period_start: date, period_end: date,
                data_point_count: int, patterns: dict[str, tuple[SeasonalPattern, ...]],
                summary: PatternSummary, insights: list[str]) -> "SeasonalAnalysisResult":
        """Create successful result."""
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            period_start=period_start,
            period_end=period_end,
            data_point_count=data_point_count,
            patterns=patterns,
            summary=summary,
            insights=tuple(insights),
        )

    @classmethod
    def insufficient_data(cls, symbol: str, timeframe: str, available: int,
                          required: int) -> "SeasonalAnalysisResult":
        """Create result for a series too short to analyze."""
        message = (
            f"Insufficient data: {available} bars available, "
            f"at least {required} required for seasonal analysis"
        )
        return cls(
            symbol=symbol,
            timeframe=timeframe,
            data_point_count=available,
            insights=(message,),
            status=STATUS_INSUFFICIENT_DATA,
            error_msg=message,
        )

    @classmethod
    def error(cls, symbol: str, timeframe: str, error_msg: str) -> "SeasonalAnalysisResult":
        """Create error result."""
        return cls(symbol=symbol, timeframe=timeframe, status=STATUS_ERROR, error_msg=error_msg)

    @property
    def is_success(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict[str, Any]:
        period = None
        if self.period_start is not None and self.period_end is not None:
            period = {"start": self.period_start.isoformat(), "end": self.period_end.isoformat()}
        return {
            "symbol": self.symbol,
            "timeframe": self.timeframe,
            "period": period,
            "data_point_count": self.data_point_count,
            "patterns": {
                period_type: [p.to_dict() for p in buckets]
                for period_type, buckets in self.patterns.items()
            },
            "summary": {
                "best_periods": list(self.summary.best_periods),
                "worst_periods": list(self.summary.worst_periods),
                "strong_patterns": list(self.summary.strong_patterns),
            },
            "insights": list(self.insights),
            "status": self.status,
            "error_msg": self.error_msg,
            "schema_version": self.schema_version,
        }
