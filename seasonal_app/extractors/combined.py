"""
Combined event detection.

Finds weeks in which several market-moving events coincide and classifies
them against a fixed catalog of combinations, each carrying a documented
volatility multiplier relative to a normal week. Three or more distinct
high-impact event types in one week always classify as the maximal
Multiple-HighImpact-Week category.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

import structlog

from ..calendar.engine import TRIPLE_WITCHING_MONTHS, EventCalendar
from ..calendar.models import EventType
from ..models.patterns import EventCombination
from ..utils.time import DateLike, week_end, week_start
from .base import CUSTOM_EVENT, DAILY, decision_in_week
from .events import ElectionExtractor

logger = structlog.get_logger(__name__)

# Active event types considered by the detector
RATE_DECISION = "rate-decision"
TRIPLE_WITCHING = "triple-witching"
PRICE_INDEX = "price-index"
LABOR_REPORT = "labor-report"
EARNINGS_SEASON = "earnings-season"
OPTIONS_EXPIRY = "options-expiry"
INDEX_REBALANCING = "index-rebalancing"
ELECTION = "election"
GDP = "gdp"

ACTIVE_TYPE_ORDER = (
    RATE_DECISION, TRIPLE_WITCHING, PRICE_INDEX, LABOR_REPORT, ELECTION,
    GDP, EARNINGS_SEASON, OPTIONS_EXPIRY, INDEX_REBALANCING,
)
HIGH_IMPACT_TYPES = frozenset({RATE_DECISION, TRIPLE_WITCHING, PRICE_INDEX, LABOR_REPORT, ELECTION})

# Active type for configured custom events, by calendar event type
CUSTOM_TYPE_MAP = {
    EventType.RATE_DECISION: RATE_DECISION,
    EventType.PRICE_INDEX_RELEASE: PRICE_INDEX,
    EventType.LABOR_REPORT: LABOR_REPORT,
    EventType.OPTIONS_EXPIRY: OPTIONS_EXPIRY,
    EventType.INDEX_REBALANCING: INDEX_REBALANCING,
    EventType.ELECTION: ELECTION,
    EventType.EARNINGS_SEASON: EARNINGS_SEASON,
}

MULTIPLE_HIGH_IMPACT = "Multiple-HighImpact-Week"
MIN_HIGH_IMPACT_FOR_MULTIPLE = 3


@dataclass(frozen=True)
class CombinationSpec:
    """Catalog entry for a combination type"""
    type: str
    event_types: tuple[str, ...]
    volatility_multiplier: float
    expected_impact: str
    description: str


COMBINATION_CATALOG: tuple[CombinationSpec, ...] = (
    CombinationSpec("FOMC+OptionsExpiry-Week", (RATE_DECISION, OPTIONS_EXPIRY), 2.1, "high",
                    "Fed decision during monthly options expiration week"),
    CombinationSpec("FOMC+TripleWitching-Week", (RATE_DECISION, TRIPLE_WITCHING), 2.8, "very-high",
                    "Fed decision during quarterly triple witching week"),
    CombinationSpec("FOMC+Earnings-Week", (RATE_DECISION, EARNINGS_SEASON), 2.3, "high",
                    "Fed decision during earnings season"),
    CombinationSpec("FOMC+CPI-Week", (RATE_DECISION, PRICE_INDEX), 2.6, "very-high",
                    "Fed decision and CPI release in the same week"),
    CombinationSpec("FOMC+NFP-Week", (RATE_DECISION, LABOR_REPORT), 2.9, "very-high",
                    "Fed decision and jobs report in the same week"),
    CombinationSpec("FOMC+GDP-Week", (RATE_DECISION, GDP), 2.4, "high",
                    "Fed decision and GDP release in the same week"),
    CombinationSpec("CPI+NFP-Week", (PRICE_INDEX, LABOR_REPORT), 2.5, "very-high",
                    "Inflation and employment data in the same week"),
    CombinationSpec("CPI+Earnings-Week", (PRICE_INDEX, EARNINGS_SEASON), 2.0, "high",
                    "CPI release during earnings season"),
    CombinationSpec("NFP+Earnings-Week", (LABOR_REPORT, EARNINGS_SEASON), 1.9, "high",
                    "Jobs report during earnings season"),
    CombinationSpec("TripleWitching+Earnings-Week", (TRIPLE_WITCHING, EARNINGS_SEASON), 2.7, "very-high",
                    "Quarterly expiration during earnings season"),
    CombinationSpec("TripleWitching+FOMC-Week", (TRIPLE_WITCHING, RATE_DECISION), 2.8, "very-high",
                    "Quarterly expiration during a Fed decision week"),
    CombinationSpec("Election+FOMC-Week", (ELECTION, RATE_DECISION), 3.1, "extreme",
                    "Fed decision inside an election window"),
    CombinationSpec("Election+CPI-Week", (ELECTION, PRICE_INDEX), 2.7, "very-high",
                    "CPI release inside an election window"),
    CombinationSpec("GDP+CPI-Week", (GDP, PRICE_INDEX), 2.2, "high",
                    "GDP and CPI releases in the same week"),
    CombinationSpec("GDP+Earnings-Week", (GDP, EARNINGS_SEASON), 2.0, "high",
                    "GDP release during earnings season"),
    CombinationSpec("IndexRebalancing+Earnings-Week", (INDEX_REBALANCING, EARNINGS_SEASON), 2.1, "high",
                    "Index rebalancing during earnings season"),
    CombinationSpec(MULTIPLE_HIGH_IMPACT, (), 3.5, "extreme",
                    "Three or more high-impact events in the same week"),
)

_CATALOG_BY_TYPE = {spec.type: spec for spec in COMBINATION_CATALOG}

# Pairwise match order; TripleWitching+FOMC-Week is reached through FOMC+TripleWitching-Week.
PAIR_PRIORITY: tuple[str, ...] = (
    "Election+FOMC-Week",
    "Election+CPI-Week",
    "FOMC+TripleWitching-Week",
    "FOMC+NFP-Week",
    "FOMC+CPI-Week",
    "CPI+NFP-Week",
    "TripleWitching+Earnings-Week",
    "FOMC+GDP-Week",
    "FOMC+Earnings-Week",
    "FOMC+OptionsExpiry-Week",
    "GDP+CPI-Week",
    "CPI+Earnings-Week",
    "NFP+Earnings-Week",
    "GDP+Earnings-Week",
    "IndexRebalancing+Earnings-Week",
)


def _ordered(types: frozenset[str]) -> tuple[str, ...]:
    return tuple(t for t in ACTIVE_TYPE_ORDER if t in types)


class CombinedEventDetector:
    """
    Classify weeks by co-occurring events.

    Also usable as a period extractor: ``extract`` returns the combination
    type for the week containing the timestamp.
    """

    name = "combined-event"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar
        self.election = ElectionExtractor(calendar)

    def get_active_event_types(self, value: DateLike) -> frozenset[str]:
        """
        Distinct event types active in the Monday-Sunday week of the date.

        Scheduled events come from the calendar's rule accessors, so weeks
        outside the generated horizon classify the same way as weeks inside
        it. Configured custom events add their mapped types.
        """
        calendar = self.calendar
        start = week_start(value)
        end = start + timedelta(days=6)
        months = sorted({(start.year, start.month), (end.year, end.month)})
        years = sorted({start.year, end.year})

        def in_week(dates: Iterable[date]) -> bool:
            return any(start <= d <= end for d in dates)

        active = set()
        if decision_in_week(calendar.rate_decision_dates, start) is not None:
            active.add(RATE_DECISION)
        if in_week(calendar.cpi_release_date(y, m) for y, m in months):
            active.add(PRICE_INDEX)
        if in_week(calendar.nfp_release_date(y, m) for y, m in months):
            active.add(LABOR_REPORT)

        expiries = {m: calendar.options_expiry_date(y, m) for y, m in months}
        if calendar.config.options_expiry_enabled and in_week(expiries.values()):
            active.add(OPTIONS_EXPIRY)
        if in_week(d for m, d in expiries.items() if m in TRIPLE_WITCHING_MONTHS):
            active.add(TRIPLE_WITCHING)
            active.add(INDEX_REBALANCING)
        if in_week(calendar.russell_reconstitution_date(y) for y in years):
            active.add(INDEX_REBALANCING)
        if in_week(r.date for y in years for r in calendar.gdp_releases(y)):
            active.add(GDP)

        if calendar.is_event_week(start, EventType.EARNINGS_SEASON):
            active.add(EARNINGS_SEASON)
        if any(self.election.window_for(start + timedelta(days=i)) for i in range(7)):
            active.add(ELECTION)

        for event in calendar.get_custom_events_in_week(start):
            if event.type == EventType.ECONOMIC_INDICATOR and "GDP" in event.name:
                active.add(GDP)
            elif event.type in CUSTOM_TYPE_MAP:
                active.add(CUSTOM_TYPE_MAP[event.type])

        return frozenset(active)

    def detect_event_combination(self, value: DateLike) -> Optional[EventCombination]:
        """
        Classify the week containing the date.

        Returns:
            The matching combination, or None when no catalog entry applies
        """
        active = self.get_active_event_types(value)
        if not active:
            return None

        high_impact = active & HIGH_IMPACT_TYPES
        if len(high_impact) >= MIN_HIGH_IMPACT_FOR_MULTIPLE:
            return self._build(MULTIPLE_HIGH_IMPACT, value, _ordered(high_impact))

        for combination_type in PAIR_PRIORITY:
            spec = _CATALOG_BY_TYPE[combination_type]
            if all(t in active for t in spec.event_types):
                return self._build(combination_type, value, _ordered(frozenset(spec.event_types)))

        return None

    def _build(self, combination_type: str, value: DateLike,
               triggering: tuple[str, ...]) -> EventCombination:
        spec = _CATALOG_BY_TYPE[combination_type]
        return EventCombination(
            type=spec.type,
            week_start=week_start(value),
            week_end=week_end(value),
            triggering_event_types=triggering,
            volatility_multiplier=spec.volatility_multiplier,
            expected_impact=spec.expected_impact,
            description=spec.description,
        )

    def extract(self, timestamp: DateLike) -> Optional[str]:
        combination = self.detect_event_combination(timestamp)
        return combination.type if combination is not None else None

    def find_combinations(self, start: DateLike, end: DateLike) -> list[EventCombination]:
        """Scan week by week and collect every classified week in the range."""
        combinations = []
        current: date = week_start(start)
        last = week_start(end)
        while current <= last:
            combination = self.detect_event_combination(current)
            if combination is not None:
                combinations.append(combination)
            current += timedelta(days=7)

        logger.debug(
            "Combined event scan complete",
            start=week_start(start).isoformat(),
            end=last.isoformat(),
            combinations=len(combinations),
        )
        return combinations

    @staticmethod
    def get_all_combinations() -> list[CombinationSpec]:
        return list(COMBINATION_CATALOG)

    @staticmethod
    def get_volatility_multiplier(combination_type: str) -> float:
        """Documented multiplier for a combination type, 1.0 for unknown types."""
        spec = _CATALOG_BY_TYPE.get(combination_type)
        return spec.volatility_multiplier if spec is not None else 1.0
