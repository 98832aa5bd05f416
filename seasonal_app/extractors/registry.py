"""
Extractor registry.

Builds the standard extractor lists for an EventCalendar and filters them
by the timeframe of the bar series being analyzed.
"""

from datetime import date
from typing import Iterable, Optional

from ..calendar.engine import EventCalendar
from ..config.defaults import EventWindowParams
from .base import HOURLY, PeriodExtractor
from .central_banks import FedDecisionExtractor, boe_extractor, boj_extractor, ecb_extractor
from .combined import CombinedEventDetector
from .events import (
    CustomEventExtractor,
    DividendExDateExtractor,
    EarningsSeasonExtractor,
    ElectionExtractor,
    FOMCWeekExtractor,
    IndexRebalancingExtractor,
    OptionsExpiryExtractor,
    TripleWitchingExtractor,
)
from .macro import (
    CPIReleaseExtractor,
    GDPReleaseExtractor,
    ISMManufacturingExtractor,
    JoblessClaimsExtractor,
    NFPReleaseExtractor,
    RetailSalesExtractor,
)
from .structural import (
    DayOfMonthExtractor,
    DayOfWeekExtractor,
    HourOfDayExtractor,
    MarketSessionExtractor,
    MonthOfYearExtractor,
    QuarterExtractor,
    WeekOfMonthExtractor,
    WeekOfYearExtractor,
    WeekPositionExtractor,
)


def build_structural_extractors() -> dict[str, PeriodExtractor]:
    """Structural extractors keyed by their period type."""
    extractors = (
        MonthOfYearExtractor(),
        QuarterExtractor(),
        DayOfWeekExtractor(),
        HourOfDayExtractor(),
        MarketSessionExtractor(),
        DayOfMonthExtractor(),
        WeekOfMonthExtractor(),
        WeekOfYearExtractor(),
        WeekPositionExtractor(),
    )
    return {extractor.period_type: extractor for extractor in extractors}


def build_event_extractors(
    calendar: EventCalendar,
    dividend_ex_dates: Iterable[date] = (),
    params: Optional[EventWindowParams] = None,
) -> list[PeriodExtractor]:
    """Custom-event extractors, combined detector last."""
    extractors: list[PeriodExtractor] = [
        CPIReleaseExtractor(calendar, params),
        NFPReleaseExtractor(calendar, params),
        RetailSalesExtractor(calendar, params),
        ISMManufacturingExtractor(calendar, params),
        JoblessClaimsExtractor(calendar, params),
        GDPReleaseExtractor(calendar, params),
        FOMCWeekExtractor(calendar),
        FedDecisionExtractor(calendar),
        ecb_extractor(calendar),
        boe_extractor(calendar),
        boj_extractor(calendar),
        OptionsExpiryExtractor(calendar),
        TripleWitchingExtractor(calendar),
        EarningsSeasonExtractor(calendar),
        ElectionExtractor(calendar),
        IndexRebalancingExtractor(calendar),
        CustomEventExtractor(calendar),
    ]

    ex_dates = tuple(dividend_ex_dates)
    if ex_dates:
        extractors.append(DividendExDateExtractor(calendar, ex_dates))

    extractors.append(CombinedEventDetector(calendar))
    return extractors


def get_compatible_extractors(
    extractors: Iterable[PeriodExtractor],
    timeframe: str,
) -> list[PeriodExtractor]:
    """Drop extractors that need intraday bars when the series is daily."""
    if timeframe == HOURLY:
        return list(extractors)
    return [e for e in extractors if e.granularity != HOURLY]
