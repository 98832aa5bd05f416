"""
Seasonal statistics aggregator.

Buckets a price series by period type and computes per-bucket return
statistics, named composite patterns, a summary and narrative insights.
The aggregator is a pure function of its inputs: the calendar and
extractors are read-only, so one instance can serve concurrent requests.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..calendar import rules
from ..calendar.engine import EventCalendar
from ..config.defaults import EventWindowParams, StatisticsParams
from ..data.bars import sort_bars
from ..errors import InsufficientDataError
from ..extractors.base import CUSTOM_EVENT, HOURLY, PeriodExtractor
from ..extractors.registry import (
    build_event_extractors,
    build_structural_extractors,
    get_compatible_extractors,
)
from ..logging.config import get_analysis_logger, log_pattern_summary
from ..models.patterns import (
    PriceBar,
    SeasonalAnalysisRequest,
    SeasonalAnalysisResult,
    SeasonalPattern,
)
from ..utils.time import exchange_date
from .insights import NAMED_PATTERN, generate_insights, summarize_patterns
from .statistics import compute_returns, sample_year, summarize_bucket

logger = get_analysis_logger(__name__)

DAILY_PERIOD_TYPES = (
    "month-of-year",
    "quarter",
    "day-of-week",
    "day-of-month",
    "week-of-month",
    "week-position",
)
HOURLY_PERIOD_TYPES = DAILY_PERIOD_TYPES + ("hour-of-day", "market-session")

END_OF_YEAR_RALLY = "End-of-Year-Rally"
SUMMER_WEAKNESS = "Summer-Weakness"
NEW_YEAR_EFFECT = "New-Year-Effect"
SUMMER_MONTHS = range(5, 11)

Sample = tuple[PriceBar, float]


class SeasonalAggregator:
    """Computes seasonal patterns for one price series at a time."""

    def __init__(
        self,
        calendar: EventCalendar,
        params: Optional[StatisticsParams] = None,
        event_params: Optional[EventWindowParams] = None,
    ) -> None:
        self.calendar = calendar
        self.params = params or StatisticsParams()
        self.event_params = event_params or EventWindowParams()
        self.structural = build_structural_extractors()

    def resolve_period_types(self, request: SeasonalAnalysisRequest) -> list[str]:
        """
        Period types to compute for a request.

        Unknown and timeframe-incompatible types are skipped. Defaults add
        ``named-pattern``; ``custom-event`` is added when event analysis is
        requested.
        """
        requested = list(request.period_types) or [
            *(HOURLY_PERIOD_TYPES if request.timeframe == HOURLY else DAILY_PERIOD_TYPES),
            NAMED_PATTERN,
        ]
        if request.include_events and CUSTOM_EVENT not in requested:
            requested.append(CUSTOM_EVENT)

        compatible = {
            e.period_type
            for e in get_compatible_extractors(self.structural.values(), request.timeframe)
        }
        resolved = []
        for period_type in requested:
            if period_type in resolved:
                continue
            if period_type in (CUSTOM_EVENT, NAMED_PATTERN) or period_type in compatible:
                resolved.append(period_type)
            else:
                logger.debug("Skipping period type", period_type=period_type, timeframe=request.timeframe)
        return resolved

    def aggregate(
        self,
        request: SeasonalAnalysisRequest,
        bars: Sequence[PriceBar],
        dividend_ex_dates: Iterable[date] = (),
    ) -> SeasonalAnalysisResult:
        """
        Bucket bars and compute statistics.

        Args:
            request: Symbol, timeframe and requested period types
            bars: Price series, any order
            dividend_ex_dates: Resolved ex-dates for dividend event labels

        Returns:
            Result snapshot; an insufficient-data result for short series
        """
        try:
            ordered = self._prepare_bars(bars)
        except InsufficientDataError as e:
            logger.warning(
                "Insufficient data for seasonal analysis",
                symbol=request.symbol,
                required=e.required_count,
                available=e.available_count,
            )
            return SeasonalAnalysisResult.insufficient_data(
                request.symbol, request.timeframe, e.available_count, e.required_count
            )

        samples = compute_returns(ordered)
        patterns: dict[str, tuple[SeasonalPattern, ...]] = {}

        for period_type in self.resolve_period_types(request):
            if period_type == CUSTOM_EVENT:
                extractors = get_compatible_extractors(
                    build_event_extractors(self.calendar, dividend_ex_dates, self.event_params),
                    request.timeframe,
                )
                buckets = self._bucket_events(samples, extractors)
            elif period_type == NAMED_PATTERN:
                buckets = self._named_patterns(samples)
            else:
                buckets = self._bucket_structural(samples, self.structural[period_type])
            if buckets:
                patterns[period_type] = buckets

        summary = summarize_patterns(patterns, self.params)
        insights = generate_insights(patterns, self.params)

        log_pattern_summary(
            logger,
            request.symbol,
            request.timeframe,
            {period_type: len(buckets) for period_type, buckets in patterns.items()},
            context={"bars": len(ordered), "samples": len(samples)},
        )

        return SeasonalAnalysisResult.success(
            symbol=request.symbol,
            timeframe=request.timeframe,
            period_start=exchange_date(ordered[0].timestamp),
            period_end=exchange_date(ordered[-1].timestamp),
            data_point_count=len(ordered),
            patterns=patterns,
            summary=summary,
            insights=insights,
        )

    def _prepare_bars(self, bars: Sequence[PriceBar]) -> list[PriceBar]:
        valid = [bar for bar in bars if bar.is_valid()]
        if len(valid) < len(bars):
            logger.warning("Dropped invalid bars", dropped=len(bars) - len(valid))
        if len(valid) < self.params.min_bars:
            raise InsufficientDataError(
                f"Need at least {self.params.min_bars} bars, got {len(valid)}",
                required_count=self.params.min_bars,
                available_count=len(valid),
            )
        return sort_bars(valid)

    def _summarize(self, period_type: str, grouped: dict[str, list[tuple[int, float]]],
                   order: list[str]) -> tuple[SeasonalPattern, ...]:
        patterns = []
        for label in order:
            pattern = summarize_bucket(
                period_type, label, grouped[label], self.params.significance_min_samples
            )
            if pattern is not None:
                patterns.append(pattern)
        return tuple(patterns)

    def _bucket_structural(self, samples: Sequence[Sample],
                           extractor: PeriodExtractor) -> tuple[SeasonalPattern, ...]:
        # One sample per bar: week-of-month and day-of-month count occurrences, not months.
        grouped: dict[str, list[tuple[int, float]]] = defaultdict(list)
        for bar, value in samples:
            label = extractor.extract(bar.timestamp)
            if label is not None:
                grouped[label].append((sample_year(bar), value))

        sort_key = getattr(extractor, "sort_key", None)
        order = sorted(grouped, key=sort_key) if sort_key is not None else sorted(grouped)
        return self._summarize(extractor.period_type, grouped, order)

    def _bucket_events(self, samples: Sequence[Sample],
                       extractors: Sequence[PeriodExtractor]) -> tuple[SeasonalPattern, ...]:
        grouped: dict[str, list[tuple[int, float]]] = defaultdict(list)
        for bar, value in samples:
            year = sample_year(bar)
            for extractor in extractors:
                label = extractor.extract(bar.timestamp)
                if label is not None:
                    grouped[label].append((year, value))
        return self._summarize(CUSTOM_EVENT, grouped, sorted(grouped))

    def _complete_decembers(self, samples: Sequence[Sample]) -> dict[int, list[date]]:
        """December dates by year, for years whose last trading day is in the series."""
        december_dates: dict[int, set[date]] = defaultdict(set)
        for bar, _ in samples:
            d = exchange_date(bar.timestamp)
            if d.month == 12:
                december_dates[d.year].add(d)
        if not december_dates:
            return {}

        last_seen = exchange_date(samples[-1][0].timestamp)
        complete = {}
        for year, dates in december_dates.items():
            final_session = rules.previous_business_day(date(year, 12, 31), self.calendar.is_market_holiday)
            if max(dates) >= final_session or last_seen > date(year, 12, 31):
                complete[year] = sorted(dates)
            else:
                logger.debug("Partial December excluded from year-end rally", year=year,
                             last_date=max(dates).isoformat())
        return complete

    def _named_patterns(self, samples: Sequence[Sample]) -> tuple[SeasonalPattern, ...]:
        rally_dates = {
            d
            for dates in self._complete_decembers(samples).values()
            for d in dates[-self.params.end_of_year_days:]
        }

        grouped: dict[str, list[tuple[int, float]]] = defaultdict(list)
        for bar, value in samples:
            d = exchange_date(bar.timestamp)
            if d in rally_dates:
                grouped[END_OF_YEAR_RALLY].append((d.year, value))
            if d.month in SUMMER_MONTHS:
                grouped[SUMMER_WEAKNESS].append((d.year, value))
            if d.month == 1:
                grouped[NEW_YEAR_EFFECT].append((d.year, value))

        order = [name for name in (END_OF_YEAR_RALLY, SUMMER_WEAKNESS, NEW_YEAR_EFFECT) if name in grouped]
        return self._summarize(NAMED_PATTERN, grouped, order)
