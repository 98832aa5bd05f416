"""
Seasonal analysis engine coordinator.

Wires the event calendar, extractors and aggregator to the injected price
and dividend providers. Provider failures are turned into explicit error
results; the engine never retries, that is the provider's responsibility.
"""

from dataclasses import fields
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

import structlog

from .analysis.aggregator import SeasonalAggregator
from .analysis.cache import build_cache_key
from .calendar.dividends import DividendCalendar, DividendProvider
from .calendar.engine import EventCalendar
from .config.defaults import CalendarParams, EventWindowParams, StatisticsParams
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.bars import RawBar, normalize_bars
from .errors import CalendarConfigurationError, MissingDataError, ProviderError
from .extractors.combined import CombinedEventDetector
from .extractors.macro import (
    CPIReleaseExtractor,
    GDPReleaseExtractor,
    ISMManufacturingExtractor,
    JoblessClaimsExtractor,
    NFPReleaseExtractor,
    RetailSalesExtractor,
)
from .models.patterns import (
    EventCombination,
    EventWindowAnalysis,
    PriceBar,
    SeasonalAnalysisRequest,
    SeasonalAnalysisResult,
)

logger = structlog.get_logger(__name__)

PriceProvider = Callable[[str, date, date, str], Iterable[RawBar]]

TIMEFRAMES = ("daily", "hourly")


def _params_from(cls: Any, values: dict[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    kwargs = {k: tuple(v) if isinstance(v, list) else v for k, v in values.items() if k in known}
    return cls(**kwargs)


def _years_before(d: date, years: int) -> date:
    try:
        return d.replace(year=d.year - years)
    except ValueError:
        return d.replace(year=d.year - years, day=28)


class SeasonalAnalysisEngine:
    """
    Main coordinator for seasonal pattern analysis.

    Pipeline:
    Provider → Normalization → Calendar/Extractors → Aggregation → Result
    """

    def __init__(
        self,
        price_provider: PriceProvider,
        dividend_provider: Optional[DividendProvider] = None,
        calendar: Optional[EventCalendar] = None,
        config_dir: Optional[Union[str, Path]] = None,
        config_overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize the engine, validating configuration eagerly."""
        self.price_provider = price_provider
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)

        config = self.config_loader.merge_config(config_overrides)
        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            logger.error("Configuration validation failed", errors=error_msgs)
            raise CalendarConfigurationError(
                "Invalid seasonal analysis configuration: " + "; ".join(error_msgs),
                config_context="config",
                value=error_msgs,
            )

        self.calendar_params = _params_from(CalendarParams, config.get("calendar", {}))
        self.statistics_params = _params_from(StatisticsParams, config.get("statistics", {}))
        self.event_window_params = _params_from(EventWindowParams, config.get("event_window", {}))

        self.calendar = calendar or EventCalendar(
            self.config_loader.load_calendar_config(config_overrides),
            self.calendar_params,
        )
        self.aggregator = SeasonalAggregator(
            self.calendar, self.statistics_params, self.event_window_params
        )
        self.dividends = DividendCalendar(dividend_provider) if dividend_provider else None
        self.combined_detector = CombinedEventDetector(self.calendar)
        self.release_extractors = {
            extractor.name: extractor
            for extractor in (
                CPIReleaseExtractor(self.calendar, self.event_window_params),
                NFPReleaseExtractor(self.calendar, self.event_window_params),
                RetailSalesExtractor(self.calendar, self.event_window_params),
                ISMManufacturingExtractor(self.calendar, self.event_window_params),
                JoblessClaimsExtractor(self.calendar, self.event_window_params),
                GDPReleaseExtractor(self.calendar, self.event_window_params),
            )
        }

        logger.info(
            "Seasonal analysis engine initialized",
            calendar_events=len(self.calendar.events),
            dividend_provider=self.dividends is not None,
        )

    def cache_key(self, request: SeasonalAnalysisRequest) -> str:
        return build_cache_key(request.symbol, request.years, request.timeframe)

    def analyze(
        self,
        request: SeasonalAnalysisRequest,
        now: Optional[datetime] = None,
    ) -> SeasonalAnalysisResult:
        """
        Run a seasonal analysis for one symbol.

        Args:
            request: Analysis parameters
            now: Reference time for the history window (defaults to UTC now)

        Returns:
            Result snapshot; error results carry the failure message
        """
        if request.timeframe not in TIMEFRAMES:
            return SeasonalAnalysisResult.error(
                request.symbol, request.timeframe,
                f"Unsupported timeframe {request.timeframe!r}, expected one of {TIMEFRAMES}",
            )
        if request.years <= 0:
            return SeasonalAnalysisResult.error(
                request.symbol, request.timeframe, f"years must be positive, got {request.years}"
            )

        end = (now or datetime.now(timezone.utc)).date()
        start = _years_before(end, request.years)

        logger.info(
            "Starting seasonal analysis",
            symbol=request.symbol,
            timeframe=request.timeframe,
            start=start.isoformat(),
            end=end.isoformat(),
            cache_key=self.cache_key(request),
        )

        try:
            bars = self._fetch_bars(request, start, end)
            ex_dates = self._fetch_ex_dates(request, end)
        except (ProviderError, MissingDataError) as e:
            logger.error(
                "Seasonal analysis aborted",
                symbol=request.symbol,
                error=str(e),
                error_type=type(e).__name__,
            )
            return SeasonalAnalysisResult.error(request.symbol, request.timeframe, str(e))

        return self.aggregator.aggregate(request, bars, ex_dates)

    def _fetch_bars(self, request: SeasonalAnalysisRequest, start: date, end: date) -> list[PriceBar]:
        try:
            raw_bars = self.price_provider(request.symbol, start, end, request.timeframe)
        except Exception as e:
            raise ProviderError(
                f"Price history lookup failed for {request.symbol}: {e}",
                provider="price",
                symbol=request.symbol,
            ) from e

        if raw_bars is None:
            raise MissingDataError(
                f"Price provider returned no data for {request.symbol}",
                data_type="price_bars",
            )
        return normalize_bars(raw_bars)

    def _fetch_ex_dates(self, request: SeasonalAnalysisRequest, end: date) -> list[date]:
        if not request.include_events or self.dividends is None:
            return []
        return self.dividends.get_ex_dates(request.symbol, until=end)

    def analyze_event_window(
        self,
        event: str,
        value: Union[date, datetime],
        bars: Iterable[RawBar],
    ) -> EventWindowAnalysis:
        """
        Volatility around a scheduled release.

        Args:
            event: Release extractor name (cpi, nfp, retail-sales, ism, jobless-claims, gdp)
            value: Reference date
            bars: Price series covering the event and baseline windows
        """
        extractor = self.release_extractors.get(event)
        if extractor is None:
            raise ValueError(
                f"Unknown release {event!r}, expected one of {sorted(self.release_extractors)}"
            )
        return extractor.analyze_event_window(value, normalize_bars(bars))

    def find_event_combinations(self, start: date, end: date) -> list[EventCombination]:
        return self.combined_detector.find_combinations(start, end)
