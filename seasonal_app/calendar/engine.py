"""
Event calendar engine.

Generates the full market event calendar for a multi-year horizon from
deterministic rules and versioned tables, validates all configured dates
eagerly, and maintains three indices (by type, by year-month and by exact
date) so membership queries never scan the whole event list.

The calendar is read-only after construction and can be shared by any
number of extractors and aggregation runs.
"""

from bisect import bisect_left, bisect_right
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

from ..config.defaults import CalendarConfig, CalendarParams
from ..errors import CalendarConfigurationError
from ..logging.config import get_calendar_logger
from ..utils.time import DateLike, exchange_date, week_start
from . import rules
from .data import (
    DATED_TABLES,
    DEFAULT_RETAIL_SALES_DAY,
    GDP_RELEASE_SCHEDULE,
    MARKET_HOLIDAYS,
    RELEASE_TIMES,
    RETAIL_SALES_DAYS,
    TABLE_VERSION,
)
from .models import CalendarEvent, EventImpact, EventType, GDPRelease
from .validation import check_table_staleness, parse_iso_date, validate_iso_dates

logger = get_calendar_logger(__name__)

TRIPLE_WITCHING_MONTHS = (3, 6, 9, 12)
TRIPLE_WITCHING_NAME = "Triple Witching"
MONTHLY_EXPIRY_NAME = "Monthly Options Expiry"
SP500_REBALANCE_NAME = "S&P 500 Quarterly Rebalance"
RUSSELL_RECONSTITUTION_NAME = "Russell Reconstitution"

FOMC_TABLE = "FOMC decision dates"
CPI_TABLE = "CPI release dates"
HOLIDAY_TABLE = "Market holidays"
CENTRAL_BANKS = ("ECB", "BoE", "BoJ")


class EventCalendar:
    """
    Authoritative market event calendar.

    Construction fails fast with CalendarConfigurationError on any malformed
    table entry or configured date. Rule accessors such as
    ``nfp_release_date`` work for any year; indexed queries such as
    ``is_event_week`` cover the generated horizon plus any custom events.
    """

    def __init__(
        self,
        config: Optional[CalendarConfig] = None,
        params: Optional[CalendarParams] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> None:
        self.config = config or CalendarConfig()
        self.params = params or CalendarParams()
        now = now or datetime.now(timezone.utc)

        self.start_year = start_year if start_year is not None else now.year - self.params.history_years
        self.end_year = end_year if end_year is not None else now.year + self.params.future_years
        if self.start_year > self.end_year:
            raise CalendarConfigurationError(
                f"Calendar horizon is empty: {self.start_year} > {self.end_year}",
                config_context="horizon",
                value=(self.start_year, self.end_year),
            )

        self.earnings_months = self._validate_earnings_months(self.config.earnings_months)

        tables = {
            name: validate_iso_dates(values, name)
            for name, values in DATED_TABLES.items()
        }

        if self.config.rate_decision_dates is not None:
            self._rate_decisions = tuple(sorted(validate_iso_dates(
                self.config.rate_decision_dates, "rate decision overrides"
            )))
        else:
            self._rate_decisions = tuple(sorted(tables[FOMC_TABLE]))

        self._cpi_table = {(d.year, d.month): d for d in tables[CPI_TABLE]}
        self._holidays = dict(zip(tables[HOLIDAY_TABLE], MARKET_HOLIDAYS.values()))
        self._central_bank_dates = {
            bank: tuple(sorted(tables[f"{bank} decision dates"]))
            for bank in CENTRAL_BANKS
        }
        custom_events = [
            self._build_custom_event(i, raw)
            for i, raw in enumerate(self.config.custom_events)
        ]

        stale_candidates = {
            name: dates
            for name, dates in tables.items()
            if name != FOMC_TABLE or self.config.rate_decision_dates is None
        }
        self.table_version = TABLE_VERSION
        self.stale_tables = check_table_staleness(
            stale_candidates, now, self.params.staleness_warning_days
        )

        events = self._generate_events() + custom_events
        events.sort(key=lambda e: (e.date, e.type.value, e.name))
        self._events = tuple(events)

        self._custom_by_date: dict[date, list[CalendarEvent]] = defaultdict(list)
        for event in custom_events:
            self._custom_by_date[event.date].append(event)

        self._by_type: dict[EventType, list[CalendarEvent]] = defaultdict(list)
        self._by_month: dict[tuple[int, int], list[CalendarEvent]] = defaultdict(list)
        self._by_date: dict[date, list[CalendarEvent]] = defaultdict(list)
        self._build_indices()

        logger.info(
            "Event calendar built",
            start_year=self.start_year,
            end_year=self.end_year,
            event_count=len(self._events),
            custom_event_count=len(custom_events),
            table_version=self.table_version,
            stale_tables=self.stale_tables,
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_earnings_months(months: Any) -> tuple[int, ...]:
        if not months or not all(isinstance(m, int) and 1 <= m <= 12 for m in months):
            raise CalendarConfigurationError(
                f"Invalid earnings season months: {months!r}",
                config_context="earnings_months",
                value=months,
            )
        return tuple(sorted(set(months)))

    def _build_custom_event(self, index: int, raw: Union[CalendarEvent, dict[str, Any]]) -> CalendarEvent:
        if isinstance(raw, CalendarEvent):
            return raw
        if not isinstance(raw, dict):
            raise CalendarConfigurationError(
                f"Invalid custom event at custom events[{index}]: expected mapping",
                index=index,
                config_context="custom events",
                value=raw,
            )

        event_date = parse_iso_date(raw.get("date"), index, "custom events")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise CalendarConfigurationError(
                f"Invalid custom event at custom events[{index}]: missing name",
                index=index,
                config_context="custom events",
                value=raw,
            )

        try:
            event_type = EventType(raw.get("type", EventType.CUSTOM.value))
            impact = EventImpact(raw.get("impact", EventImpact.MEDIUM.value))
        except ValueError as e:
            raise CalendarConfigurationError(
                f"Invalid custom event at custom events[{index}]: {e}",
                index=index,
                config_context="custom events",
                value=raw,
            ) from e

        return CalendarEvent(
            date=event_date,
            name=name,
            type=event_type,
            impact=impact,
            description=raw.get("description", ""),
            ticker=raw.get("ticker"),
        )

    def _generate_events(self) -> list[CalendarEvent]:
        events: list[CalendarEvent] = []

        events.extend(
            CalendarEvent(
                date=d,
                name="FOMC Rate Decision",
                type=EventType.RATE_DECISION,
                impact=EventImpact.HIGH,
                description="Federal Reserve interest rate decision",
                release_time=RELEASE_TIMES["fomc"],
            )
            for d in self._rate_decisions
            if self.start_year <= d.year <= self.end_year
        )

        events.extend(
            CalendarEvent(
                date=d,
                name=name,
                type=EventType.MARKET_HOLIDAY,
                impact=EventImpact.LOW,
                description="NYSE closed",
            )
            for d, name in self._holidays.items()
            if self.start_year <= d.year <= self.end_year
        )

        for year in range(self.start_year, self.end_year + 1):
            for month in range(1, 13):
                events.extend(self._monthly_events(year, month))
            events.extend(self._jobless_claims_events(year))
            events.extend(
                CalendarEvent(
                    date=release.date,
                    name=f"GDP {release.estimate} Estimate",
                    type=EventType.ECONOMIC_INDICATOR,
                    impact=EventImpact.HIGH if release.estimate == "Advance" else EventImpact.MEDIUM,
                    description=f"BEA GDP {release.estimate.lower()} estimate for {release.quarter}",
                    release_time=RELEASE_TIMES["gdp"],
                )
                for release in self.gdp_releases(year)
            )
            election = self.election(year)
            if election is not None:
                election_date, kind = election
                events.append(CalendarEvent(
                    date=election_date,
                    name=f"{kind} Election",
                    type=EventType.ELECTION,
                    impact=EventImpact.HIGH,
                    description=f"US {kind.lower()} election day",
                ))

        return events

    def _monthly_events(self, year: int, month: int) -> list[CalendarEvent]:
        events = [
            CalendarEvent(
                date=self.cpi_release_date(year, month),
                name="CPI Release",
                type=EventType.PRICE_INDEX_RELEASE,
                impact=EventImpact.HIGH,
                description="Consumer Price Index release",
                release_time=RELEASE_TIMES["cpi"],
            ),
            CalendarEvent(
                date=self.nfp_release_date(year, month),
                name="Non-Farm Payrolls",
                type=EventType.LABOR_REPORT,
                impact=EventImpact.HIGH,
                description="Employment situation report",
                release_time=RELEASE_TIMES["nfp"],
            ),
            CalendarEvent(
                date=self.retail_sales_release_date(year, month),
                name="Retail Sales",
                type=EventType.ECONOMIC_INDICATOR,
                impact=EventImpact.MEDIUM,
                description="Advance monthly retail sales",
                release_time=RELEASE_TIMES["retail_sales"],
            ),
            CalendarEvent(
                date=self.ism_release_date(year, month),
                name="ISM Manufacturing PMI",
                type=EventType.ECONOMIC_INDICATOR,
                impact=EventImpact.MEDIUM,
                description="ISM manufacturing purchasing managers index",
                release_time=RELEASE_TIMES["ism"],
            ),
        ]

        expiry = self.options_expiry_date(year, month)
        if self.config.options_expiry_enabled:
            triple = month in TRIPLE_WITCHING_MONTHS
            events.append(CalendarEvent(
                date=expiry,
                name=TRIPLE_WITCHING_NAME if triple else MONTHLY_EXPIRY_NAME,
                type=EventType.OPTIONS_EXPIRY,
                impact=EventImpact.HIGH if triple else EventImpact.MEDIUM,
                description=(
                    "Quarterly expiration of stock options, index futures and index options"
                    if triple else "Monthly equity options expiration"
                ),
            ))

        if month in TRIPLE_WITCHING_MONTHS:
            events.append(CalendarEvent(
                date=expiry,
                name=SP500_REBALANCE_NAME,
                type=EventType.INDEX_REBALANCING,
                impact=EventImpact.MEDIUM,
                description="S&P 500 quarterly index rebalancing",
            ))

        if month == 6:
            events.append(CalendarEvent(
                date=self.russell_reconstitution_date(year),
                name=RUSSELL_RECONSTITUTION_NAME,
                type=EventType.INDEX_REBALANCING,
                impact=EventImpact.MEDIUM,
                description="Russell indexes annual reconstitution",
            ))

        return events

    def _jobless_claims_events(self, year: int) -> list[CalendarEvent]:
        events = []
        d = rules.nth_weekday_of_month(year, 1, rules.THURSDAY, 1)
        while d.year == year:
            if not rules.is_claims_holiday(d):
                events.append(CalendarEvent(
                    date=d,
                    name="Initial Jobless Claims",
                    type=EventType.ECONOMIC_INDICATOR,
                    impact=EventImpact.LOW,
                    description="Weekly initial unemployment insurance claims",
                    release_time=RELEASE_TIMES["jobless_claims"],
                ))
            d += timedelta(days=7)
        return events

    def _build_indices(self) -> None:
        for event in self._events:
            self._by_type[event.type].append(event)
            self._by_month[event.year_month].append(event)
            self._by_date[event.date].append(event)
        self._type_dates = {
            event_type: [e.date for e in events]
            for event_type, events in self._by_type.items()
        }

    # ------------------------------------------------------------------
    # Rule accessors
    # ------------------------------------------------------------------

    @property
    def rate_decision_dates(self) -> tuple[date, ...]:
        """All validated rate decision dates, including outside the horizon."""
        return self._rate_decisions

    def central_bank_decision_dates(self, bank: str) -> tuple[date, ...]:
        """Sorted decision dates for ECB, BoE or BoJ."""
        try:
            return self._central_bank_dates[bank]
        except KeyError:
            raise ValueError(
                f"Unknown central bank {bank!r}, expected one of {CENTRAL_BANKS}"
            ) from None

    def cpi_release_date(self, year: int, month: int) -> date:
        """Table date when published, otherwise the mid-month rule."""
        tabled = self._cpi_table.get((year, month))
        if tabled is not None:
            return tabled
        return rules.next_business_day(rules.algorithmic_cpi_date(year, month), self.is_market_holiday)

    def nfp_release_date(self, year: int, month: int) -> date:
        return rules.first_friday(year, month)

    def retail_sales_release_date(self, year: int, month: int) -> date:
        days = RETAIL_SALES_DAYS.get(year)
        if days is not None:
            return date(year, month, days[month - 1])
        return rules.next_business_day(
            date(year, month, DEFAULT_RETAIL_SALES_DAY), self.is_market_holiday
        )

    def ism_release_date(self, year: int, month: int) -> date:
        return rules.first_business_day(year, month, self.is_market_holiday)

    def options_expiry_date(self, year: int, month: int) -> date:
        """Third Friday, moved to Thursday when the exchange is closed."""
        return rules.previous_business_day(rules.third_friday(year, month), self.is_market_holiday)

    def russell_reconstitution_date(self, year: int) -> date:
        return rules.last_weekday_of_month(year, 6, rules.FRIDAY)

    def gdp_releases(self, year: int) -> list[GDPRelease]:
        releases = []
        for month, day, estimate, quarter in GDP_RELEASE_SCHEDULE:
            label = f"Q4-{year - 1}" if quarter < 0 else f"Q{quarter}-{year}"
            releases.append(GDPRelease(
                date=rules.next_business_day(date(year, month, day), self.is_market_holiday),
                estimate=estimate,
                quarter=label,
            ))
        return releases

    def election(self, year: int) -> Optional[tuple[date, str]]:
        """Election day and kind (Presidential or Midterm), None in off years."""
        kind = rules.election_kind(year)
        election_date = rules.election_day(year)
        if kind is None or election_date is None:
            return None
        return election_date, kind

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def events(self) -> tuple[CalendarEvent, ...]:
        return self._events

    def is_market_holiday(self, value: DateLike) -> bool:
        return exchange_date(value) in self._holidays

    def is_business_day(self, value: DateLike) -> bool:
        d = exchange_date(value)
        return not rules.is_weekend(d) and d not in self._holidays

    def is_earnings_season(self, value: DateLike) -> bool:
        return exchange_date(value).month in self.earnings_months

    def get_events_in_week(self, value: DateLike) -> list[CalendarEvent]:
        """All exact-date events in the Monday-Sunday week containing the date."""
        start = week_start(value)
        events = []
        for offset in range(7):
            events.extend(self._by_date.get(start + timedelta(days=offset), ()))
        return events

    def is_event_week(self, value: DateLike, event_type: EventType) -> bool:
        """Check whether an event of the given type falls in the date's week."""
        if event_type == EventType.EARNINGS_SEASON:
            start = week_start(value)
            return any(self.is_earnings_season(start + timedelta(days=i)) for i in range(7))
        return any(e.type == event_type for e in self.get_events_in_week(value))

    def get_events_for_date(self, value: DateLike) -> list[CalendarEvent]:
        """
        Get events relevant to a date.

        Week-level derived events (FOMC Week, Options Expiry Week, Earnings
        Season) come first, followed by events scheduled on the exact date.
        """
        d = exchange_date(value)
        events = []

        if self.is_event_week(d, EventType.RATE_DECISION):
            events.append(CalendarEvent(
                date=d,
                name="FOMC Week",
                type=EventType.RATE_DECISION,
                impact=EventImpact.HIGH,
                description="Federal Reserve decision this week",
            ))

        if self.config.options_expiry_enabled and self.is_event_week(d, EventType.OPTIONS_EXPIRY):
            events.append(CalendarEvent(
                date=d,
                name="Options Expiry Week",
                type=EventType.OPTIONS_EXPIRY,
                impact=EventImpact.MEDIUM,
                description="Monthly options expiration this week",
            ))

        if self.is_earnings_season(d):
            events.append(CalendarEvent(
                date=d,
                name="Earnings Season",
                type=EventType.EARNINGS_SEASON,
                impact=EventImpact.MEDIUM,
                description="Quarterly earnings reporting season",
            ))

        events.extend(self._by_date.get(d, ()))
        return events

    def get_custom_events_for_date(self, value: DateLike) -> list[CalendarEvent]:
        """Configured custom events scheduled on the exact date."""
        return list(self._custom_by_date.get(exchange_date(value), ()))

    def get_custom_events_in_week(self, value: DateLike) -> list[CalendarEvent]:
        start = week_start(value)
        events = []
        for offset in range(7):
            events.extend(self._custom_by_date.get(start + timedelta(days=offset), ()))
        return events

    def get_events_by_type(
        self,
        event_type: EventType,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> list[CalendarEvent]:
        """Events of one type in an inclusive date range, ordered by date."""
        events = self._by_type.get(event_type, [])
        dates = self._type_dates.get(event_type, [])
        lo = bisect_left(dates, exchange_date(start)) if start is not None else 0
        hi = bisect_right(dates, exchange_date(end)) if end is not None else len(dates)
        return list(events[lo:hi])

    def get_events_for_month(self, year: int, month: int) -> list[CalendarEvent]:
        return list(self._by_month.get((year, month), ()))
