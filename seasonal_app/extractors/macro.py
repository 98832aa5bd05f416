"""
Macro release extractors.

Scheduled economic releases resolved through the EventCalendar: CPI,
non-farm payrolls, retail sales, ISM manufacturing, weekly jobless claims
and GDP. Each extractor labels the release day and its surroundings and can
analyze realized volatility around the release.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

from ..calendar.data import RELEASE_TIMES
from ..calendar.engine import EventCalendar
from ..calendar.models import GDPRelease
from ..calendar.rules import THURSDAY, add_months, is_claims_day
from ..config.defaults import EventWindowParams
from ..models.patterns import EventWindowAnalysis, PriceBar
from ..utils.time import DateLike, exchange_date, week_start
from .base import CUSTOM_EVENT, DAILY, analyze_release_window, nearest_date, week_label

CPI_WINDOW_DAYS = 5
GDP_IMPACT = {"Advance": "high", "Second": "medium", "Third": "low"}


def _adjacent_months(d: date) -> list[tuple[int, int]]:
    return [add_months(d.year, d.month, delta) for delta in (-1, 0, 1)]


class CPIReleaseExtractor:
    """
    Consumer price index release window.

    ``CPI-Release-Day`` on the release date, ``CPI-T-N`` / ``CPI-T+N`` for
    calendar days within five of it.
    """

    name = "cpi"
    period_type = CUSTOM_EVENT
    granularity = DAILY
    expected_impact = "high"

    def __init__(self, calendar: EventCalendar, params: Optional[EventWindowParams] = None) -> None:
        self.calendar = calendar
        self.params = params or EventWindowParams()

    def release_date_for(self, value: DateLike) -> Optional[date]:
        d = exchange_date(value)
        return nearest_date(d, (
            self.calendar.cpi_release_date(year, month)
            for year, month in _adjacent_months(d)
        ))

    def extract(self, timestamp: DateLike) -> Optional[str]:
        d = exchange_date(timestamp)
        release = self.release_date_for(d)
        offset = (d - release).days
        if offset == 0:
            return "CPI-Release-Day"
        if 0 < abs(offset) <= CPI_WINDOW_DAYS:
            return f"CPI-T{'+' if offset > 0 else '-'}{abs(offset)}"
        return None

    def analyze_event_window(self, value: DateLike, bars: Sequence[PriceBar]) -> EventWindowAnalysis:
        return analyze_release_window(
            value, self.release_date_for(value), bars, "CPI",
            self.expected_impact, RELEASE_TIMES["cpi"], self.params,
        )


class NFPReleaseExtractor:
    """Non-farm payrolls, released on the first Friday of the month."""

    name = "nfp"
    period_type = CUSTOM_EVENT
    granularity = DAILY
    expected_impact = "high"

    def __init__(self, calendar: EventCalendar, params: Optional[EventWindowParams] = None) -> None:
        self.calendar = calendar
        self.params = params or EventWindowParams()

    def release_date_for(self, value: DateLike) -> Optional[date]:
        # The week of a first Friday on the 1st-3rd starts in the previous month,
        # so the next month's release has to be considered too.
        d = exchange_date(value)
        return nearest_date(d, (
            self.calendar.nfp_release_date(year, month)
            for year, month in _adjacent_months(d)
        ))

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return week_label(timestamp, self.release_date_for(timestamp), "NFP")

    def analyze_event_window(self, value: DateLike, bars: Sequence[PriceBar]) -> EventWindowAnalysis:
        return analyze_release_window(
            value, self.release_date_for(value), bars, "NFP",
            self.expected_impact, RELEASE_TIMES["nfp"], self.params,
        )


class RetailSalesExtractor:
    """Advance retail sales, mid-month per the published schedule."""

    name = "retail-sales"
    period_type = CUSTOM_EVENT
    granularity = DAILY
    expected_impact = "medium"

    def __init__(self, calendar: EventCalendar, params: Optional[EventWindowParams] = None) -> None:
        self.calendar = calendar
        self.params = params or EventWindowParams()

    def release_date_for(self, value: DateLike) -> Optional[date]:
        d = exchange_date(value)
        return nearest_date(d, (
            self.calendar.retail_sales_release_date(year, month)
            for year, month in _adjacent_months(d)
        ))

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return week_label(timestamp, self.release_date_for(timestamp), "Retail-Sales")

    def analyze_event_window(self, value: DateLike, bars: Sequence[PriceBar]) -> EventWindowAnalysis:
        return analyze_release_window(
            value, self.release_date_for(value), bars, "Retail Sales",
            self.expected_impact, RELEASE_TIMES["retail_sales"], self.params,
        )


class ISMManufacturingExtractor:
    """ISM manufacturing PMI, first business day of the month. Always medium impact."""

    name = "ism"
    period_type = CUSTOM_EVENT
    granularity = DAILY
    expected_impact = "medium"

    def __init__(self, calendar: EventCalendar, params: Optional[EventWindowParams] = None) -> None:
        self.calendar = calendar
        self.params = params or EventWindowParams()

    def release_date_for(self, value: DateLike) -> Optional[date]:
        d = exchange_date(value)
        return nearest_date(d, (
            self.calendar.ism_release_date(year, month)
            for year, month in _adjacent_months(d)
        ))

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return week_label(timestamp, self.release_date_for(timestamp), "ISM")

    def analyze_event_window(self, value: DateLike, bars: Sequence[PriceBar]) -> EventWindowAnalysis:
        return analyze_release_window(
            value, self.release_date_for(value), bars, "ISM",
            self.expected_impact, RELEASE_TIMES["ism"], self.params,
        )


class JoblessClaimsExtractor:
    """Weekly initial claims, every Thursday except the major holidays."""

    name = "jobless-claims"
    period_type = CUSTOM_EVENT
    granularity = DAILY
    expected_impact = "low"

    def __init__(self, calendar: EventCalendar, params: Optional[EventWindowParams] = None) -> None:
        self.calendar = calendar
        self.params = params or EventWindowParams()

    def release_date_for(self, value: DateLike) -> Optional[date]:
        thursday = week_start(value) + timedelta(days=THURSDAY)
        return thursday if is_claims_day(thursday) else None

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return "Jobless-Claims-Day" if is_claims_day(exchange_date(timestamp)) else None

    def analyze_event_window(self, value: DateLike, bars: Sequence[PriceBar]) -> EventWindowAnalysis:
        return analyze_release_window(
            value, self.release_date_for(value), bars, "Jobless Claims",
            self.expected_impact, RELEASE_TIMES["jobless_claims"], self.params,
        )


class GDPReleaseExtractor:
    """GDP advance, second and third estimates."""

    name = "gdp"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar, params: Optional[EventWindowParams] = None) -> None:
        self.calendar = calendar
        self.params = params or EventWindowParams()

    def release_for(self, value: DateLike) -> Optional[GDPRelease]:
        d = exchange_date(value)
        releases = {
            release.date: release
            for year in (d.year - 1, d.year, d.year + 1)
            for release in self.calendar.gdp_releases(year)
        }
        nearest = nearest_date(d, releases)
        return releases.get(nearest) if nearest is not None else None

    def release_date_for(self, value: DateLike) -> Optional[date]:
        release = self.release_for(value)
        return release.date if release is not None else None

    def extract(self, timestamp: DateLike) -> Optional[str]:
        release = self.release_for(timestamp)
        if release is None:
            return None
        return week_label(timestamp, release.date, f"GDP-{release.estimate}")

    def analyze_event_window(self, value: DateLike, bars: Sequence[PriceBar]) -> EventWindowAnalysis:
        release = self.release_for(value)
        estimate = release.estimate if release is not None else "Advance"
        return analyze_release_window(
            value, release.date if release is not None else None, bars,
            f"GDP {estimate}", GDP_IMPACT[estimate], RELEASE_TIMES["gdp"], self.params,
        )
