"""
Calendar event extractors.

Labels for rate decision weeks, options expiry, triple witching, earnings
season, elections, index rebalancing, dividend ex-dates and configured
custom events.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from ..calendar.engine import TRIPLE_WITCHING_MONTHS, EventCalendar
from ..calendar.models import EventImpact
from ..calendar.rules import add_months, previous_business_day
from ..utils.time import DateLike, exchange_date, same_week
from .base import CUSTOM_EVENT, DAILY, decision_in_week, nearest_date, week_label

ELECTION_PRE_DAYS = 5
ELECTION_POST_DAYS = 10
REBALANCE_WINDOW_DAYS = 5
IMPACT_RANK = {EventImpact.HIGH: 0, EventImpact.MEDIUM: 1, EventImpact.LOW: 2}


class FOMCWeekExtractor:
    name = "fomc-week"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar
        self._dates = list(calendar.rate_decision_dates)

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return "FOMC-Week" if decision_in_week(self._dates, timestamp) is not None else None


class OptionsExpiryExtractor:
    """Week containing the monthly options expiration."""

    name = "options-expiry"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar
        self.enabled = calendar.config.options_expiry_enabled

    def expiry_for(self, value: DateLike) -> date:
        d = exchange_date(value)
        return nearest_date(d, (
            self.calendar.options_expiry_date(year, month)
            for year, month in (add_months(d.year, d.month, delta) for delta in (-1, 0, 1))
        ))

    def extract(self, timestamp: DateLike) -> Optional[str]:
        if not self.enabled:
            return None
        return "Options-Expiry-Week" if same_week(timestamp, self.expiry_for(timestamp)) else None


class TripleWitchingExtractor:
    """Quarterly expiry in March, June, September and December."""

    name = "triple-witching"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar

    def expiry_for(self, value: DateLike) -> Optional[date]:
        d = exchange_date(value)
        return nearest_date(d, (
            self.calendar.options_expiry_date(year, month)
            for year, month in (add_months(d.year, d.month, delta) for delta in (-1, 0, 1))
            if month in TRIPLE_WITCHING_MONTHS
        ))

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return week_label(timestamp, self.expiry_for(timestamp), "Triple-Witching")


class EarningsSeasonExtractor:
    name = "earnings-season"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar

    def extract(self, timestamp: DateLike) -> Optional[str]:
        return "Earnings-Season" if self.calendar.is_earnings_season(timestamp) else None


class ElectionExtractor:
    """
    US election day and its surrounding window.

    The window runs from five days before to ten days after election day.
    """

    name = "election"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar

    def window_for(self, value: DateLike) -> Optional[tuple[date, str]]:
        d = exchange_date(value)
        election = self.calendar.election(d.year)
        if election is None:
            return None
        election_date, kind = election
        offset = (d - election_date).days
        if -ELECTION_PRE_DAYS <= offset <= ELECTION_POST_DAYS:
            return election_date, kind
        return None

    def extract(self, timestamp: DateLike) -> Optional[str]:
        window = self.window_for(timestamp)
        if window is None:
            return None
        election_date, kind = window
        if exchange_date(timestamp) == election_date:
            return f"{kind}-Election-Day"
        return f"{kind}-Election-Window"


class IndexRebalancingExtractor:
    """S&P 500 quarterly rebalancing and the annual Russell reconstitution."""

    name = "index-rebalancing"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar

    def extract(self, timestamp: DateLike) -> Optional[str]:
        d = exchange_date(timestamp)
        sp500 = nearest_date(d, (
            self.calendar.options_expiry_date(year, month)
            for year, month in (add_months(d.year, d.month, delta) for delta in (-1, 0, 1))
            if month in TRIPLE_WITCHING_MONTHS
        ))
        russell = self.calendar.russell_reconstitution_date(d.year)

        if d == sp500:
            return "SP500-Rebalancing-Day"
        if d == russell:
            return "Russell-Rebalancing-Day"
        if sp500 is not None and abs((d - sp500).days) <= REBALANCE_WINDOW_DAYS:
            return "SP500-Rebalancing-Window"
        if abs((d - russell).days) <= REBALANCE_WINDOW_DAYS:
            return "Russell-Reconstitution-Window"
        return None


class DividendExDateExtractor:
    """
    Dividend capture dates for one symbol.

    ``Dividend-Ex-Date`` on the ex-date and ``Dividend-Cum-Date`` on the
    last trading day before it. Ex-dates are resolved before aggregation.
    """

    name = "dividend"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar, ex_dates: Iterable[date]) -> None:
        self.calendar = calendar
        self.ex_dates = frozenset(ex_dates)
        self.cum_dates = frozenset(
            previous_business_day(d - timedelta(days=1), calendar.is_market_holiday)
            for d in self.ex_dates
        )

    def extract(self, timestamp: DateLike) -> Optional[str]:
        d = exchange_date(timestamp)
        if d in self.ex_dates:
            return "Dividend-Ex-Date"
        if d in self.cum_dates:
            return "Dividend-Cum-Date"
        return None


class CustomEventExtractor:
    """
    Events supplied through configuration.

    Labels a date with the name of its highest-impact configured event;
    events of equal impact keep calendar order.
    """

    name = "configured-event"
    period_type = CUSTOM_EVENT
    granularity = DAILY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar

    def extract(self, timestamp: DateLike) -> Optional[str]:
        events = self.calendar.get_custom_events_for_date(timestamp)
        if not events:
            return None
        return min(events, key=lambda e: IMPACT_RANK[e.impact]).name
