"""
Central bank decision extractors.

The Fed extractor refines the decision day by Eastern hour around the 2 PM
statement. ECB and Bank of England decisions land before the US open, so
their decision day is split at the 7-10 AM Eastern reaction window. Bank of
Japan decisions are announced late morning in Tokyo, which is the previous
evening in New York; the first US session to trade on them is the Tokyo
decision date itself.

Decision schedules are validated by the EventCalendar at construction.
"""

from datetime import datetime, timedelta
from typing import Optional

from ..calendar.engine import EventCalendar
from ..utils.time import DateLike, eastern_hour, exchange_date
from .base import ANY, CUSTOM_EVENT, decision_in_week

BOJ_OVERNIGHT_START_HOUR = 20    # Announcement window, evening before in New York
BOJ_PRESS_HOURS = range(1, 5)    # Governor press conference, early morning Eastern


class FedDecisionExtractor:
    name = "fed-decision"
    period_type = CUSTOM_EVENT
    granularity = ANY

    def __init__(self, calendar: EventCalendar) -> None:
        self.calendar = calendar
        self._dates = list(calendar.rate_decision_dates)

    def extract(self, timestamp: DateLike) -> Optional[str]:
        decision = decision_in_week(self._dates, timestamp)
        if decision is None:
            return None
        if exchange_date(timestamp) != decision:
            return "Fed-Decision-Week"
        if not isinstance(timestamp, datetime):
            return "Fed-Decision-Day"

        hour = eastern_hour(timestamp)
        if hour == 14:
            return "Fed-Decision-Day-2PM"
        if 9 <= hour < 14:
            return "Fed-Decision-Day-PreMarket"
        if hour == 15:
            return "Fed-Decision-Day-PostAnnouncement"
        return "Fed-Decision-Day"


class CentralBankDecisionExtractor:
    """Foreign central bank decision day and week, keyed by the calendar's schedule."""

    period_type = CUSTOM_EVENT
    granularity = ANY

    def __init__(self, calendar: EventCalendar, bank: str) -> None:
        self.calendar = calendar
        self.bank = bank
        self.name = f"{bank.lower()}-decision"
        self._dates = calendar.central_bank_decision_dates(bank)

    def extract(self, timestamp: DateLike) -> Optional[str]:
        decision = decision_in_week(self._dates, timestamp)
        if decision is None:
            return None
        if exchange_date(timestamp) != decision:
            return f"{self.bank}-Decision-Week"
        if isinstance(timestamp, datetime) and 7 <= eastern_hour(timestamp) < 10:
            return f"{self.bank}-Decision-Day-USOpen"
        return f"{self.bank}-Decision-Day"


class BoJDecisionExtractor(CentralBankDecisionExtractor):
    """
    Bank of Japan decisions mapped to US trading time.

    Labels:
    - ``BoJ-Decision-Overnight``: evening hours (Eastern) before the Tokyo date
    - ``BoJ-Decision-PressConference``: early morning Eastern on the Tokyo date
    - ``BoJ-Decision-Day``: the US session reacting to the decision
    - ``BoJ-Decision-Week``: elsewhere in the decision week
    """

    def __init__(self, calendar: EventCalendar) -> None:
        super().__init__(calendar, "BoJ")
        self._date_set = frozenset(self._dates)

    def extract(self, timestamp: DateLike) -> Optional[str]:
        d = exchange_date(timestamp)
        intraday = isinstance(timestamp, datetime)

        if (intraday and eastern_hour(timestamp) >= BOJ_OVERNIGHT_START_HOUR
                and d + timedelta(days=1) in self._date_set):
            return "BoJ-Decision-Overnight"

        decision = decision_in_week(self._dates, timestamp)
        if decision is None:
            return None
        if d != decision:
            return "BoJ-Decision-Week"
        if intraday and eastern_hour(timestamp) in BOJ_PRESS_HOURS:
            return "BoJ-Decision-PressConference"
        return "BoJ-Decision-Day"


def ecb_extractor(calendar: EventCalendar) -> CentralBankDecisionExtractor:
    return CentralBankDecisionExtractor(calendar, "ECB")


def boe_extractor(calendar: EventCalendar) -> CentralBankDecisionExtractor:
    return CentralBankDecisionExtractor(calendar, "BoE")


def boj_extractor(calendar: EventCalendar) -> BoJDecisionExtractor:
    return BoJDecisionExtractor(calendar)
