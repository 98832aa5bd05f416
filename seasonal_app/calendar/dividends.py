"""
Per-symbol dividend ex-date resolution.

Ex-dates come from an injected provider. Results are cached per symbol for
about a day because every analysis run asks again. When the provider's
history stops short of the requested horizon, later ex-dates are projected
on a quarterly cadence from the last known one.
"""

import threading
import time
from datetime import date, timedelta
from typing import Callable, Iterable, Optional

import structlog

from ..errors import ProviderError
from .models import CalendarEvent, EventImpact, EventType

logger = structlog.get_logger(__name__)

DividendProvider = Callable[[str], Iterable[date]]

QUARTERLY_CADENCE = timedelta(days=91)
DEFAULT_TTL_SECONDS = 24 * 60 * 60


def estimate_quarterly_ex_dates(known: list[date], until: date) -> list[date]:
    """Extend known ex-dates on a quarterly cadence up to ``until``."""
    if not known:
        return []
    estimated = []
    next_date = max(known) + QUARTERLY_CADENCE
    while next_date <= until:
        estimated.append(next_date)
        next_date += QUARTERLY_CADENCE
    return estimated


def dividend_events(symbol: str, ex_dates: Iterable[date]) -> list[CalendarEvent]:
    """Calendar events for a symbol's ex-dates."""
    return [
        CalendarEvent(
            date=d,
            name=f"{symbol} Ex-Dividend",
            type=EventType.DIVIDEND_EX_DATE,
            impact=EventImpact.LOW,
            description=f"{symbol} trades ex-dividend",
            ticker=symbol,
        )
        for d in sorted(set(ex_dates))
    ]


class DividendCalendar:
    """TTL-cached view over a dividend ex-date provider."""

    def __init__(
        self,
        provider: DividendProvider,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._cache: dict[str, tuple[float, list[date]]] = {}
        self._lock = threading.Lock()

    def _fetch(self, symbol: str) -> list[date]:
        now = self.clock()
        with self._lock:
            cached = self._cache.get(symbol)
            if cached is not None and now - cached[0] < self.ttl_seconds:
                return cached[1]

        try:
            ex_dates = sorted(set(self.provider(symbol)))
        except Exception as e:
            logger.error("Dividend provider failed", symbol=symbol, error=str(e))
            raise ProviderError(
                f"Dividend ex-date lookup failed for {symbol}: {e}",
                provider="dividend",
                symbol=symbol,
            ) from e

        with self._lock:
            self._cache[symbol] = (now, ex_dates)

        logger.debug("Dividend ex-dates fetched", symbol=symbol, count=len(ex_dates))
        return ex_dates

    def get_ex_dates(self, symbol: str, until: Optional[date] = None) -> list[date]:
        """
        Resolve ex-dates for a symbol.

        Args:
            symbol: Ticker symbol
            until: Horizon end; known dates are extended quarterly up to it

        Returns:
            Sorted ex-dates, known and estimated

        Raises:
            ProviderError: If the provider raises
        """
        known = list(self._fetch(symbol))
        if until is None:
            return known
        return known + estimate_quarterly_ex_dates(known, until)

    def invalidate(self, symbol: Optional[str] = None) -> None:
        with self._lock:
            if symbol is None:
                self._cache.clear()
            else:
                self._cache.pop(symbol, None)
