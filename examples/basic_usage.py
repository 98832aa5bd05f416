#!/usr/bin/env python3
"""
Basic Usage Example - Seasonal Pattern Engine

This script demonstrates the basic usage of the seasonal analysis engine
with a synthetic price provider. It shows how to:
- Initialize the engine with a price provider
- Run a seasonal analysis and read its insights
- Inspect event combinations and a release window

Run: python examples/basic_usage.py
"""

import json
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any

from seasonal_app.engine import SeasonalAnalysisEngine
from seasonal_app.logging import configure_logging
from seasonal_app.models.patterns import SeasonalAnalysisRequest


def synthetic_provider(symbol: str, start: date, end: date, timeframe: str) -> list[dict[str, Any]]:
    """Daily weekday bars with a mild year-end drift."""
    bars = []
    close = 100.0
    d = start
    while d <= end:
        if d.weekday() < 5:
            drift = 0.25 if d.month == 12 else 0.02
            change = drift + 0.8 * math.sin(d.toordinal() * 1.7)
            open_price = close
            close = open_price * (1 + change / 100)
            bars.append({
                "date": d.isoformat(),
                "open": open_price,
                "high": max(open_price, close) * 1.002,
                "low": min(open_price, close) * 0.998,
                "close": close,
                "volume": 1_000_000,
            })
        d += timedelta(days=1)
    return bars


def main() -> None:
    configure_logging(level="WARNING")

    engine = SeasonalAnalysisEngine(synthetic_provider)
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    print("📅 Seasonal analysis for SPY (5 years, daily)")
    result = engine.analyze(SeasonalAnalysisRequest("SPY", years=5), now=now)
    print(f"Status: {result.status}, bars: {result.data_point_count}")
    for line in result.insights:
        print(f"  • {line}")

    print("\n🏆 Best periods")
    for key in result.summary.best_periods:
        print(f"  • {key}")

    print("\n⚡ Event combinations, Q4 2024")
    for combo in engine.find_event_combinations(date(2024, 10, 1), date(2024, 12, 31)):
        print(f"  • {combo.week_start} {combo.type} x{combo.volatility_multiplier}")

    print("\n📈 CPI window, June 2023")
    bars = synthetic_provider("SPY", date(2023, 4, 1), date(2023, 7, 31), "daily")
    analysis = engine.analyze_event_window("cpi", date(2023, 6, 13), bars)
    for line in analysis.insights:
        print(f"  • {line}")

    print("\n🗂  Cache key:", engine.cache_key(SeasonalAnalysisRequest("SPY", years=5)))
    print(json.dumps(result.to_dict()["summary"], indent=2))


if __name__ == "__main__":
    main()
