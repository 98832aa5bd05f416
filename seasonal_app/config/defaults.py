"""Default configuration parameters for the seasonal analysis engine."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class CalendarParams:
    """Calendar generation parameters; event toggles live in CalendarConfig."""
    staleness_warning_days: int = 183                  # Warn when tables end within ~6 months
    history_years: int = 10                            # Horizon before current year
    future_years: int = 1                              # Horizon after current year


@dataclass(frozen=True)
class EventWindowParams:
    """Event window volatility analysis parameters."""
    window_days: int = 5                  # Event window T-N..T+N
    baseline_start_days: int = 30         # Baseline window starts at T-30
    baseline_end_days: int = 14           # Baseline window ends at T-14
    elevated_pct: float = 50.0            # Volatility increase flagged "elevated"
    extreme_pct: float = 150.0            # Volatility increase flagged "extreme"
    intraday_spike_pct: float = 1.0       # Release-hour move flagged as a spike


@dataclass(frozen=True)
class StatisticsParams:
    """Bucket statistics and insight parameters."""
    min_bars: int = 20                    # Below this, result is insufficient-data
    significance_min_samples: int = 10    # Buckets below this are not significant
    strong_win_rate: float = 60.0         # Strong / confirmed threshold
    weak_win_rate: float = 40.0           # Weak month threshold
    event_win_rate: float = 55.0          # Favourable event threshold
    top_n: int = 3                        # Best / worst periods in summary
    end_of_year_days: int = 5             # Trading days in the end-of-year rally


@dataclass(frozen=True)
class CalendarConfig:
    """User calendar configuration: overrides, custom events and event toggles."""
    rate_decision_dates: Optional[tuple[str, ...]] = None
    custom_events: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    options_expiry_enabled: bool = True                # Emit options expiry events
    earnings_months: tuple[int, ...] = (1, 4, 7, 10)   # Earnings season months


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    calendar: CalendarParams
    event_window: EventWindowParams
    statistics: StatisticsParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        calendar=CalendarParams(),
        event_window=EventWindowParams(),
        statistics=StatisticsParams(),
    )
