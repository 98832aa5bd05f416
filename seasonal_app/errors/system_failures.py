"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that the analysis cannot work around:
broken calendar configuration caught at construction time, and errors raised
by injected data providers.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class CalendarConfigurationError(SystemFailureError):
    """Malformed date table or calendar configuration, raised at construction."""

    def __init__(self, message: str, index: Optional[int] = None,
                 config_context: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.config_context = config_context
        self.value = value


class ProviderError(SystemFailureError):
    """Price history or dividend provider failure."""

    def __init__(self, message: str, provider: Optional[str] = None,
                 symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.provider = provider
        self.symbol = symbol


class StatisticsCalculationError(SystemFailureError):
    """Critical error in statistics calculation that prevents aggregation."""

    def __init__(self, message: str, metric_name: Optional[str] = None,
                 calculation_input: Optional[dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name
        self.calculation_input = calculation_input
