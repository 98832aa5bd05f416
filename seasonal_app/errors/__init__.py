"""
Error classification for calendar construction and seasonal analysis.

This module provides a structured exception hierarchy separating recoverable
data quality problems from failures in configuration or collaborators.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    CalendarConfigurationError,
    ProviderError,
    StatisticsCalculationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "CalendarConfigurationError",
    "ProviderError",
    "StatisticsCalculationError",
]
