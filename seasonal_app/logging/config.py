"""
Centralized logging configuration for the seasonal analysis engine.

This module provides standardized logging configuration using structlog
for all components. Calendar construction, extractor evaluation and
aggregation all log through this configuration so that output stays
structured and consistent.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_calendar_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the calendar subsystem.

    Used for table validation, staleness warnings and index build events.
    """
    return get_logger(name).bind(
        subsystem="calendar",
        audit_trail=True
    )


def get_analysis_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the seasonal analysis subsystem."""
    return get_logger(name).bind(
        subsystem="seasonal_analysis",
        audit_trail=False
    )


def log_pattern_summary(
    logger: FilteringBoundLogger,
    symbol: str,
    timeframe: str,
    bucket_counts: dict[str, int],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of an aggregation run with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Analyzed symbol
        timeframe: Bar timeframe (daily or hourly)
        bucket_counts: Number of emitted buckets per period type
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        timeframe=timeframe,
        bucket_counts=bucket_counts,
        total_buckets=sum(bucket_counts.values()),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if bucket_counts:
        bound_logger.info("Seasonal patterns aggregated")
    else:
        bound_logger.warning("No seasonal patterns produced")
