"""Tests for logging helpers."""

from unittest.mock import Mock

import structlog
from structlog.testing import capture_logs

from seasonal_app.logging import configure_logging, get_logger
from seasonal_app.logging.config import get_analysis_logger, get_calendar_logger, log_pattern_summary


class TestLoggers:
    """Test logger factories."""

    def test_get_logger(self):
        configure_logging(level="DEBUG", format_json=True)
        assert get_logger(__name__) is not None
        structlog.reset_defaults()

    def test_subsystem_bindings(self):
        with capture_logs() as logs:
            get_calendar_logger("test").info("built")
            get_analysis_logger("test").info("aggregated")

        assert logs[0]["subsystem"] == "calendar"
        assert logs[0]["audit_trail"] is True
        assert logs[1]["subsystem"] == "seasonal_analysis"


class TestPatternSummaryLogging:
    """Test the aggregation summary log line."""

    def test_info_when_patterns_found(self):
        logger = Mock()
        bound = logger.bind.return_value
        bound.bind.return_value = bound

        log_pattern_summary(logger, "SPY", "daily", {"quarter": 4, "month-of-year": 12}, {"bars": 100})

        logger.bind.assert_called_once_with(
            symbol="SPY", timeframe="daily",
            bucket_counts={"quarter": 4, "month-of-year": 12}, total_buckets=16,
        )
        bound.info.assert_called_once_with("Seasonal patterns aggregated")

    def test_warning_when_empty(self):
        logger = Mock()
        bound = logger.bind.return_value

        log_pattern_summary(logger, "SPY", "daily", {})

        bound.warning.assert_called_once_with("No seasonal patterns produced")
