"""Configuration validation utilities."""

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..calendar.models import EventImpact, EventType


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_iso_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        return date.fromisoformat(value).isoformat() == value
    except ValueError:
        return False


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_calendar_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate calendar parameters."""
        errors = []

        if "earnings_months" in params:
            value = params["earnings_months"]
            if (not isinstance(value, (list, tuple)) or not value
                    or not all(isinstance(m, int) and 1 <= m <= 12 for m in value)):
                errors.append(ValidationError(
                    field="earnings_months",
                    message="Must be a non-empty list of month numbers 1-12",
                    value=value
                ))

        if "options_expiry_enabled" in params:
            value = params["options_expiry_enabled"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="options_expiry_enabled",
                    message="Must be a boolean",
                    value=value
                ))

        for name in ("staleness_warning_days", "history_years"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        if "future_years" in params:
            value = params["future_years"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="future_years",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_event_window_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate event window parameters."""
        errors = []

        for name in ("window_days", "baseline_start_days", "baseline_end_days"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        start = params.get("baseline_start_days")
        end = params.get("baseline_end_days")
        if _is_number(start) and _is_number(end) and start <= end:
            errors.append(ValidationError(
                field="baseline_start_days",
                message="Must be greater than baseline_end_days",
                value=start
            ))

        for name in ("elevated_pct", "extreme_pct", "intraday_spike_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        elevated = params.get("elevated_pct")
        extreme = params.get("extreme_pct")
        if _is_number(elevated) and _is_number(extreme) and extreme <= elevated:
            errors.append(ValidationError(
                field="extreme_pct",
                message="Must be greater than elevated_pct",
                value=extreme
            ))

        return errors

    @staticmethod
    def validate_statistics_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate statistics parameters."""
        errors = []

        for name in ("min_bars", "significance_min_samples", "top_n", "end_of_year_days"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        for name in ("strong_win_rate", "weak_win_rate", "event_win_rate"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_custom_events(events: Any) -> list[ValidationError]:
        """Validate custom calendar event definitions."""
        errors: list[ValidationError] = []

        if not isinstance(events, (list, tuple)):
            return [ValidationError(
                field="custom_events",
                message="Must be a list of event mappings",
                value=events
            )]

        valid_types = {t.value for t in EventType}
        valid_impacts = {i.value for i in EventImpact}

        for i, event in enumerate(events):
            prefix = f"custom_events[{i}]"
            if not isinstance(event, dict):
                errors.append(ValidationError(prefix, "Must be a mapping", event))
                continue
            if not _is_iso_date(event.get("date")):
                errors.append(ValidationError(
                    f"{prefix}.date", "Must be an ISO date (YYYY-MM-DD)", event.get("date")
                ))
            if not isinstance(event.get("name"), str) or not event.get("name"):
                errors.append(ValidationError(
                    f"{prefix}.name", "Must be a non-empty string", event.get("name")
                ))
            if event.get("type", EventType.CUSTOM.value) not in valid_types:
                errors.append(ValidationError(
                    f"{prefix}.type", f"Must be one of {sorted(valid_types)}", event.get("type")
                ))
            if event.get("impact", EventImpact.MEDIUM.value) not in valid_impacts:
                errors.append(ValidationError(
                    f"{prefix}.impact", f"Must be one of {sorted(valid_impacts)}", event.get("impact")
                ))

        return errors

    @staticmethod
    def validate_rate_decision_dates(dates: Any) -> list[ValidationError]:
        """Validate a rate decision override list."""
        if not isinstance(dates, (list, tuple)):
            return [ValidationError(
                field="rate_decision_dates",
                message="Must be a list of ISO dates",
                value=dates
            )]

        return [
            ValidationError(
                field=f"rate_decision_dates[{i}]",
                message="Must be an ISO date (YYYY-MM-DD)",
                value=value
            )
            for i, value in enumerate(dates)
            if not _is_iso_date(value)
        ]

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "calendar" in config:
            errors.extend(ConfigValidator.validate_calendar_params(config["calendar"]))

        if "event_window" in config:
            errors.extend(ConfigValidator.validate_event_window_params(config["event_window"]))

        if "statistics" in config:
            errors.extend(ConfigValidator.validate_statistics_params(config["statistics"]))

        if config.get("custom_events") is not None:
            errors.extend(ConfigValidator.validate_custom_events(config["custom_events"]))

        if config.get("rate_decision_dates") is not None:
            errors.extend(ConfigValidator.validate_rate_decision_dates(config["rate_decision_dates"]))

        return errors
