#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from typing import Any, Optional

from seasonal_app.calendar import EventCalendar
from seasonal_app.config.loader import ConfigLoader
from seasonal_app.config.validation import ConfigValidator, ValidationError
from seasonal_app.errors import CalendarConfigurationError


def validate_merged_config(overrides: Optional[dict[str, Any]] = None) -> list[ValidationError]:
    """Validate calendar.yaml merged with defaults and optional overrides."""
    loader = ConfigLoader.create()
    return ConfigValidator.validate_config(loader.merge_config(overrides))


def main():
    """Main validation function."""
    print("🔍 Validating seasonal engine configuration...")

    all_valid = True
    loader = ConfigLoader.create()
    print(f"\n📁 Config directory: {loader.config_dir}")

    errors = validate_merged_config()
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        all_valid = False
    else:
        print("✅ calendar.yaml is valid")

    print("\n📋 Testing request-level overrides...")
    test_overrides = {
        "statistics": {"significance_min_samples": 20, "strong_win_rate": 65.0},
        "event_window": {"window_days": 3},
    }
    errors = validate_merged_config(test_overrides)
    if errors:
        print("❌ Override validation failed:")
        for error in errors:
            print(f"  • {error.field}: {error.message}")
        all_valid = False
    else:
        print("✅ Override validation passed")

    print("\n🗓  Building event calendar from configuration...")
    try:
        calendar = EventCalendar(loader.load_calendar_config())
        print(f"✅ {len(calendar.events)} events from {calendar.start_year} to {calendar.end_year}")
        for table in calendar.stale_tables:
            print(f"⚠️  {table} expires soon, refresh the dated table")
    except CalendarConfigurationError as e:
        print(f"❌ Calendar construction failed: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
