"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import CalendarConfig, DefaultConfig, get_default_config


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from calendar.yaml, empty if the file is absent."""
        config_file = self.config_dir / "calendar.yaml"

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def merge_config(
        self,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-request overrides (highest priority)
        2. calendar.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        file_config = self.load_file_config()
        config = self._deep_merge(config, file_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_calendar_config(
        self,
        overrides: Optional[dict[str, Any]] = None
    ) -> CalendarConfig:
        """
        Build the CalendarConfig used to construct an EventCalendar.

        Event toggles are read from the ``calendar`` section; keys left unset
        keep the CalendarConfig defaults.
        """
        merged = self.merge_config(overrides)
        calendar = merged.get("calendar", {})
        base = CalendarConfig()

        rate_dates = merged.get("rate_decision_dates")
        return CalendarConfig(
            rate_decision_dates=tuple(rate_dates) if rate_dates is not None else None,
            custom_events=tuple(merged.get("custom_events") or ()),
            options_expiry_enabled=calendar.get("options_expiry_enabled", base.options_expiry_enabled),
            earnings_months=tuple(calendar.get("earnings_months", base.earnings_months)),
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
