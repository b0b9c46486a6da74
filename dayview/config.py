"""
Configuration parser for DayView Calendar.

Handles TOML file parsing into geometry and general settings.
"""

import tomllib
import os
import sys
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

import pytz


@dataclass
class GeometryConfig:
    """Pixel geometry of the day grid and drag snapping."""
    hour_height: float = 48.0         # Height of an hour slot in pixels
    hour_spacing: float = 1.0         # Extra pixels between hour slots (hour line)
    start_hour_of_day: int = 6        # First visible hour (0-23)
    drag_granularity_minutes: int = 15  # Snap interval for dropped events

    @property
    def actual_hour_height(self) -> float:
        """Pixel distance between two hour lines, spacing included."""
        return self.hour_height + self.hour_spacing

    def validate(self) -> list[str]:
        """Return a list of problems with these values (empty when valid)."""
        problems = []
        if not self.hour_height > 0:
            problems.append(f"hour_height must be > 0, got {self.hour_height}")
        if not self.hour_spacing > 0:
            problems.append(f"hour_spacing must be > 0, got {self.hour_spacing}")
        if isinstance(self.start_hour_of_day, bool) or not isinstance(self.start_hour_of_day, int) \
                or not 0 <= self.start_hour_of_day <= 23:
            problems.append(f"start_hour_of_day must be an integer 0-23, got {self.start_hour_of_day}")
        if isinstance(self.drag_granularity_minutes, bool) or not isinstance(self.drag_granularity_minutes, int) \
                or self.drag_granularity_minutes <= 0:
            problems.append(
                f"drag_granularity_minutes must be a positive integer, got {self.drag_granularity_minutes}"
            )
        return problems


@dataclass
class Config:
    """Main configuration container for DayView Calendar."""

    timezone: str = "UTC"
    geometry: GeometryConfig = field(default_factory=GeometryConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'dayview-calendar' / 'dayview-calendar.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file holds invalid values.
        """
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {config_path}: {e}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from parsed TOML data."""
        # Parse General section
        general = data.get('General', {})
        timezone = general.get('timezone', 'UTC')
        try:
            pytz.timezone(timezone)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {timezone}")

        # Parse Geometry section
        geometry_data = data.get('Geometry', {})
        geometry = GeometryConfig(
            hour_height=geometry_data.get('hour_height', GeometryConfig.hour_height),
            hour_spacing=geometry_data.get('hour_spacing', GeometryConfig.hour_spacing),
            start_hour_of_day=geometry_data.get('start_hour_of_day', GeometryConfig.start_hour_of_day),
            drag_granularity_minutes=geometry_data.get(
                'drag_granularity_minutes', GeometryConfig.drag_granularity_minutes
            ),
        )

        problems = geometry.validate()
        if problems:
            raise ValueError("Invalid [Geometry] settings: " + "; ".join(problems))

        unknown = set(geometry_data) - {
            'hour_height', 'hour_spacing', 'start_hour_of_day', 'drag_granularity_minutes'
        }
        for key in sorted(unknown):
            print(f"WARNING: Ignoring unknown [Geometry] key '{key}'", file=sys.stderr)

        return cls(timezone=timezone, geometry=geometry)
