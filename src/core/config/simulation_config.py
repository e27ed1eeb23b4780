"""
Configuration loader for simulation settings.

This module handles loading and parsing of the YAML file that holds the
engine constants (time limit, simultaneity tolerance) and default paths.
"""
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

DEFAULT_CONFIG_PATH = "assets/config/simulation.yaml"


@dataclass(frozen=True)
class SimulationConfig:
    """Engine settings for one or more battles."""
    # Safety bound on simulated seconds
    max_time: float = 300.0
    # Tolerance for treating two attack times as simultaneous
    epsilon: float = 1e-4
    # Age picked when a unit offers it and none is requested
    default_age: str = "3"
    # Keep a per-tick BattleTrace on the outcome
    record_trace: bool = False
    catalog_path: str = "assets/data/units/units.yaml"

    def with_overrides(self, **changes: Any) -> "SimulationConfig":
        return replace(self, **changes)


def resolve_path(path: str) -> Path:
    """Resolve a path relative to the project root unless it is absolute."""
    if os.path.isabs(path):
        return Path(path)
    return PROJECT_ROOT / path


class SimulationConfigLoader:
    """Loads simulation settings from a YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Settings file, taken as given (relative paths are
                relative to the working directory). None loads the shipped
                file from the project root.
        """
        self.config_path = Path(config_path) if config_path else resolve_path(DEFAULT_CONFIG_PATH)
        self._config: SimulationConfig = SimulationConfig()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    def load_config(self) -> bool:
        """
        Load configuration from the YAML file.

        Returns:
            bool: True if config was loaded successfully; on failure the
            defaults stay in place
        """
        config_file = self.config_path

        if not config_file.exists():
            print(f"Warning: Simulation config file not found: {config_file}")
            self._config = SimulationConfig()
            return False

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            print(f"Error loading simulation config: {e}")
            self._config = SimulationConfig()
            return False

        if not isinstance(data, dict):
            print(f"Warning: Simulation config must be a mapping, got {type(data).__name__}")
            self._config = SimulationConfig()
            return False

        self._config = self._parse_config(data.get('simulation', data))
        return True

    def _parse_config(self, section: Any) -> SimulationConfig:
        """Build a SimulationConfig from the loaded mapping, ignoring unknown keys."""
        if not isinstance(section, dict):
            return SimulationConfig()

        known = {f.name for f in fields(SimulationConfig)}
        values: dict[str, Any] = {}
        for key, value in section.items():
            if key not in known:
                print(f"Warning: Unknown simulation setting '{key}' in config")
                continue
            values[key] = value

        defaults = SimulationConfig()
        try:
            return SimulationConfig(
                max_time=float(values.get('max_time', defaults.max_time)),
                epsilon=float(values.get('epsilon', defaults.epsilon)),
                default_age=str(values.get('default_age', defaults.default_age)),
                record_trace=self._parse_flag('record_trace', values, defaults.record_trace),
                catalog_path=str(values.get('catalog_path', defaults.catalog_path)),
            )
        except (TypeError, ValueError) as e:
            print(f"Warning: Invalid simulation setting ({e}), using defaults")
            return defaults

    @staticmethod
    def _parse_flag(key: str, values: dict[str, Any], default: bool) -> bool:
        """Read a YAML boolean; strings such as "false" are rejected."""
        value = values.get(key, default)
        if isinstance(value, bool):
            return value
        print(f"Warning: Simulation setting '{key}' must be true or false, got {value!r}")
        return default


def load_simulation_config(config_path: Optional[str] = None) -> SimulationConfig:
    """Load settings, falling back to defaults when the file is unusable."""
    loader = SimulationConfigLoader(config_path)
    loader.load_config()
    return loader.config
