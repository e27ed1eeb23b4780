"""Simulation configuration.

- simulation_config.py: SimulationConfig settings and their YAML loader
"""

from .simulation_config import (
    SimulationConfig,
    SimulationConfigLoader,
    load_simulation_config,
    resolve_path,
    PROJECT_ROOT,
)

__all__ = [
    "SimulationConfig",
    "SimulationConfigLoader",
    "load_simulation_config",
    "resolve_path",
    "PROJECT_ROOT",
]
