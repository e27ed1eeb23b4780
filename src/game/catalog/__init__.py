"""Unit catalog and army configuration.

- unit_catalog.py: Read-only unit lookup loaded from YAML/JSON
- army_builder.py: Catalog + user choices -> ArmyConfig
- cost_balance.py: Equal-cost unit count suggestions
"""

from .unit_catalog import UnitCatalog
from .army_builder import ArmyOverrides, build_army_config, resolve_weapon_mode
from .cost_balance import balance_counts, balance_for_units

__all__ = [
    "UnitCatalog",
    "ArmyOverrides",
    "build_army_config",
    "resolve_weapon_mode",
    "balance_counts",
    "balance_for_units",
]
