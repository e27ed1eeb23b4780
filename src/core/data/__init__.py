"""Core data structures and definitions.

This package contains fundamental data types and battle definitions:
- data_structures.py: catalog, configuration, live state and outcome records
- game_enums.py: Centralized enums for sides, weapon types and battle states
"""

from .data_structures import (
    WeaponStats,
    WeaponDefinition,
    UnitDefinition,
    UnitStats,
    BuffConfig,
    EffectiveStats,
    SecondaryWeapon,
    ArmyConfig,
    ArmyState,
    BattleTick,
    BattleTrace,
    BattleOutcome,
)
from .game_enums import Side, WeaponType, WeaponMode, BattleStatus, Winner, SIDE_NAMES, WEAPON_MODE_NAMES, BATTLE_STATUS_NAMES

__all__ = [
    "WeaponStats",
    "WeaponDefinition",
    "UnitDefinition",
    "UnitStats",
    "BuffConfig",
    "EffectiveStats",
    "SecondaryWeapon",
    "ArmyConfig",
    "ArmyState",
    "BattleTick",
    "BattleTrace",
    "BattleOutcome",
    "Side",
    "WeaponType",
    "WeaponMode",
    "BattleStatus",
    "Winner",
    "SIDE_NAMES",
    "WEAPON_MODE_NAMES",
    "BATTLE_STATUS_NAMES",
]
