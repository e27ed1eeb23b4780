"""Centralized battle enums and constants.

This module contains all core enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto


class Side(Enum):
    """The two armies of a matchup."""
    A = "A"
    B = "B"

    @property
    def opponent(self) -> "Side":
        """The opposing side."""
        return Side.B if self is Side.A else Side.A


class WeaponType(Enum):
    """Fundamental attack types; selects which armor mitigates a hit."""
    MELEE = "melee"
    RANGED = "ranged"

    @classmethod
    def parse(cls, value) -> "WeaponType":
        """Parse a catalog string, falling back to melee for unknown values."""
        if isinstance(value, WeaponType):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.MELEE


class WeaponMode(Enum):
    """Which of a unit's weapons take part in each attack."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    BOTH = "both"


class BattleStatus(Enum):
    """States of the attack scheduler."""
    INIT = auto()
    RUNNING = auto()
    A_WINS = auto()
    B_WINS = auto()
    DRAW = auto()
    TIMEOUT = auto()  # Draw caused by the time limit

    @property
    def is_terminal(self) -> bool:
        return self not in (BattleStatus.INIT, BattleStatus.RUNNING)


class Winner(Enum):
    """Reported winner of a battle."""
    A = "A"
    B = "B"
    DRAW = "Draw"


# Convenience mappings for display
SIDE_NAMES = {
    Side.A: "Team A",
    Side.B: "Team B",
}

WEAPON_MODE_NAMES = {
    WeaponMode.PRIMARY: "Primary",
    WeaponMode.SECONDARY: "Secondary",
    WeaponMode.BOTH: "Both",
}

BATTLE_STATUS_NAMES = {
    BattleStatus.INIT: "Init",
    BattleStatus.RUNNING: "Running",
    BattleStatus.A_WINS: "Team A wins",
    BattleStatus.B_WINS: "Team B wins",
    BattleStatus.DRAW: "Draw",
    BattleStatus.TIMEOUT: "Draw (time limit)",
}
