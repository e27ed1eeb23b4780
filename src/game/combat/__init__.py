"""Combat system components.

This package contains the core combat logic with clear separation of concerns:
- buff_resolver.py: Effective stats at a point in time
- damage_calculator.py: Read-only per-attack damage calculations
- attack_scheduler.py: The battle loop and damage application
- battle_resolver.py: Winner and efficiency metrics
- battle.py: run_battle entry point
"""

from .buff_resolver import BuffResolver
from .damage_calculator import DamageCalculator, WeaponStrike, MIN_DAMAGE
from .attack_scheduler import AttackScheduler, Volley
from .battle_resolver import BattleResolver
from .battle import run_battle

__all__ = [
    "BuffResolver",
    "DamageCalculator",
    "WeaponStrike",
    "MIN_DAMAGE",
    "AttackScheduler",
    "Volley",
    "BattleResolver",
    "run_battle",
]
