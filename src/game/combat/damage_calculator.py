"""
Damage calculation for a single attacking unit.

Read-only calculations, separate from applying damage to army pools, so the
same numbers can be used for forecasts and for the battle loop.
"""
from dataclasses import dataclass
from typing import Iterable, Mapping

import numpy as np

from ...core.data import ArmyConfig, EffectiveStats, WeaponType

MIN_DAMAGE = 1.0


@dataclass(frozen=True)
class WeaponStrike:
    """One weapon's contribution to an attack."""
    attack: float
    bonus: Mapping[str, float]
    weapon_type: WeaponType


class DamageCalculator:
    """Calculates per-attack damage from one unit to another."""

    @staticmethod
    def bonus_damage(bonus: Mapping[str, float], defender_tags: Iterable[str]) -> float:
        """Extra damage from bonus entries matching the defender's tags."""
        # Sorted so the float sum never depends on set iteration order
        return sum(bonus.get(tag, 0.0) for tag in sorted(defender_tags))

    @staticmethod
    def strikes_for(config: ArmyConfig, attacker: EffectiveStats) -> list[WeaponStrike]:
        """Weapons that fire on every attack of this army.

        The selected weapon uses the buffed attack value; in ``both`` mode the
        secondary weapon adds a strike from its own raw age stats.
        """
        strikes = [WeaponStrike(attacker.attack, config.stats.bonus, config.weapon_type)]
        secondary = config.secondary_weapon
        if secondary is not None:
            strikes.append(WeaponStrike(secondary.stats.attack, secondary.stats.bonus, secondary.type))
        return strikes

    @staticmethod
    def compute_strike_damages(
        strikes: list[WeaponStrike],
        defender_tags: Iterable[str],
        defender: EffectiveStats,
    ) -> np.ndarray:
        """Per-weapon damage after armor, each floored at the minimum damage."""
        tags = list(defender_tags)
        raw = np.array(
            [s.attack + DamageCalculator.bonus_damage(s.bonus, tags) for s in strikes],
            dtype=np.float64,
        )
        armor = np.array([defender.armor_against(s.weapon_type) for s in strikes], dtype=np.float64)
        return np.maximum(MIN_DAMAGE, raw - armor)

    @staticmethod
    def compute_attack_damage(
        config: ArmyConfig,
        attacker: EffectiveStats,
        defender_tags: Iterable[str],
        defender: EffectiveStats,
    ) -> float:
        """
        Total damage one attacking unit deals per attack.

        Args:
            config: Attacker configuration (weapon type, bonus table, secondary weapon)
            attacker: Attacker's effective stats at the current time
            defender_tags: Tags carried by the defending unit
            defender: Defender's effective stats (armor) at the current time

        Returns:
            Summed damage of all active weapons, at least 1 per weapon
        """
        strikes = DamageCalculator.strikes_for(config, attacker)
        damages = DamageCalculator.compute_strike_damages(strikes, defender_tags, defender)
        return float(damages.sum())
