"""Unified data structures for the matchup calculator.

This module provides clear definitions for the different data representations
used throughout the battle pipeline.

Data Flow:
1. UnitDefinition (catalog) -> ArmyConfig (built once per battle)
2. ArmyConfig -> ArmyState (mutated by the attack scheduler)
3. ArmyState (terminal) -> BattleOutcome (display)

Each structure serves a specific architectural layer and should not be merged.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Mapping

import numpy as np
from numpy.typing import NDArray

from .game_enums import Side, WeaponType, WeaponMode, BattleStatus, Winner


def _as_float(value: Any, default: float = 0.0) -> float:
    """Coerce a catalog value to float, treating missing or bad data as default."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_bonus(value: Any) -> dict[str, float]:
    if not isinstance(value, Mapping):
        return {}
    return {str(tag): _as_float(amount) for tag, amount in value.items()}


@dataclass(frozen=True)
class WeaponStats:
    """Stats of one weapon at one age.

    ``attack_speed`` is optional per age; when absent the weapon-level value
    applies. Missing fields read from a catalog default to zero.
    """
    hp: float = 0.0
    attack: float = 0.0
    melee_armor: float = 0.0
    ranged_armor: float = 0.0
    attack_speed: Optional[float] = None
    bonus: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "WeaponStats":
        """Build stats from a catalog entry (camelCase keys)."""
        if not isinstance(data, Mapping):
            return cls()
        attack_speed = data.get("attackSpeed")
        return cls(
            hp=_as_float(data.get("hp")),
            attack=_as_float(data.get("attack")),
            melee_armor=_as_float(data.get("meleeArmor")),
            ranged_armor=_as_float(data.get("rangedArmor")),
            attack_speed=_as_float(attack_speed) if attack_speed is not None else None,
            bonus=_as_bonus(data.get("bonus")),
        )


@dataclass(frozen=True)
class WeaponDefinition:
    """A weapon with its per-age stat table."""
    type: WeaponType = WeaponType.MELEE
    attack_speed: float = 1.0
    stats_by_age: dict[str, WeaponStats] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "WeaponDefinition":
        if not isinstance(data, Mapping):
            return cls()
        ages = data.get("ages")
        stats_by_age = {}
        if isinstance(ages, Mapping):
            stats_by_age = {str(age): WeaponStats.from_dict(stats) for age, stats in ages.items()}
        return cls(
            type=WeaponType.parse(data.get("type", "melee")),
            attack_speed=_as_float(data.get("attackSpeed"), 1.0) or 1.0,
            stats_by_age=stats_by_age,
        )

    def has_age(self, age: str) -> bool:
        return str(age) in self.stats_by_age

    def stats_for(self, age: str) -> WeaponStats:
        """Stats for ``age``, or a zeroed block when the weapon lacks that age."""
        return self.stats_by_age.get(str(age), WeaponStats())

    def attack_speed_for(self, age: str) -> float:
        """Seconds between attacks at ``age`` (never zero)."""
        per_age = self.stats_for(age).attack_speed
        return per_age or self.attack_speed or 1.0


@dataclass(frozen=True)
class UnitDefinition:
    """A catalog unit: weapons, tags and resource costs."""
    name: str
    primary: WeaponDefinition
    secondary: Optional[WeaponDefinition] = None
    tags: frozenset[str] = frozenset()
    costs: dict[str, float] = field(default_factory=dict)

    @property
    def total_cost(self) -> float:
        """Sum of all listed resource fields (food + wood + gold + ...)."""
        return sum(self.costs.values())

    @property
    def ages(self) -> list[str]:
        """Ages the unit exists in, following the primary weapon's table."""
        return list(self.primary.stats_by_age.keys())

    def has_secondary(self, age: str) -> bool:
        return self.secondary is not None and self.secondary.has_age(age)


@dataclass(frozen=True)
class UnitStats:
    """Resolved base stats of an army: post manual override, pre buff."""
    hp: float = 0.0
    attack: float = 0.0
    melee_armor: float = 0.0
    ranged_armor: float = 0.0
    attack_speed: float = 1.0
    bonus: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class BuffConfig:
    """Temporary or permanent stat modifiers.

    Every term is gated by its own expiry time in simulated seconds, where
    ``0`` means permanent. Flat and percentage terms of HP and attack expire
    independently; melee and ranged armor share ``armor_expiry``.
    """
    hp_flat: float = 0.0
    hp_flat_expiry: float = 0.0
    hp_pct: float = 0.0
    hp_pct_expiry: float = 0.0
    attack_flat: float = 0.0
    attack_flat_expiry: float = 0.0
    attack_pct: float = 0.0
    attack_pct_expiry: float = 0.0
    speed_pct: float = 0.0
    speed_pct_expiry: float = 0.0
    melee_armor: float = 0.0
    ranged_armor: float = 0.0
    armor_expiry: float = 0.0

    @staticmethod
    def is_active(expiry: float, time: float) -> bool:
        return expiry == 0 or time < expiry


@dataclass(frozen=True)
class EffectiveStats:
    """Stats of an army at one instant, with active buffs applied."""
    hp: float
    attack: float
    attack_speed: float
    melee_armor: float
    ranged_armor: float

    def armor_against(self, weapon_type: WeaponType) -> float:
        """Armor value that mitigates a hit of ``weapon_type``."""
        if weapon_type == WeaponType.RANGED:
            return self.ranged_armor
        return self.melee_armor


@dataclass(frozen=True)
class SecondaryWeapon:
    """Snapshot of the secondary weapon used alongside the primary in ``both`` mode."""
    type: WeaponType
    attack_speed: float
    stats: WeaponStats


@dataclass(frozen=True)
class ArmyConfig:
    """One side's immutable battle configuration."""
    unit_name: str
    count: int
    stats: UnitStats
    weapon_mode: WeaponMode = WeaponMode.PRIMARY
    weapon_type: WeaponType = WeaponType.MELEE
    buffs: BuffConfig = field(default_factory=BuffConfig)
    tags: frozenset[str] = frozenset()
    first_hit_enabled: bool = False
    free_hits: int = 0
    secondary_weapon: Optional[SecondaryWeapon] = None
    unit_cost: float = 0.0
    age: str = ""

    @property
    def starting_cost(self) -> float:
        return self.unit_cost * self.count


@dataclass
class ArmyState:
    """Live state of one side during a battle.

    ``hp_pool`` is the aggregate HP of all living units; ``units_alive`` is
    always derived from it, never the reverse.
    """
    side: Side
    config: ArmyConfig
    units_alive: int
    hp_pool: float
    effective_stats: EffectiveStats
    next_attack_time: float = 0.0

    @property
    def is_alive(self) -> bool:
        return self.units_alive > 0

    @property
    def max_pool(self) -> float:
        """Pool ceiling for the current unit count and effective HP."""
        return self.units_alive * max(0.0, self.effective_stats.hp)


@dataclass(frozen=True)
class BattleTick:
    """Both sides' state after one scheduler iteration."""
    time: float
    units_a: int
    units_b: int
    hp_pool_a: float
    hp_pool_b: float


@dataclass
class BattleTrace:
    """Ordered record of every scheduler iteration of a battle."""
    ticks: list[BattleTick] = field(default_factory=list)

    def record(self, time: float, army_a: ArmyState, army_b: ArmyState) -> None:
        self.ticks.append(BattleTick(
            time=time,
            units_a=army_a.units_alive,
            units_b=army_b.units_alive,
            hp_pool_a=army_a.hp_pool,
            hp_pool_b=army_b.hp_pool,
        ))

    def __len__(self) -> int:
        return len(self.ticks)

    def __iter__(self):
        return iter(self.ticks)

    def to_array(self) -> NDArray[np.float64]:
        """Columns: time, units A, units B, pool A, pool B."""
        if not self.ticks:
            return np.empty((0, 5), dtype=np.float64)
        return np.array(
            [(t.time, t.units_a, t.units_b, t.hp_pool_a, t.hp_pool_b) for t in self.ticks],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class BattleOutcome:
    """Result of a resolved battle, ready for a result sink."""
    winner: Winner
    status: BattleStatus
    winner_units: int
    remaining_hp_pct: float
    resources_lost: float
    elapsed_time: float
    final_units_a: int
    final_units_b: int
    unit_name_a: str = ""
    unit_name_b: str = ""
    resources_lost_a: float = 0.0
    resources_lost_b: float = 0.0
    ticks: int = 0
    trace: Optional[BattleTrace] = None

    @property
    def winner_name(self) -> Optional[str]:
        """Unit name of the winning side, None on a draw."""
        if self.winner == Winner.A:
            return self.unit_name_a
        if self.winner == Winner.B:
            return self.unit_name_b
        return None
