"""Army configuration building.

Resolves a unit name, age, weapon mode, manual stat overrides, buffs and
first-strike settings into the immutable ArmyConfig the combat core consumes.
Missing catalog data never raises here: absent stats become zero, a missing
secondary weapon drops the army back to its primary weapon.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from ...core.data import (
    ArmyConfig,
    BuffConfig,
    SecondaryWeapon,
    UnitStats,
    WeaponMode,
)
from .unit_catalog import UnitCatalog


@dataclass(frozen=True)
class ArmyOverrides:
    """Manual stat overrides; None keeps the catalog value."""
    hp: Optional[float] = None
    attack: Optional[float] = None
    melee_armor: Optional[float] = None
    ranged_armor: Optional[float] = None
    attack_speed: Optional[float] = None

    def apply(self, stats: UnitStats) -> UnitStats:
        changes = {
            name: float(value)
            for name, value in (
                ("hp", self.hp),
                ("attack", self.attack),
                ("melee_armor", self.melee_armor),
                ("ranged_armor", self.ranged_armor),
                ("attack_speed", self.attack_speed),
            )
            if value is not None
        }
        return replace(stats, **changes) if changes else stats


def resolve_weapon_mode(catalog: UnitCatalog, unit_name: str, age: str, mode: Union[WeaponMode, str]) -> WeaponMode:
    """Parse a weapon mode and fall back to primary when no secondary weapon exists for the age."""
    if not isinstance(mode, WeaponMode):
        try:
            mode = WeaponMode(str(mode).lower())
        except ValueError:
            mode = WeaponMode.PRIMARY

    if mode != WeaponMode.PRIMARY and not catalog.has_secondary(unit_name, age):
        return WeaponMode.PRIMARY
    return mode


def build_army_config(
    catalog: UnitCatalog,
    unit_name: str,
    *,
    age: Optional[str] = None,
    count: int = 1,
    weapon_mode: Union[WeaponMode, str] = WeaponMode.PRIMARY,
    overrides: Optional[ArmyOverrides] = None,
    buffs: Optional[BuffConfig] = None,
    first_hit_enabled: bool = False,
    free_hits: int = 0,
    default_age: str = "3",
) -> ArmyConfig:
    """
    Build one side's army configuration from the catalog.

    Args:
        catalog: Unit catalog to read from
        unit_name: Catalog unit name
        age: Age identifier; defaults to ``default_age`` or the unit's last age
        count: Starting unit count (values below 1 become 1)
        weapon_mode: primary, secondary or both
        overrides: Manual stat overrides applied after the catalog lookup
        buffs: Buff configuration
        first_hit_enabled: Whether the army lands free hits before time zero
        free_hits: Number of free hits
        default_age: Preferred age when ``age`` is not given

    Returns:
        ArmyConfig ready for run_battle

    Raises:
        KeyError: If the unit is not in the catalog
    """
    unit = catalog.get(unit_name)
    age = str(age) if age else (catalog.default_age(unit_name, default_age) or "")
    mode = resolve_weapon_mode(catalog, unit_name, age, weapon_mode)

    primary_stats = unit.primary.stats_for(age)
    if mode == WeaponMode.SECONDARY and unit.secondary is not None:
        weapon = unit.secondary
        age_stats = weapon.stats_for(age)
        # Defensive stats belong to the unit; borrow them when the weapon block omits them
        defensive = age_stats if age_stats.hp else primary_stats
    else:
        weapon = unit.primary
        age_stats = primary_stats
        defensive = primary_stats

    stats = UnitStats(
        hp=defensive.hp,
        attack=age_stats.attack,
        melee_armor=defensive.melee_armor,
        ranged_armor=defensive.ranged_armor,
        attack_speed=weapon.attack_speed_for(age),
        bonus=dict(age_stats.bonus),
    )
    if overrides is not None:
        stats = overrides.apply(stats)
    if stats.attack_speed <= 0:
        stats = replace(stats, attack_speed=1.0)

    secondary_weapon = None
    if mode == WeaponMode.BOTH and unit.secondary is not None:
        secondary_weapon = SecondaryWeapon(
            type=unit.secondary.type,
            attack_speed=unit.secondary.attack_speed_for(age),
            stats=unit.secondary.stats_for(age),
        )

    return ArmyConfig(
        unit_name=unit_name,
        count=max(1, int(count or 1)),
        stats=stats,
        weapon_mode=mode,
        weapon_type=weapon.type,
        buffs=buffs or BuffConfig(),
        tags=unit.tags,
        first_hit_enabled=first_hit_enabled,
        free_hits=max(0, int(free_hits or 0)),
        secondary_weapon=secondary_weapon,
        unit_cost=unit.total_cost,
        age=age,
    )
