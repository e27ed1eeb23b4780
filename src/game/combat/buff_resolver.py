"""
Buff resolution for time-bounded stat modifiers.

Turns an army's base stats plus its configured buffs into the effective stats
at a given simulated time. Every call is independent, so the scheduler can ask
again after any event to pick up buffs that have lapsed in the meantime.
"""
from ...core.data import ArmyConfig, BuffConfig, EffectiveStats


# Buff terms by display name: (expiry field, value fields)
BUFF_TERMS: dict[str, tuple[str, tuple[str, ...]]] = {
    "hp_flat": ("hp_flat_expiry", ("hp_flat",)),
    "hp_pct": ("hp_pct_expiry", ("hp_pct",)),
    "attack_flat": ("attack_flat_expiry", ("attack_flat",)),
    "attack_pct": ("attack_pct_expiry", ("attack_pct",)),
    "speed_pct": ("speed_pct_expiry", ("speed_pct",)),
    "armor": ("armor_expiry", ("melee_armor", "ranged_armor")),
}


class BuffResolver:
    """Applies active buffs to an army's base stats."""

    @staticmethod
    def resolve(config: ArmyConfig, time: float) -> EffectiveStats:
        """
        Compute effective stats at ``time``.

        Flat terms are added before percentage multipliers:
        ``value = (base + flat) * (1 + pct / 100)``. Attack speed is divided by
        its multiplier, so a positive percentage shortens the interval.

        Args:
            config: The army whose stats are resolved
            time: Simulated time in seconds

        Returns:
            EffectiveStats at that instant
        """
        base = config.stats
        buffs = config.buffs
        active = BuffConfig.is_active

        hp = base.hp
        if active(buffs.hp_flat_expiry, time):
            hp += buffs.hp_flat
        if active(buffs.hp_pct_expiry, time):
            hp *= 1 + buffs.hp_pct / 100

        attack = base.attack
        if active(buffs.attack_flat_expiry, time):
            attack += buffs.attack_flat
        if active(buffs.attack_pct_expiry, time):
            attack *= 1 + buffs.attack_pct / 100

        attack_speed = base.attack_speed
        if active(buffs.speed_pct_expiry, time):
            divisor = 1 + buffs.speed_pct / 100
            if divisor > 0:
                attack_speed /= divisor

        melee_armor = base.melee_armor
        ranged_armor = base.ranged_armor
        if active(buffs.armor_expiry, time):
            melee_armor += buffs.melee_armor
            ranged_armor += buffs.ranged_armor

        return EffectiveStats(
            hp=hp,
            attack=attack,
            attack_speed=attack_speed,
            melee_armor=melee_armor,
            ranged_armor=ranged_armor,
        )

    @staticmethod
    def expired_buffs(config: ArmyConfig, before: float, now: float) -> list[str]:
        """Names of non-zero buff terms active at ``before`` but not at ``now``."""
        buffs = config.buffs
        expired = []
        for name, (expiry_field, value_fields) in BUFF_TERMS.items():
            if not any(getattr(buffs, f) for f in value_fields):
                continue
            expiry = getattr(buffs, expiry_field)
            if BuffConfig.is_active(expiry, before) and not BuffConfig.is_active(expiry, now):
                expired.append(name)
        return expired
