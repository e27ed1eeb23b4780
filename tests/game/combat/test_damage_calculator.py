"""
Unit tests for the DamageCalculator system.

Tests bonus damage, armor selection, the minimum damage floor and
dual-weapon stacking.
"""

from src.core.data import EffectiveStats, SecondaryWeapon, WeaponMode, WeaponStats, WeaponType
from src.game.combat import BuffResolver, DamageCalculator, MIN_DAMAGE


def defender_stats(melee_armor=0.0, ranged_armor=0.0, hp=100.0):
    return EffectiveStats(hp=hp, attack=0.0, attack_speed=1.0, melee_armor=melee_armor, ranged_armor=ranged_armor)


def damage(config, defender, defender_tags=()):
    attacker = BuffResolver.resolve(config, 0.0)
    return DamageCalculator.compute_attack_damage(config, attacker, frozenset(defender_tags), defender)


class TestSingleWeapon:
    """Test damage from one weapon."""

    def test_bonus_damage_against_tagged_defender(self, army_factory):
        attacker = army_factory(attack=5, bonus={"Cavalry": 20})

        # max(1, (5 + 20) - 2)
        assert damage(attacker, defender_stats(melee_armor=2), {"Cavalry"}) == 23

    def test_bonus_ignored_without_matching_tag(self, army_factory):
        attacker = army_factory(attack=5, bonus={"Cavalry": 20})

        assert damage(attacker, defender_stats(melee_armor=2), {"Infantry"}) == 3

    def test_multiple_matching_tags_stack(self, army_factory):
        attacker = army_factory(attack=5, bonus={"Light": 3, "Ranged": 4, "Siege": 50})

        assert damage(attacker, defender_stats(), {"Light", "Ranged", "Infantry"}) == 12

    def test_armor_floor(self, army_factory):
        attacker = army_factory(attack=3)

        assert damage(attacker, defender_stats(melee_armor=10)) == 1

    def test_ranged_weapon_uses_ranged_armor(self, army_factory):
        attacker = army_factory(attack=10, weapon_type=WeaponType.RANGED)

        assert damage(attacker, defender_stats(melee_armor=1, ranged_armor=6)) == 4

    def test_melee_weapon_uses_melee_armor(self, army_factory):
        attacker = army_factory(attack=10, weapon_type=WeaponType.MELEE)

        assert damage(attacker, defender_stats(melee_armor=1, ranged_armor=6)) == 9

    def test_zeroed_stat_block_deals_floor_damage(self, army_factory):
        attacker = army_factory(hp=0, attack=0, attack_speed=1.0)

        assert damage(attacker, defender_stats()) == MIN_DAMAGE

    def test_buffed_attack_is_used(self, army_factory):
        from src.core.data import BuffConfig
        attacker = army_factory(attack=10, buffs=BuffConfig(attack_flat=5))

        assert damage(attacker, defender_stats(melee_armor=5)) == 10


class TestDualWeapon:
    """Test ``both`` mode stacking."""

    def make_dual(self, army_factory, secondary_attack=7, secondary_type=WeaponType.RANGED, bonus=None):
        secondary = SecondaryWeapon(
            type=secondary_type,
            attack_speed=3.0,
            stats=WeaponStats(attack=secondary_attack, bonus=dict(bonus or {})),
        )
        return army_factory(attack=12, weapon_mode=WeaponMode.BOTH, secondary_weapon=secondary)

    def test_damages_are_summed(self, army_factory):
        attacker = self.make_dual(army_factory)

        # primary 12 - 2 = 10, secondary 7 - 2 = 5
        assert damage(attacker, defender_stats(melee_armor=2, ranged_armor=2)) == 15

    def test_secondary_uses_own_armor_and_bonus(self, army_factory):
        attacker = self.make_dual(army_factory, secondary_attack=4, bonus={"Heavy": 6})

        result = damage(attacker, defender_stats(melee_armor=0, ranged_armor=3), {"Heavy"})

        # primary 12 - 0, secondary (4 + 6) - 3
        assert result == 19

    def test_secondary_has_own_floor(self, army_factory):
        attacker = self.make_dual(army_factory, secondary_attack=0)

        assert damage(attacker, defender_stats(melee_armor=20, ranged_armor=20)) == 2

    def test_strikes_for_both_mode(self, army_factory):
        attacker = self.make_dual(army_factory)
        stats = BuffResolver.resolve(attacker, 0.0)

        strikes = DamageCalculator.strikes_for(attacker, stats)

        assert [s.weapon_type for s in strikes] == [WeaponType.MELEE, WeaponType.RANGED]
        assert [s.attack for s in strikes] == [12, 7]


class TestBonusDamage:

    def test_bonus_damage_sum(self):
        assert DamageCalculator.bonus_damage({"A": 1.5, "B": 2.5}, ["B", "A", "C"]) == 4.0

    def test_empty_bonus(self):
        assert DamageCalculator.bonus_damage({}, ["A"]) == 0
