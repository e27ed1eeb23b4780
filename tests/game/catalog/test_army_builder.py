"""
Tests for building ArmyConfig from catalog data.
"""

import pytest

from src.core.data import BuffConfig, WeaponMode, WeaponType
from src.game.catalog import ArmyOverrides, build_army_config, resolve_weapon_mode


class TestBuildArmyConfig:

    def test_primary_weapon_stats(self, sample_catalog):
        army = build_army_config(sample_catalog, "Spearman", age="3", count=12)

        assert army.unit_name == "Spearman"
        assert army.age == "3"
        assert army.count == 12
        assert army.stats.hp == 96
        assert army.stats.attack == 9
        assert army.stats.melee_armor == 1
        assert army.stats.attack_speed == 2.0
        assert army.stats.bonus == {"Cavalry": 21.0}
        assert army.weapon_type == WeaponType.MELEE
        assert army.tags == frozenset({"Infantry", "Melee"})
        assert army.unit_cost == 80
        assert army.starting_cost == 960

    def test_default_age(self, sample_catalog):
        assert build_army_config(sample_catalog, "Horseman").age == "3"
        assert build_army_config(sample_catalog, "Raider").age == "4"
        assert build_army_config(sample_catalog, "Horseman", default_age="2").age == "2"

    def test_missing_age_gives_zeroed_stats(self, sample_catalog):
        army = build_army_config(sample_catalog, "Spearman", age="4")

        assert army.stats.hp == 0
        assert army.stats.attack == 0
        assert army.stats.attack_speed == 2.0

    def test_unknown_unit_raises(self, sample_catalog):
        with pytest.raises(KeyError):
            build_army_config(sample_catalog, "Elephant")

    @pytest.mark.parametrize("count,expected", [(0, 1), (-5, 1), (None, 1), (7, 7)])
    def test_count_is_at_least_one(self, sample_catalog, count, expected):
        assert build_army_config(sample_catalog, "Spearman", count=count).count == expected

    def test_free_hits(self, sample_catalog):
        army = build_army_config(sample_catalog, "Horseman", first_hit_enabled=True, free_hits=2)
        negative = build_army_config(sample_catalog, "Horseman", first_hit_enabled=True, free_hits=-1)

        assert army.first_hit_enabled
        assert army.free_hits == 2
        assert negative.free_hits == 0

    def test_buffs_are_attached(self, sample_catalog):
        buffs = BuffConfig(attack_pct=20, attack_pct_expiry=10)

        army = build_army_config(sample_catalog, "Spearman", buffs=buffs)

        assert army.buffs == buffs
        # Base stats stay unbuffed
        assert army.stats.attack == 9


class TestWeaponModes:

    def test_secondary_mode_uses_secondary_weapon(self, sample_catalog):
        army = build_army_config(sample_catalog, "Raider", age="4", weapon_mode="secondary")

        assert army.weapon_mode == WeaponMode.SECONDARY
        assert army.weapon_type == WeaponType.MELEE
        assert army.stats.attack == 13
        assert army.stats.attack_speed == 1.25
        assert army.stats.bonus == {"Ranged": 10.0}
        assert army.stats.hp == 175
        assert army.secondary_weapon is None

    def test_both_mode_snapshots_secondary(self, sample_catalog):
        army = build_army_config(sample_catalog, "Raider", age="4", weapon_mode=WeaponMode.BOTH)

        assert army.weapon_mode == WeaponMode.BOTH
        assert army.weapon_type == WeaponType.RANGED
        assert army.stats.attack == 8
        assert army.stats.attack_speed == 1.5
        assert army.secondary_weapon.type == WeaponType.MELEE
        assert army.secondary_weapon.stats.attack == 13
        assert army.secondary_weapon.attack_speed == 1.25

    def test_falls_back_without_secondary_at_age(self, sample_catalog):
        army = build_army_config(sample_catalog, "Raider", age="2", weapon_mode="both")

        assert army.weapon_mode == WeaponMode.PRIMARY
        assert army.secondary_weapon is None
        assert army.stats.attack == 6

    def test_resolve_weapon_mode(self, sample_catalog):
        assert resolve_weapon_mode(sample_catalog, "Raider", "4", "BOTH") == WeaponMode.BOTH
        assert resolve_weapon_mode(sample_catalog, "Raider", "4", "sideways") == WeaponMode.PRIMARY
        assert resolve_weapon_mode(sample_catalog, "Spearman", "3", "secondary") == WeaponMode.PRIMARY


class TestOverrides:

    def test_overrides_replace_catalog_values(self, sample_catalog):
        overrides = ArmyOverrides(hp=150, attack=20, ranged_armor=5)

        army = build_army_config(sample_catalog, "Spearman", age="3", overrides=overrides)

        assert army.stats.hp == 150
        assert army.stats.attack == 20
        assert army.stats.ranged_armor == 5
        assert army.stats.melee_armor == 1

    def test_non_positive_attack_speed_becomes_one(self, sample_catalog):
        army = build_army_config(sample_catalog, "Spearman", overrides=ArmyOverrides(attack_speed=0))

        assert army.stats.attack_speed == 1.0

    def test_empty_overrides_keep_stats(self, sample_catalog):
        plain = build_army_config(sample_catalog, "Horseman")
        overridden = build_army_config(sample_catalog, "Horseman", overrides=ArmyOverrides())

        assert plain.stats == overridden.stats
