"""
Basic test fixtures for the matchup simulator test suite.

Provides small catalogs and army configurations for testing the combat core.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from src.core.config import SimulationConfig
from src.core.data import ArmyConfig, BuffConfig, UnitStats, WeaponType
from src.core.engine.timeline import Timeline
from src.core.events import EventManager
from src.game.catalog import UnitCatalog


SAMPLE_CATALOG_DATA = {
    "Spearman": {
        "tags": ["Infantry", "Melee"],
        "costs": {"food": 60, "wood": 20},
        "weapons": {
            "primary": {
                "type": "melee",
                "attackSpeed": 2.0,
                "ages": {
                    "2": {"hp": 80, "attack": 8, "meleeArmor": 0, "rangedArmor": 0, "bonus": {"Cavalry": 17}},
                    "3": {"hp": 96, "attack": 9, "meleeArmor": 1, "rangedArmor": 1, "bonus": {"Cavalry": 21}},
                },
            },
        },
    },
    "Horseman": {
        "tags": ["Cavalry", "Melee"],
        "costs": {"food": 100, "wood": 20},
        "weapons": {
            "primary": {
                "type": "melee",
                "attackSpeed": 1.75,
                "ages": {
                    "2": {"hp": 125, "attack": 9, "meleeArmor": 0, "rangedArmor": 2},
                    "3": {"hp": 145, "attack": 10, "meleeArmor": 1, "rangedArmor": 3},
                    "4": {"hp": 170, "attack": 12, "meleeArmor": 1, "rangedArmor": 4},
                },
            },
        },
    },
    "Raider": {
        "tags": ["Cavalry", "Ranged"],
        "costs": {"food": 90, "gold": 60},
        "weapons": {
            "primary": {
                "type": "ranged",
                "attackSpeed": 1.5,
                "ages": {
                    "2": {"hp": 130, "attack": 6},
                    "4": {"hp": 175, "attack": 8, "meleeArmor": 1, "rangedArmor": 4},
                },
            },
            "secondary": {
                "type": "melee",
                "attackSpeed": 1.25,
                "ages": {
                    "4": {"hp": 175, "attack": 13, "meleeArmor": 1, "rangedArmor": 4, "bonus": {"Ranged": 10}},
                },
            },
        },
    },
}


def make_army(
    name: str = "Soldier",
    count: int = 10,
    hp: float = 100,
    attack: float = 10,
    attack_speed: float = 1.0,
    melee_armor: float = 0,
    ranged_armor: float = 0,
    bonus=None,
    tags=(),
    weapon_type: WeaponType = WeaponType.MELEE,
    **kwargs,
) -> ArmyConfig:
    """Build an ArmyConfig directly, bypassing the catalog."""
    stats = UnitStats(
        hp=hp,
        attack=attack,
        melee_armor=melee_armor,
        ranged_armor=ranged_armor,
        attack_speed=attack_speed,
        bonus=dict(bonus or {}),
    )
    return ArmyConfig(
        unit_name=name,
        count=count,
        stats=stats,
        weapon_type=weapon_type,
        tags=frozenset(tags),
        **kwargs,
    )


@pytest.fixture
def army_factory():
    """Factory for ad-hoc army configurations."""
    return make_army


@pytest.fixture
def basic_army():
    """Ten 100 HP / 10 attack melee units attacking once per second."""
    return make_army()


@pytest.fixture
def no_buffs():
    return BuffConfig()


@pytest.fixture
def settings():
    """Default engine settings."""
    return SimulationConfig()


@pytest.fixture
def timeline():
    """Create a fresh timeline for testing."""
    return Timeline()


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def catalog_data():
    return SAMPLE_CATALOG_DATA


@pytest.fixture
def sample_catalog():
    """A three-unit catalog, one unit with a secondary weapon."""
    return UnitCatalog.from_dict(SAMPLE_CATALOG_DATA)
