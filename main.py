#!/usr/bin/env python3
"""
Command-line matchup calculator.

Resolves a battle between two armies from the unit catalog and prints the
outcome.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from src.core.config import load_simulation_config, resolve_path
from src.core.data import BuffConfig, Side, SIDE_NAMES, WEAPON_MODE_NAMES
from src.core.events import EventManager
from src.game.catalog import ArmyOverrides, UnitCatalog, balance_for_units, build_army_config
from src.game.combat import run_battle
from src.game.managers import LogManager, LogLevel
from src.renderers.result_renderer import TextResultSink

# ArmyOverrides field -> help text
OVERRIDE_OPTIONS = {
    "hp": "HP per unit",
    "attack": "attack per hit",
    "melee_armor": "melee armor",
    "ranged_armor": "ranged armor",
    "attack_speed": "seconds between attacks",
}

# BuffConfig field -> option name
BUFF_OPTIONS = {
    "hp_flat": "hp-flat",
    "hp_flat_expiry": "hp-flat-expiry",
    "hp_pct": "hp-pct",
    "hp_pct_expiry": "hp-pct-expiry",
    "attack_flat": "attack-flat",
    "attack_flat_expiry": "attack-flat-expiry",
    "attack_pct": "attack-pct",
    "attack_pct_expiry": "attack-pct-expiry",
    "speed_pct": "speed-pct",
    "speed_pct_expiry": "speed-pct-expiry",
    "melee_armor": "melee-armor-buff",
    "ranged_armor": "ranged-armor-buff",
    "armor_expiry": "armor-expiry",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Predict the outcome of a unit matchup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --list                                   # List units and ages
  python main.py --unit-a Horseman --unit-b Spearman      # Age 3, one unit each
  python main.py --unit-a Archer --unit-b Spearman --balance
  python main.py --unit-a Horseman --count-a 10 --first-hit-a --free-hits-a 2 --unit-b Spearman --count-b 10 --log
  python main.py --unit-a Knight --attack-pct-a 20 --attack-pct-expiry-a 10 --unit-b Man-at-Arms --hp-b 170

Buff expiries are in simulated seconds; 0 keeps the buff for the whole battle.
        """
    )

    parser.add_argument("--config", help="Simulation settings YAML file")
    parser.add_argument("--catalog", help="Unit catalog file (YAML or JSON)")
    parser.add_argument("--list", action="store_true", help="List catalog units and exit")
    parser.add_argument("--balance", action="store_true", help="Use cost-balanced unit counts")
    parser.add_argument("--log", action="store_true", help="Print the battle log")
    parser.add_argument("--save-log", metavar="DIR", help="Write the full battle log to a file in DIR")
    parser.add_argument("--verbose", "-v", action="store_true", help="Include per-attack log lines")

    for side in ("a", "b"):
        upper = side.upper()
        group = parser.add_argument_group(f"team {upper}")
        group.add_argument(f"--unit-{side}", help=f"Unit of team {upper}")
        group.add_argument(f"--age-{side}", help=f"Age of team {upper} (default: 3 or highest)")
        group.add_argument(f"--count-{side}", type=int, default=1, help=f"Unit count of team {upper}")
        group.add_argument(
            f"--mode-{side}",
            choices=["primary", "secondary", "both"],
            default="primary",
            help=f"Weapon mode of team {upper}",
        )
        group.add_argument(
            f"--first-hit-{side}",
            action="store_true",
            help=f"Team {upper} lands its free hits before the battle starts",
        )
        group.add_argument(
            f"--free-hits-{side}",
            type=int,
            default=1,
            help=f"Free hits of team {upper}, used with --first-hit-{side}",
        )

        for field_name, text in OVERRIDE_OPTIONS.items():
            group.add_argument(
                f"--{field_name.replace('_', '-')}-{side}",
                dest=f"{field_name}_{side}",
                type=float,
                help=f"Override the catalog {text} of team {upper}",
            )

        for field_name, option in BUFF_OPTIONS.items():
            group.add_argument(
                f"--{option}-{side}",
                dest=f"buff_{field_name}_{side}",
                type=float,
                default=0.0,
                help=f"Buff {field_name.replace('_', ' ')} of team {upper}",
            )

    return parser


def overrides_from_args(args: argparse.Namespace, side: str) -> Optional[ArmyOverrides]:
    """Manual stat overrides of one side, or None when none were given."""
    values = {name: getattr(args, f"{name}_{side}") for name in OVERRIDE_OPTIONS}
    if all(value is None for value in values.values()):
        return None
    return ArmyOverrides(**values)


def buffs_from_args(args: argparse.Namespace, side: str) -> BuffConfig:
    return BuffConfig(**{name: getattr(args, f"buff_{name}_{side}") for name in BUFF_OPTIONS})


def list_units(catalog: UnitCatalog) -> None:
    for name in catalog.names():
        ages = ", ".join(catalog.get_available_ages(name)) or "-"
        print(f"{name:<24} ages: {ages:<12} cost: {catalog.get_total_cost(name):.0f}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    event_manager = EventManager()
    log_manager = LogManager(
        event_manager,
        default_level=LogLevel.DEBUG if args.verbose else LogLevel.INFO,
    )

    settings = load_simulation_config(args.config)
    # Command-line paths are taken as given; only the configured default is project-relative
    catalog_path = Path(args.catalog) if args.catalog else resolve_path(settings.catalog_path)

    try:
        catalog = UnitCatalog.load_from_file(str(catalog_path))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    log_manager.catalog(f"Loaded {len(catalog)} units from {catalog_path}")

    if args.list:
        list_units(catalog)
        return 0

    if not args.unit_a or not args.unit_b:
        print("Error: --unit-a and --unit-b are required")
        return 2

    count_a, count_b = args.count_a, args.count_b
    if args.balance:
        balanced = balance_for_units(catalog, args.unit_a, args.unit_b)
        if balanced is None:
            log_manager.warning(f"Cannot balance {args.unit_a} and {args.unit_b} without unit costs")
        else:
            count_a, count_b = balanced
            log_manager.catalog(f"Cost-balanced counts: {count_a}x {args.unit_a} vs {count_b}x {args.unit_b}")

    try:
        configs = {
            side: build_army_config(
                catalog,
                getattr(args, f"unit_{key}"),
                age=getattr(args, f"age_{key}"),
                count=count,
                weapon_mode=getattr(args, f"mode_{key}"),
                overrides=overrides_from_args(args, key),
                buffs=buffs_from_args(args, key),
                first_hit_enabled=getattr(args, f"first_hit_{key}"),
                free_hits=getattr(args, f"free_hits_{key}"),
                default_age=settings.default_age,
            )
            for side, key, count in ((Side.A, "a", count_a), (Side.B, "b", count_b))
        }
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 1

    for side, config in configs.items():
        setup = (f"{SIDE_NAMES[side]}: {config.count}x {config.unit_name} (age {config.age}, "
                 f"{WEAPON_MODE_NAMES[config.weapon_mode]} weapon)")
        if config.first_hit_enabled and config.free_hits:
            setup += f", {config.free_hits} free hit(s)"
        log_manager.battle(setup)

    outcome = run_battle(configs[Side.A], configs[Side.B], settings=settings, event_manager=event_manager)

    if args.log:
        for message in log_manager.get_messages():
            print(message.format())
        print()

    TextResultSink().show(outcome)

    if args.save_log:
        saved = log_manager.save_log_to_file(args.save_log)
        if saved is None:
            print(f"Error: could not write battle log to {args.save_log}")
            return 1
        print(f"Battle log saved to {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
