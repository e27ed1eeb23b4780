"""Unit catalog: static unit, weapon and cost data.

Units are loaded from a YAML file (JSON files are read by extension) and
converted to UnitDefinition records. The catalog is read-only once built and is
handed explicitly to whatever builds army configurations; the combat core never
sees it.

Expected layout, per unit name::

    Spearman:
      tags: [Infantry, Melee]
      costs: {food: 60, wood: 20}
      weapons:
        primary:
          type: melee
          attackSpeed: 1.875
          ages:
            "2": {hp: 80, attack: 7, meleeArmor: 0, rangedArmor: 0, bonus: {Cavalry: 17}}
        secondary: ...
"""

import json
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import yaml

from ...core.data import UnitDefinition, WeaponDefinition


class UnitCatalog:
    """Read-only lookup of unit definitions by name."""

    def __init__(self, units: Optional[Mapping[str, UnitDefinition]] = None):
        self._units: dict[str, UnitDefinition] = dict(units or {})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UnitCatalog":
        """Build a catalog from raw catalog data, skipping entries that are not mappings."""
        units = {}
        for name, entry in data.items():
            if not isinstance(entry, Mapping):
                continue
            units[str(name)] = cls._parse_unit(str(name), entry)
        return cls(units)

    @classmethod
    def load_from_file(cls, file_path: str) -> "UnitCatalog":
        """Load a catalog from a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file cannot be parsed
        """
        path = Path(file_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Unit catalog file not found: {file_path}")
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to parse unit catalog {file_path}: {e}")

        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"Invalid unit catalog structure in {file_path}: expected a mapping of units")
        # Allow a top-level "units:" section
        if isinstance(data.get("units"), Mapping):
            data = data["units"]
        return cls.from_dict(data)

    @staticmethod
    def _parse_unit(name: str, entry: Mapping[str, Any]) -> UnitDefinition:
        weapons = entry.get("weapons")
        if not isinstance(weapons, Mapping):
            weapons = {}

        secondary_data = weapons.get("secondary")
        secondary = WeaponDefinition.from_dict(secondary_data) if isinstance(secondary_data, Mapping) else None

        tags = entry.get("tags") or []
        costs = entry.get("costs")
        if not isinstance(costs, Mapping):
            costs = {}

        parsed_costs = {}
        for resource, amount in costs.items():
            try:
                parsed_costs[str(resource)] = float(amount)
            except (TypeError, ValueError):
                parsed_costs[str(resource)] = 0.0

        return UnitDefinition(
            name=name,
            primary=WeaponDefinition.from_dict(weapons.get("primary")),
            secondary=secondary,
            tags=frozenset(str(tag) for tag in tags),
            costs=parsed_costs,
        )

    def __contains__(self, unit_name: object) -> bool:
        return unit_name in self._units

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def names(self) -> list[str]:
        """Unit names in catalog order."""
        return list(self._units)

    def get(self, unit_name: str) -> UnitDefinition:
        """Get a unit definition.

        Raises:
            KeyError: If the unit is not in the catalog
        """
        if unit_name not in self._units:
            raise KeyError(f"Unknown unit: {unit_name}")
        return self._units[unit_name]

    def get_total_cost(self, unit_name: str) -> float:
        """Sum of all resource costs of a unit, 0 for unknown units."""
        unit = self._units.get(unit_name)
        if unit is None:
            return 0.0
        return unit.total_cost

    def get_available_ages(self, unit_name: str) -> list[str]:
        """Ages in which the unit's primary weapon has stats."""
        unit = self._units.get(unit_name)
        if unit is None:
            return []
        return unit.ages

    def default_age(self, unit_name: str, preferred: str = "3") -> Optional[str]:
        """The preferred age if the unit has it, otherwise its last listed age."""
        ages = self.get_available_ages(unit_name)
        if not ages:
            return None
        if preferred in ages:
            return preferred
        return ages[-1]

    def has_secondary(self, unit_name: str, age: str) -> bool:
        """Whether the unit has a secondary weapon at ``age``."""
        unit = self._units.get(unit_name)
        return unit is not None and unit.has_secondary(str(age))
