"""Cost balancing for army sizes.

Finds the smallest unit counts that make both armies cost the same, e.g.
units costing 150 and 100 give a 2:3 count ratio.
"""
from fractions import Fraction
from math import gcd
from typing import Optional

from .unit_catalog import UnitCatalog


def balance_counts(cost_a: float, cost_b: float) -> Optional[tuple[int, int]]:
    """Reduced integer counts with equal total cost.

    Returns:
        (count_a, count_b), or None when either cost is not positive
    """
    if cost_a <= 0 or cost_b <= 0:
        return None

    # Fractions keep non-integer costs exact
    a = Fraction(cost_a).limit_denominator(1000)
    b = Fraction(cost_b).limit_denominator(1000)
    scale = a.denominator * b.denominator
    int_a = int(a * scale)
    int_b = int(b * scale)

    divisor = gcd(int_a, int_b)
    return int_b // divisor, int_a // divisor


def balance_for_units(catalog: UnitCatalog, unit_a: str, unit_b: str) -> Optional[tuple[int, int]]:
    """Cost-balanced counts for two catalog units."""
    return balance_counts(catalog.get_total_cost(unit_a), catalog.get_total_cost(unit_b))
