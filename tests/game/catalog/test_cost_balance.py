"""
Tests for cost-balanced unit counts.
"""

import pytest

from src.game.catalog import balance_counts, balance_for_units


@pytest.mark.parametrize("cost_a,cost_b,expected", [
    (150, 100, (2, 3)),
    (80, 120, (3, 2)),
    (100, 100, (1, 1)),
    (240, 80, (1, 3)),
    (1.5, 1.0, (2, 3)),
])
def test_balance_counts(cost_a, cost_b, expected):
    count_a, count_b = balance_counts(cost_a, cost_b)

    assert (count_a, count_b) == expected
    assert count_a * cost_a == pytest.approx(count_b * cost_b)


@pytest.mark.parametrize("cost_a,cost_b", [(0, 100), (100, 0), (-50, 100)])
def test_no_balance_without_cost(cost_a, cost_b):
    assert balance_counts(cost_a, cost_b) is None


def test_balance_for_units(sample_catalog):
    assert balance_for_units(sample_catalog, "Spearman", "Horseman") == (3, 2)
    assert balance_for_units(sample_catalog, "Raider", "Horseman") == (4, 5)


def test_balance_for_unknown_unit(sample_catalog):
    assert balance_for_units(sample_catalog, "Spearman", "Elephant") is None
