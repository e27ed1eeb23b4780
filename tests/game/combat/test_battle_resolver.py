"""
Unit tests for the BattleResolver.

Tests winner selection, remaining HP percentage and resources lost.
"""

import pytest

from src.core.data import ArmyState, BattleStatus, Side, Winner
from src.game.combat import BattleResolver, BuffResolver


def make_state(config, side=Side.A, units_alive=None, hp_pool=None):
    stats = BuffResolver.resolve(config, 0.0)
    units = config.count if units_alive is None else units_alive
    pool = units * stats.hp if hp_pool is None else hp_pool
    return ArmyState(side=side, config=config, units_alive=units, hp_pool=pool, effective_stats=stats)


class TestWinner:

    def test_side_a_wins(self, basic_army):
        a = make_state(basic_army, Side.A, units_alive=3, hp_pool=250)
        b = make_state(basic_army, Side.B, units_alive=0, hp_pool=0)

        assert BattleResolver.winner_of(a, b) == Winner.A

    def test_side_b_wins(self, basic_army):
        a = make_state(basic_army, Side.A, units_alive=0, hp_pool=0)
        b = make_state(basic_army, Side.B, units_alive=1, hp_pool=5)

        assert BattleResolver.winner_of(a, b) == Winner.B

    def test_mutual_destruction_is_draw(self, basic_army):
        a = make_state(basic_army, Side.A, units_alive=0, hp_pool=0)
        b = make_state(basic_army, Side.B, units_alive=0, hp_pool=0)

        assert BattleResolver.winner_of(a, b) == Winner.DRAW

    def test_both_alive_is_draw(self, basic_army):
        a = make_state(basic_army, Side.A)
        b = make_state(basic_army, Side.B)

        assert BattleResolver.winner_of(a, b) == Winner.DRAW


class TestMetrics:

    def test_remaining_hp_pct(self, army_factory):
        army = make_state(army_factory(count=10, hp=100), units_alive=5, hp_pool=450)

        assert BattleResolver.remaining_hp_pct(army) == pytest.approx(45.0)

    def test_remaining_hp_pct_is_clamped(self, army_factory):
        army = make_state(army_factory(count=2, hp=100), units_alive=2, hp_pool=500)

        assert BattleResolver.remaining_hp_pct(army) == 100.0

    def test_remaining_hp_pct_zero_hp(self, army_factory):
        army = make_state(army_factory(count=4, hp=0), units_alive=4, hp_pool=0)

        assert BattleResolver.remaining_hp_pct(army) == 0.0

    def test_resources_lost(self, army_factory):
        army = make_state(army_factory(count=10, hp=100, unit_cost=120), units_alive=5, hp_pool=450)

        # 1200 starting cost, 55% of the HP lost
        assert BattleResolver.resources_lost(army) == pytest.approx(660.0)

    def test_resources_lost_dead_army(self, army_factory):
        army = make_state(army_factory(count=4, unit_cost=50), units_alive=0, hp_pool=0)

        assert BattleResolver.resources_lost(army) == pytest.approx(200.0)


class TestResolve:

    def test_outcome_for_winner(self, army_factory):
        a = make_state(army_factory(name="Knight", count=10, hp=100, unit_cost=200), Side.A, 7, 640)
        b = make_state(army_factory(name="Spearman", count=12, unit_cost=80), Side.B, 0, 0)

        outcome = BattleResolver.resolve(a, b, BattleStatus.A_WINS, elapsed_time=42.5, ticks=30)

        assert outcome.winner == Winner.A
        assert outcome.winner_name == "Knight"
        assert outcome.winner_units == 7
        assert outcome.remaining_hp_pct == pytest.approx(64.0)
        assert outcome.resources_lost == pytest.approx(720.0)
        assert outcome.elapsed_time == 42.5
        assert outcome.final_units_a == 7
        assert outcome.final_units_b == 0
        assert outcome.resources_lost_b == pytest.approx(960.0)
        assert outcome.ticks == 30

    def test_outcome_for_draw(self, army_factory):
        a = make_state(army_factory(count=3, unit_cost=100), Side.A, 0, 0)
        b = make_state(army_factory(count=3, unit_cost=100), Side.B, 0, 0)

        outcome = BattleResolver.resolve(a, b, BattleStatus.DRAW, elapsed_time=12.0)

        assert outcome.winner == Winner.DRAW
        assert outcome.winner_name is None
        assert outcome.winner_units == 0
        assert outcome.remaining_hp_pct == 0
        assert outcome.resources_lost == 0
        assert outcome.resources_lost_a == pytest.approx(300.0)
        assert outcome.resources_lost_b == pytest.approx(300.0)

    def test_timeout_with_survivors_is_draw(self, basic_army):
        a = make_state(basic_army, Side.A, 8, 790)
        b = make_state(basic_army, Side.B, 9, 880)

        outcome = BattleResolver.resolve(a, b, BattleStatus.TIMEOUT, elapsed_time=300.0)

        assert outcome.winner == Winner.DRAW
        assert outcome.status == BattleStatus.TIMEOUT
        assert outcome.final_units_a == 8
        assert outcome.final_units_b == 9
