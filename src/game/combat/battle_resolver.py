"""
Battle outcome resolution.

Turns the terminal state of both armies into a BattleOutcome: the winner, how
much of the winning army is left, and what the fight cost in resources.
"""
from typing import Optional

from ...core.data import ArmyState, BattleOutcome, BattleStatus, BattleTrace, Winner


class BattleResolver:
    """Determines the winner and efficiency metrics of a finished battle."""

    @staticmethod
    def winner_of(army_a: ArmyState, army_b: ArmyState) -> Winner:
        """The only side with units left, or a draw."""
        if army_a.is_alive and not army_b.is_alive:
            return Winner.A
        if army_b.is_alive and not army_a.is_alive:
            return Winner.B
        return Winner.DRAW

    @staticmethod
    def remaining_hp_pct(army: ArmyState) -> float:
        """Surviving share of the army's starting HP pool, in [0, 100]."""
        full_pool = army.effective_stats.hp * army.config.count
        if army.units_alive <= 0 or full_pool <= 0:
            return 0.0
        return max(0.0, min(100.0, army.hp_pool / full_pool * 100))

    @staticmethod
    def resources_lost(army: ArmyState) -> float:
        """Starting cost scaled by the share of HP the army lost."""
        return army.config.starting_cost * (1 - BattleResolver.remaining_hp_pct(army) / 100)

    @staticmethod
    def resolve(
        army_a: ArmyState,
        army_b: ArmyState,
        status: BattleStatus,
        elapsed_time: float,
        ticks: int = 0,
        trace: Optional[BattleTrace] = None,
    ) -> BattleOutcome:
        """
        Build the outcome of a battle.

        Args:
            army_a: Terminal state of side A
            army_b: Terminal state of side B
            status: Terminal scheduler state
            elapsed_time: Simulated time of the last processed event
            ticks: Number of processed attack instants
            trace: Optional per-tick record

        Returns:
            BattleOutcome; on a draw the winner fields are zero
        """
        winner = BattleResolver.winner_of(army_a, army_b)
        winning_army = {Winner.A: army_a, Winner.B: army_b}.get(winner)

        if winning_army is None:
            winner_units = 0
            remaining_pct = 0.0
            resources_lost = 0.0
        else:
            winner_units = winning_army.units_alive
            remaining_pct = BattleResolver.remaining_hp_pct(winning_army)
            resources_lost = winning_army.config.starting_cost * (1 - remaining_pct / 100)

        return BattleOutcome(
            winner=winner,
            status=status,
            winner_units=winner_units,
            remaining_hp_pct=remaining_pct,
            resources_lost=resources_lost,
            elapsed_time=elapsed_time,
            final_units_a=army_a.units_alive,
            final_units_b=army_b.units_alive,
            unit_name_a=army_a.config.unit_name,
            unit_name_b=army_b.config.unit_name,
            resources_lost_a=BattleResolver.resources_lost(army_a),
            resources_lost_b=BattleResolver.resources_lost(army_b),
            ticks=ticks,
            trace=trace,
        )
