"""
Result rendering for battle outcomes.

A ResultSink accepts a finished BattleOutcome and displays it. The text sink
builds the display lines separately from writing them so they can be checked
without capturing output.
"""
import sys
from typing import Protocol, TextIO, Optional

from ..core.data import BattleOutcome, Winner


class ResultSink(Protocol):
    """Anything that can display a battle outcome."""

    def show(self, outcome: BattleOutcome) -> None:
        ...


class TextResultSink:
    """Writes a battle outcome as plain text lines."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    @staticmethod
    def winner_line(outcome: BattleOutcome) -> str:
        if outcome.winner == Winner.DRAW:
            return "Draw!"
        return f"Team {outcome.winner.value} Wins! ({outcome.winner_name})"

    @staticmethod
    def render(outcome: BattleOutcome) -> list[str]:
        """Display lines: winner, survivors, HP %, resources lost, duration, final counts."""
        return [
            TextResultSink.winner_line(outcome),
            f"Remaining units: {outcome.winner_units}",
            f"Remaining HP: {outcome.remaining_hp_pct:.1f}%",
            f"Resources lost: {outcome.resources_lost:.0f}",
            f"Battle duration: {outcome.elapsed_time:.1f}s",
            (
                f"Team A ({outcome.unit_name_a}): {outcome.final_units_a} units | "
                f"Team B ({outcome.unit_name_b}): {outcome.final_units_b} units"
            ),
        ]

    def show(self, outcome: BattleOutcome) -> None:
        for line in self.render(outcome):
            self.stream.write(line + "\n")
