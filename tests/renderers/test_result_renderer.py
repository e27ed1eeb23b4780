"""
Tests for the text result sink.
"""

import io

from src.core.data import BattleOutcome, BattleStatus, Winner
from src.renderers.result_renderer import TextResultSink


def make_outcome(**changes):
    values = dict(
        winner=Winner.A,
        status=BattleStatus.A_WINS,
        winner_units=7,
        remaining_hp_pct=64.04,
        resources_lost=719.6,
        elapsed_time=42.25,
        final_units_a=7,
        final_units_b=0,
        unit_name_a="Knight",
        unit_name_b="Spearman",
    )
    values.update(changes)
    return BattleOutcome(**values)


class TestTextResultSink:

    def test_render_winner(self):
        lines = TextResultSink.render(make_outcome())

        assert lines == [
            "Team A Wins! (Knight)",
            "Remaining units: 7",
            "Remaining HP: 64.0%",
            "Resources lost: 720",
            "Battle duration: 42.2s",
            "Team A (Knight): 7 units | Team B (Spearman): 0 units",
        ]

    def test_render_side_b_winner(self):
        outcome = make_outcome(winner=Winner.B, status=BattleStatus.B_WINS, final_units_a=0, final_units_b=3)

        assert TextResultSink.winner_line(outcome) == "Team B Wins! (Spearman)"

    def test_render_draw(self):
        outcome = make_outcome(
            winner=Winner.DRAW, status=BattleStatus.DRAW, winner_units=0,
            remaining_hp_pct=0.0, resources_lost=0.0, final_units_a=0,
        )

        lines = TextResultSink.render(outcome)

        assert lines[0] == "Draw!"
        assert lines[1] == "Remaining units: 0"

    def test_show_writes_lines(self):
        stream = io.StringIO()

        TextResultSink(stream).show(make_outcome())

        output = stream.getvalue().splitlines()
        assert output == TextResultSink.render(make_outcome())
