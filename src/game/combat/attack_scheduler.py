"""
Attack scheduling and damage application.

This module runs the battle loop: it advances the timeline to the next
scheduled attack(s), refreshes both armies' buffed stats, resolves every due
volley and applies the damage to the HP pools.

Volleys that are due at the same instant are all computed before any of them
is applied, so neither side gets an evaluation-order advantage.
"""
import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ...core.config import SimulationConfig
from ...core.data import ArmyConfig, ArmyState, BattleStatus, BattleTrace, Side
from ...core.engine import Timeline
from ...core.events import (
    AttackResolved,
    BattleEnded,
    BattleStarted,
    BuffExpired,
    UnitsLost,
)
from .battle_resolver import BattleResolver
from .buff_resolver import BuffResolver
from .damage_calculator import DamageCalculator

if TYPE_CHECKING:
    from ...core.events import EventManager, GameEvent


@dataclass(frozen=True)
class Volley:
    """Damage one side deals in a single attack event."""
    attacker: Side
    attacking_units: int
    damage_per_unit: float

    @property
    def total_damage(self) -> float:
        return self.damage_per_unit * self.attacking_units


class AttackScheduler:
    """Discrete-event loop for one battle.

    States: INIT -> RUNNING -> A_WINS | B_WINS | DRAW | TIMEOUT.
    """

    def __init__(
        self,
        config_a: ArmyConfig,
        config_b: ArmyConfig,
        settings: Optional[SimulationConfig] = None,
        event_manager: Optional["EventManager"] = None,
        record_trace: bool = False,
    ):
        self.settings = settings or SimulationConfig()
        self.event_manager = event_manager
        self.trace: Optional[BattleTrace] = BattleTrace() if record_trace else None

        self.status = BattleStatus.INIT
        self.time = 0.0
        self.ticks = 0
        self.timeline = Timeline()
        self.armies: dict[Side, ArmyState] = {
            Side.A: self._create_army(Side.A, config_a),
            Side.B: self._create_army(Side.B, config_b),
        }
        self._last_refresh: Optional[float] = None

    @property
    def army_a(self) -> ArmyState:
        return self.armies[Side.A]

    @property
    def army_b(self) -> ArmyState:
        return self.armies[Side.B]

    @staticmethod
    def _create_army(side: Side, config: ArmyConfig) -> ArmyState:
        """Seed an army's live state at time zero."""
        stats = BuffResolver.resolve(config, 0.0)
        count = max(0, config.count)
        next_attack = -config.free_hits * config.stats.attack_speed if config.first_hit_enabled else 0.0
        return ArmyState(
            side=side,
            config=config,
            units_alive=count,
            hp_pool=max(0.0, count * stats.hp),
            effective_stats=stats,
            next_attack_time=next_attack,
        )

    def start(self) -> None:
        """Move from INIT to RUNNING and schedule both sides' first attacks."""
        if self.status != BattleStatus.INIT:
            return

        for side, army in self.armies.items():
            self.timeline.schedule(side.value, army.next_attack_time)

        self.status = BattleStatus.RUNNING
        self._publish(BattleStarted(
            timeline_time=self.time,
            unit_name_a=self.army_a.config.unit_name,
            unit_name_b=self.army_b.config.unit_name,
            count_a=self.army_a.units_alive,
            count_b=self.army_b.units_alive,
            hp_pool_a=self.army_a.hp_pool,
            hp_pool_b=self.army_b.hp_pool,
        ))
        self._check_terminal()

    def run(self) -> BattleStatus:
        """Run the battle to a terminal state."""
        self.start()
        while self.step():
            pass
        return self.status

    def step(self) -> bool:
        """Process the next attack instant.

        Returns:
            True while the battle is still running afterwards
        """
        if self.status == BattleStatus.INIT:
            self.start()
        if self.status.is_terminal:
            return False

        upcoming = self.timeline.peek_next()
        if upcoming is None or upcoming.execution_time > self.settings.max_time:
            self._finish(BattleStatus.TIMEOUT)
            return False

        due = self.timeline.pop_due(self.settings.epsilon)
        self.time = self.timeline.current_time
        self._refresh_stats()

        firing = sorted((Side(entry.entity_id) for entry in due), key=lambda s: s.value)

        # Compute every due volley before applying any of them
        volleys = [self._compute_volley(side) for side in firing]
        for volley in volleys:
            self._apply_volley(volley)
        for side in [volley.attacker.opponent for volley in volleys]:
            self._update_units(self.armies[side])

        for side in firing:
            army = self.armies[side]
            army.next_attack_time = self.time + army.effective_stats.attack_speed
            self.timeline.schedule(side.value, army.next_attack_time)

        self.ticks += 1
        if self.trace is not None:
            self.trace.record(self.time, self.army_a, self.army_b)

        return not self._check_terminal()

    def _refresh_stats(self) -> None:
        """Re-resolve buffs for the current time and keep pools within their ceiling."""
        for side, army in self.armies.items():
            if self._last_refresh is not None:
                for buff_name in BuffResolver.expired_buffs(army.config, self._last_refresh, self.time):
                    self._publish(BuffExpired(timeline_time=self.time, side=side, buff_name=buff_name))

            army.effective_stats = BuffResolver.resolve(army.config, self.time)
            # An expired HP buff removes its hit points from the pool
            army.hp_pool = min(army.hp_pool, army.max_pool)

        self._last_refresh = self.time

    def _compute_volley(self, side: Side) -> Volley:
        attacker = self.armies[side]
        defender = self.armies[side.opponent]
        damage = DamageCalculator.compute_attack_damage(
            attacker.config,
            attacker.effective_stats,
            defender.config.tags,
            defender.effective_stats,
        )
        return Volley(attacker=side, attacking_units=attacker.units_alive, damage_per_unit=damage)

    def _apply_volley(self, volley: Volley) -> None:
        defender = self.armies[volley.attacker.opponent]
        defender.hp_pool -= volley.total_damage
        self._publish(AttackResolved(
            timeline_time=self.time,
            attacker=volley.attacker,
            attacking_units=volley.attacking_units,
            damage_per_unit=volley.damage_per_unit,
            total_damage=volley.total_damage,
            defender_hp_pool=max(0.0, defender.hp_pool),
        ))

    def _update_units(self, army: ArmyState) -> None:
        """Derive the surviving unit count from the damaged pool.

        Overkill stays in the pool, so several units can fall to one volley.
        """
        hp = army.effective_stats.hp
        before = army.units_alive
        if hp <= 0:
            lost = before
        else:
            lost = max(0, math.floor((hp * before - army.hp_pool) / hp))

        army.units_alive = max(0, before - lost)
        army.hp_pool = max(0.0, army.hp_pool)
        if army.units_alive == 0:
            army.hp_pool = 0.0

        if army.units_alive < before:
            self._publish(UnitsLost(
                timeline_time=self.time,
                side=army.side,
                lost=before - army.units_alive,
                remaining=army.units_alive,
            ))

    def _check_terminal(self) -> bool:
        """Enter a terminal state if the battle is decided or out of time."""
        a_alive = self.army_a.is_alive
        b_alive = self.army_b.is_alive

        if not a_alive and not b_alive:
            self._finish(BattleStatus.DRAW)
        elif not b_alive:
            self._finish(BattleStatus.A_WINS)
        elif not a_alive:
            self._finish(BattleStatus.B_WINS)
        elif self.time >= self.settings.max_time:
            self._finish(BattleStatus.TIMEOUT)

        return self.status.is_terminal

    def _finish(self, status: BattleStatus) -> None:
        self.status = status
        self._publish(BattleEnded(
            timeline_time=self.time,
            status=status,
            winner=BattleResolver.winner_of(self.army_a, self.army_b),
            units_a=self.army_a.units_alive,
            units_b=self.army_b.units_alive,
        ))

    def _publish(self, event: "GameEvent") -> None:
        if self.event_manager is not None:
            self.event_manager.publish(event, source="AttackScheduler")
