"""Battle entry point: two army configurations in, one outcome out."""
from typing import Optional, TYPE_CHECKING

from ...core.config import SimulationConfig
from ...core.data import ArmyConfig, BattleOutcome
from .attack_scheduler import AttackScheduler
from .battle_resolver import BattleResolver

if TYPE_CHECKING:
    from ...core.events import EventManager


def run_battle(
    config_a: ArmyConfig,
    config_b: ArmyConfig,
    *,
    settings: Optional[SimulationConfig] = None,
    event_manager: Optional["EventManager"] = None,
    record_trace: Optional[bool] = None,
) -> BattleOutcome:
    """
    Resolve a battle between two armies.

    Identical inputs always give an identical outcome. Events are published to
    ``event_manager`` while the battle runs and processed once it is over.

    Args:
        config_a: Side A configuration
        config_b: Side B configuration
        settings: Engine settings (defaults when omitted)
        event_manager: Optional observer bus
        record_trace: Keep a per-tick trace; defaults to ``settings.record_trace``

    Returns:
        BattleOutcome of the battle
    """
    settings = settings or SimulationConfig()
    if record_trace is None:
        record_trace = settings.record_trace

    scheduler = AttackScheduler(
        config_a,
        config_b,
        settings=settings,
        event_manager=event_manager,
        record_trace=record_trace,
    )
    status = scheduler.run()

    outcome = BattleResolver.resolve(
        scheduler.army_a,
        scheduler.army_b,
        status,
        elapsed_time=scheduler.time,
        ticks=scheduler.ticks,
        trace=scheduler.trace,
    )

    if event_manager is not None:
        event_manager.process_events()

    return outcome
