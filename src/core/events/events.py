"""Battle events and context.

This module defines all events that managers can subscribe to, following the
event-driven architecture with timeline-based timing.

Event Design Principles:
- Events are immutable dataclasses
- All events include timeline_time timestamp from the battle timeline
- Events use proper enums instead of magic strings
- Keep event types focused and avoid over-granular events
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto

from ..data import Side, BattleStatus, Winner


class EventType(Enum):
    """Types of battle events that managers can subscribe to."""
    # Battle lifecycle
    BATTLE_STARTED = auto()
    BATTLE_ENDED = auto()

    # Combat Events
    ATTACK_RESOLVED = auto()
    UNITS_LOST = auto()
    BUFF_EXPIRED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all battle events."""
    timeline_time: float
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class BattleStarted(GameEvent):
    """Event emitted once both armies are seeded."""
    unit_name_a: str
    unit_name_b: str
    count_a: int
    count_b: int
    hp_pool_a: float
    hp_pool_b: float

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.BATTLE_STARTED)


@dataclass(frozen=True)
class AttackResolved(GameEvent):
    """Event emitted when one side's volley has been applied."""
    attacker: Side
    attacking_units: int
    damage_per_unit: float
    total_damage: float
    defender_hp_pool: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_RESOLVED)


@dataclass(frozen=True)
class UnitsLost(GameEvent):
    """Event emitted when a volley kills one or more units."""
    side: Side
    lost: int
    remaining: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNITS_LOST)


@dataclass(frozen=True)
class BuffExpired(GameEvent):
    """Event emitted when a temporary buff term stops applying."""
    side: Side
    buff_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BUFF_EXPIRED)


@dataclass(frozen=True)
class BattleEnded(GameEvent):
    """Event emitted when the scheduler reaches a terminal state."""
    status: BattleStatus
    winner: Winner
    units_a: int
    units_b: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_ENDED)

