"""Event system for publisher-subscriber communication.

This package contains the complete event-driven architecture:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Event definitions for battle observers
"""

from .event_manager import EventManager, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    BattleStarted,
    AttackResolved,
    UnitsLost,
    BuffExpired,
    BattleEnded,
)

__all__ = [
    "EventManager",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "BattleStarted",
    "AttackResolved",
    "UnitsLost",
    "BuffExpired",
    "BattleEnded",
]
