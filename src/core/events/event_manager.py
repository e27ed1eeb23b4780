"""
Event bus for battle observers.

The attack scheduler publishes what happens during a battle (attacks, unit
losses, expiring buffs) to this bus; observers such as the LogManager
subscribe by event type. Publishing queues the event, and the queue is drained
by ``process_events`` once the battle loop is done, so observers never run in
the middle of a scheduler iteration.

Battles are single-threaded and each owns its own bus, so there is no locking.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


@dataclass
class QueuedEvent:
    """An event waiting for delivery."""
    event: "GameEvent"
    timestamp: datetime = field(default_factory=datetime.now)
    source: Optional[str] = None
    # Publication counter
    sequence: int = 0


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Queues battle events and delivers them to subscribers."""

    def __init__(self, enable_debug_logging: bool = False, history_size: int = 1000):
        """
        Args:
            enable_debug_logging: Report subscriptions and deliveries through
                the debug callback
            history_size: Number of delivered events kept for inspection
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []
        self._event_queue: deque[QueuedEvent] = deque()
        self._event_history: deque[QueuedEvent] = deque(maxlen=history_size)

        self._events_published = 0
        self._events_processed = 0

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Route the bus's own diagnostics (including subscriber errors) to ``callback``."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    @staticmethod
    def _name_of(subscriber: EventSubscriber, subscriber_name: Optional[str] = None) -> str:
        return subscriber_name or getattr(subscriber, '__name__', 'anonymous')

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Deliver events of ``event_type`` to ``subscriber``."""
        self._subscribers[event_type].append(subscriber)
        self._debug_log(f"{self._name_of(subscriber, subscriber_name)} listens to {event_type.name}")

    def subscribe_all(self, subscriber: EventSubscriber, subscriber_name: Optional[str] = None) -> None:
        """Deliver every event to ``subscriber``."""
        self._universal_subscribers.append(subscriber)
        self._debug_log(f"{self._name_of(subscriber, subscriber_name)} listens to all events")

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Stop delivering ``event_type`` to ``subscriber``.

        Returns:
            True if the subscriber was registered
        """
        subscribers = self._subscribers.get(event_type, [])
        if subscriber not in subscribers:
            return False
        subscribers.remove(subscriber)
        self._debug_log(f"{self._name_of(subscriber)} stopped listening to {event_type.name}")
        return True

    def publish(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Queue an event for the next ``process_events`` call."""
        queued = QueuedEvent(event=event, source=source or "unknown", sequence=self._events_published)
        self._events_published += 1
        self._event_queue.append(queued)
        self._debug_log(f"Queued {event.__class__.__name__} from {queued.source}")

    def process_events(self, max_events: Optional[int] = None) -> int:
        """
        Deliver queued events in publication order.

        Args:
            max_events: Deliver at most this many; the rest stay queued

        Returns:
            Number of events delivered
        """
        delivered = 0
        while self._event_queue and (max_events is None or delivered < max_events):
            self._deliver(self._event_queue.popleft())
            delivered += 1
        return delivered

    def _deliver(self, queued: QueuedEvent) -> None:
        event = queued.event
        self._event_history.append(queued)
        self._events_processed += 1
        self._debug_log(f"Delivering {event.__class__.__name__} (t={event.timeline_time})")

        # Copies, so a subscriber may unsubscribe while being notified
        targets = list(self._subscribers.get(event.event_type, [])) + list(self._universal_subscribers)
        for subscriber in targets:
            try:
                subscriber(event)
            except Exception as e:
                self._debug_log(f"Error in subscriber {self._name_of(subscriber)}: {e}")

    def clear_queue(self) -> int:
        """Drop all queued events.

        Returns:
            Number of events dropped
        """
        count = len(self._event_queue)
        self._event_queue.clear()
        self._debug_log(f"Dropped {count} queued events")
        return count

    def has_queued_events(self) -> bool:
        return bool(self._event_queue)

    def get_statistics(self) -> dict[str, Any]:
        """Counters for debugging."""
        return {
            'events_published': self._events_published,
            'events_processed': self._events_processed,
            'events_queued': len(self._event_queue),
            'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
            'universal_subscribers_count': len(self._universal_subscribers),
            'event_history_size': len(self._event_history)
        }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Summaries of the most recently delivered events, oldest first."""
        return [
            {
                'event_type': queued.event.__class__.__name__,
                'time': queued.event.timeline_time,
                'source': queued.source,
                'timestamp': queued.timestamp.isoformat()
            }
            for queued in list(self._event_history)[-count:]
        ]
