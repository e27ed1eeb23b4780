"""Timeline management for attack scheduling.

This module implements the event queue that drives a battle. Each side's next
attack is scheduled on a timeline queue and processed in chronological order.

Core Concepts:
- Timeline uses simulated seconds (floats); times may be negative when a side
  banks free hits before time zero
- Entries closer together than an epsilon tolerance are treated as one
  simultaneous event so floating-point drift never orders identical attackers
- Timeline queue processes entries in chronological order
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class TimelineEntry:
    """A scheduled event on the timeline.

    The timeline queue is ordered by execution_time, with earlier times processed first.
    """

    # When this entry should be processed (simulated seconds)
    execution_time: float

    # The entity that will act (a side identifier)
    entity_id: str

    # Unique ID for stable sorting when times are equal
    sequence_id: int = 0

    def __lt__(self, other: "TimelineEntry") -> bool:
        """Define ordering for heap queue.

        Primary: execution_time (earlier times first)
        Secondary: sequence_id (stable ordering for simultaneous events)
        """
        if self.execution_time != other.execution_time:
            return self.execution_time < other.execution_time
        return self.sequence_id < other.sequence_id

    def __eq__(self, other: object) -> bool:
        """Check equality based on execution_time and sequence_id."""
        if not isinstance(other, TimelineEntry):
            return NotImplemented
        return (self.execution_time == other.execution_time and
                self.sequence_id == other.sequence_id)


class Timeline:
    """Priority queue (min-heap) of scheduled attacks.

    Sides are scheduled at absolute times. ``pop_due`` hands back every entry
    that fires at the current instant, so simultaneous attacks can be resolved
    together instead of in arbitrary order.
    """

    def __init__(self, start_time: float = 0.0):
        self._queue: list[TimelineEntry] = []
        self._start_time = start_time
        self._current_time: float = start_time
        self._sequence_counter: int = 0

    @property
    def current_time(self) -> float:
        """Get the current timeline time in seconds."""
        return self._current_time

    @property
    def is_empty(self) -> bool:
        """Check if the timeline has any pending entries."""
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, entity_id: str, time: float) -> TimelineEntry:
        """Schedule an entity to act at an absolute time.

        Args:
            entity_id: Identifier of the acting entity
            time: Absolute time of the action

        Returns:
            The created timeline entry
        """
        entry = TimelineEntry(
            execution_time=time,
            entity_id=entity_id,
            sequence_id=self._get_next_sequence_id(),
        )
        heapq.heappush(self._queue, entry)
        return entry

    def peek_next(self) -> Optional[TimelineEntry]:
        """Get the next timeline entry without removing it."""
        if not self._queue:
            return None
        return self._queue[0]

    def pop_due(self, epsilon: float = 0.0) -> list[TimelineEntry]:
        """Remove and return all entries due at the next instant.

        The earliest entry sets the new current time; any other entry within
        ``epsilon`` of it is returned with it.

        Args:
            epsilon: Tolerance for treating two times as simultaneous

        Returns:
            Due entries in queue order, empty if the timeline is empty
        """
        if not self._queue:
            return []

        first = heapq.heappop(self._queue)
        self._current_time = first.execution_time
        due = [first]

        while self._queue and self._queue[0].execution_time <= self._current_time + epsilon:
            due.append(heapq.heappop(self._queue))

        return due

    def get_preview(self, count: int) -> list[TimelineEntry]:
        """Get the next N timeline entries in order."""
        return heapq.nsmallest(count, self._queue)

    def clear(self) -> None:
        """Clear all entries from the timeline."""
        self._queue.clear()
        self._current_time = self._start_time
        self._sequence_counter = 0

    def _get_next_sequence_id(self) -> int:
        """Get the next unique sequence ID for stable sorting."""
        self._sequence_counter += 1
        return self._sequence_counter

    def get_stats(self) -> dict[str, Any]:
        """Get timeline statistics for debugging/monitoring."""
        return {
            "current_time": self._current_time,
            "total_entries": len(self._queue),
            "sequence_counter": self._sequence_counter,
        }
