"""Core engine components.

This package contains the fundamental engine systems:
- timeline.py: Timeline queue and entry management for attack scheduling
"""

from .timeline import Timeline, TimelineEntry

__all__ = [
    "Timeline",
    "TimelineEntry",
]
