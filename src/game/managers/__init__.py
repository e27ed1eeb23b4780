"""Manager systems for battle coordination.

This package contains manager classes that observe battles through the
event-driven architecture.
"""

from .log_manager import LogManager, LogLevel, LogCategory, LogMessage

__all__ = [
    "LogManager",
    "LogLevel",
    "LogCategory",
    "LogMessage",
]
