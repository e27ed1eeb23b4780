"""
Log management system for battle messages and debugging.

This module provides centralized logging with categorization, filtering,
and bounded storage. It listens to battle events on the event bus and turns
them into readable lines.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Iterable, Optional, TYPE_CHECKING

from ...core.data import SIDE_NAMES, BATTLE_STATUS_NAMES
from ...core.events import (
    AttackResolved,
    BattleEnded,
    BattleStarted,
    BuffExpired,
    EventType,
    UnitsLost,
)

if TYPE_CHECKING:
    from ...core.events import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # System messages (initialization, loading, etc.)
    BATTLE = auto()     # Combat-related messages
    TIMELINE = auto()   # Per-attack timeline messages
    CATALOG = auto()    # Unit catalog messages
    DEBUG = auto()      # Debug messages
    WARNING = auto()    # Warning messages
    ERROR = auto()      # Error messages


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.TIMELINE: "TML",
    LogCategory.CATALOG: "CAT",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


@dataclass
class LogMessage:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    battle_time: Optional[float] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        if self.battle_time is not None:
            parts.append(f"t={self.battle_time:.1f}s")

        parts.append(self.text)
        return " ".join(parts)


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class LogManager:
    """Manages battle logging with categorization and filtering."""

    def __init__(
        self,
        event_manager: Optional["EventManager"] = None,
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to listen on (optional)
            max_messages: Maximum number of messages to store in the buffer
            default_level: Default log level for filtering
        """
        self.messages: deque[LogMessage] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager

        # Category-specific log level mappings
        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.TIMELINE: LogLevel.DEBUG,   # One line per volley
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
            # SYSTEM, BATTLE, CATALOG default to INFO
        }

        if self.event_manager is not None:
            self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        """Set up event subscriptions for centralized logging."""
        assert self.event_manager is not None
        handlers = {
            EventType.BATTLE_STARTED: self._handle_battle_started,
            EventType.ATTACK_RESOLVED: self._handle_attack_resolved,
            EventType.UNITS_LOST: self._handle_units_lost,
            EventType.BUFF_EXPIRED: self._handle_buff_expired,
            EventType.BATTLE_ENDED: self._handle_battle_ended,
        }
        for event_type, handler in handlers.items():
            self.event_manager.subscribe(event_type, handler, subscriber_name=f"LogManager.{event_type.name.lower()}")
        self.event_manager.set_debug_callback(self.debug)

    def _handle_battle_started(self, event) -> None:
        if isinstance(event, BattleStarted):
            self.log(
                f"Battle started: {event.count_a}x {event.unit_name_a} ({event.hp_pool_a:.0f} HP) "
                f"vs {event.count_b}x {event.unit_name_b} ({event.hp_pool_b:.0f} HP)",
                LogCategory.BATTLE,
                event.timeline_time,
            )

    def _handle_attack_resolved(self, event) -> None:
        if isinstance(event, AttackResolved):
            self.log(
                f"{SIDE_NAMES[event.attacker]}: {event.attacking_units} units x "
                f"{event.damage_per_unit:.1f} = {event.total_damage:.1f} damage "
                f"(enemy pool {event.defender_hp_pool:.1f})",
                LogCategory.TIMELINE,
                event.timeline_time,
            )

    def _handle_units_lost(self, event) -> None:
        if isinstance(event, UnitsLost):
            self.log(
                f"{SIDE_NAMES[event.side]} lost {event.lost} unit(s), {event.remaining} remaining",
                LogCategory.BATTLE,
                event.timeline_time,
            )

    def _handle_buff_expired(self, event) -> None:
        if isinstance(event, BuffExpired):
            self.log(f"{SIDE_NAMES[event.side]} buff expired: {event.buff_name}", LogCategory.BATTLE, event.timeline_time)

    def _handle_battle_ended(self, event) -> None:
        if isinstance(event, BattleEnded):
            self.log(
                f"Battle ended: {BATTLE_STATUS_NAMES[event.status]} "
                f"(A: {event.units_a}, B: {event.units_b})",
                LogCategory.BATTLE,
                event.timeline_time,
            )

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM, battle_time: Optional[float] = None) -> None:
        """Add a message to the log.

        Args:
            text: The message text
            category: The category of the message
            battle_time: Simulated time the message refers to, if any
        """
        self.messages.append(LogMessage(text=text, category=category, battle_time=battle_time))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        """Log a system message."""
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str) -> None:
        """Log a battle message."""
        self.log(text, LogCategory.BATTLE)

    def catalog(self, text: str) -> None:
        """Log a catalog message."""
        self.log(text, LogCategory.CATALOG)

    def debug(self, text: str) -> None:
        """Log a debug message."""
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        """Log a warning message."""
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        """Log an error message."""
        self.log(text, LogCategory.ERROR)

    def is_visible(self, message: LogMessage) -> bool:
        """Whether ``message`` passes the category switches and the level filter."""
        if message.category not in self.enabled_categories:
            return False
        return self.category_levels.get(message.category, LogLevel.INFO).value >= self.log_level.value

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[Iterable[LogCategory]] = None) -> list[LogMessage]:
        """Get recent messages.

        Without ``categories`` the level filter applies; naming categories
        selects them regardless of level (disabled categories stay hidden).

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Categories to include

        Returns:
            Matching messages, oldest first
        """
        if categories:
            wanted = set(categories) & self.enabled_categories
            selected = [msg for msg in self.messages if msg.category in wanted]
        else:
            selected = [msg for msg in self.messages if self.is_visible(msg)]

        if count is not None:
            return selected[-count:] if count > 0 else []
        return selected

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Write every buffered message, unfiltered, to ``<log_dir>/battle_<time>.log``.

        Returns:
            Path of the written file, or None if it could not be written
        """
        now = datetime.now()
        filepath = os.path.join(log_dir, f"battle_{now:%Y%m%d_%H%M%S}.log")
        lines = [f"Battle log ({now:%Y-%m-%d %H:%M:%S}), {len(self.messages)} messages", ""]
        lines.extend(
            f"{msg.timestamp:%H:%M:%S.%f} [{msg.category.name}] {msg.format(include_category=False)}"
            for msg in self.messages
        )

        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Battle log saved to {filepath}")
        return filepath
