"""
Reward Event Queue.

Celebration-worthy events (XP grants, level-ups, unlocks, completed
challenges) are queued in the order they happen and drained one at a time
by the presentation layer. Nothing is overwritten: an unlock that also
causes a level-up yields two events, cause first.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from loguru import logger


class RewardEventType(str, Enum):
    """Kinds of reward events."""

    XP_GRANTED = "xp_granted"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    LEVEL_UP = "level_up"
    CHALLENGE_COMPLETED = "challenge_completed"


@dataclass(frozen=True)
class RewardEvent:
    """A single queued notification. Informational only."""

    type: RewardEventType
    payload: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime | None = None


RewardListener = Callable[[RewardEvent], None]


class RewardEventQueue:
    """FIFO of pending reward events with optional push listeners."""

    def __init__(self):
        self._events: deque[RewardEvent] = deque()
        self._listeners: list[RewardListener] = []

    def enqueue(self, event: RewardEvent) -> None:
        self._events.append(event)
        logger.debug(f"Reward event queued: {event.type.value} {event.payload}")

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # Listener failures never propagate into the caller
                logger.exception(f"Reward listener failed on {event.type.value}: {e}")

    def drain_next(self) -> RewardEvent | None:
        """Pop the oldest pending event, or None when empty."""
        if not self._events:
            return None
        return self._events.popleft()

    def drain_all(self) -> list[RewardEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    def peek(self) -> RewardEvent | None:
        return self._events[0] if self._events else None

    def subscribe(self, listener: RewardListener) -> Callable[[], None]:
        """
        Register a listener called synchronously on every enqueue.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._events)
