"""
Progression Ledger - append-only XP log with derived level.

Total XP is the sum of the event log; it is never decremented and never
set directly. The current level is recomputed from the total on every
grant, and every grant produces exactly one reward event: ``level_up``
when the level number rises, ``xp_granted`` otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from src.core.clock import Clock, SystemClock
from src.core.exceptions import InvalidXPAmount
from src.progression.levels import LevelDefinition, LevelTable
from src.progression.rewards import RewardEvent, RewardEventQueue, RewardEventType


@dataclass(frozen=True)
class XPEvent:
    """One XP grant. Never mutated or removed."""

    amount: int
    reason: str
    occurred_at: datetime


@dataclass(frozen=True)
class GrantResult:
    """Outcome of a single XP grant."""

    new_total: int
    leveled_up: bool
    new_level: LevelDefinition


class ProgressionLedger:
    """Owns total XP, the XP history and the current level."""

    def __init__(
        self,
        level_table: LevelTable | None = None,
        rewards: RewardEventQueue | None = None,
        clock: Clock | None = None,
    ):
        self.level_table = level_table or LevelTable()
        self.rewards = rewards if rewards is not None else RewardEventQueue()
        self.clock = clock or SystemClock()

        self._events: list[XPEvent] = []
        self._total = 0
        self._level = self.level_table.level_for(0)

    @staticmethod
    def _validate(amount: object, reason: object) -> None:
        # bool is an int subclass; True is not a valid amount
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidXPAmount(amount, reason, "XP amount must be an integer")
        if amount <= 0:
            raise InvalidXPAmount(amount, reason, "XP amount must be positive")
        if not isinstance(reason, str) or not reason.strip():
            raise InvalidXPAmount(amount, reason, "XP grant needs a non-empty reason")

    def grant_xp(self, amount: int, reason: str) -> GrantResult:
        """
        Append an XP event and recompute the level.

        Args:
            amount: Positive integer XP amount
            reason: Non-empty description of why XP was earned

        Returns:
            GrantResult with the new total and level

        Raises:
            InvalidXPAmount: amount is not a positive integer or reason is empty
        """
        self._validate(amount, reason)

        now = self.clock.now()
        previous_level = self._level

        self._events.append(XPEvent(amount=amount, reason=reason, occurred_at=now))
        self._total += amount
        self._level = self.level_table.level_for(self._total)

        leveled_up = self._level.level > previous_level.level
        if leveled_up:
            logger.info(
                f"Level up: {previous_level.level} -> {self._level.level} "
                f"({self._level.title}) at {self._total} XP"
            )
            self.rewards.enqueue(
                RewardEvent(
                    RewardEventType.LEVEL_UP,
                    {
                        "level": self._level.level,
                        "title": self._level.title,
                        "badge": self._level.badge,
                        "previous_level": previous_level.level,
                        "amount": amount,
                        "reason": reason,
                        "total_xp": self._total,
                    },
                    now,
                )
            )
        else:
            logger.debug(f"+{amount} XP ({reason}), total {self._total}")
            self.rewards.enqueue(
                RewardEvent(
                    RewardEventType.XP_GRANTED,
                    {"amount": amount, "reason": reason, "total_xp": self._total},
                    now,
                )
            )

        return GrantResult(new_total=self._total, leveled_up=leveled_up, new_level=self._level)

    def current_level(self) -> LevelDefinition:
        return self._level

    def total_xp(self) -> int:
        return self._total

    def history(self) -> tuple[XPEvent, ...]:
        return tuple(self._events)

    def xp_to_next_level(self) -> int | None:
        return self.level_table.xp_to_next(self._total)

    def level_progress_percent(self) -> float:
        return self.level_table.progress_percent(self._total)

    def recompute_total(self) -> int:
        """Sum the event log. Always equals total_xp()."""
        return sum(event.amount for event in self._events)
