"""
Achievement Tracker - idempotent unlocks.

Unlocking records the achievement, queues an ``achievement_unlocked``
event and then grants the achievement's XP through the ledger, so a
consumer draining the reward queue sees the unlock before the XP (or
level-up) it caused. Unknown ids are catalog drift, not programmer
error: they are logged and reported as ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from src.core.clock import Clock
from src.progression.catalog import Achievement, AchievementCatalog
from src.progression.ledger import ProgressionLedger
from src.progression.rewards import RewardEvent, RewardEventQueue, RewardEventType


@dataclass(frozen=True)
class UnlockedAchievement:
    """Membership record; never removed."""

    achievement_id: str
    unlocked_at: datetime


@dataclass(frozen=True)
class UnlockResult:
    was_newly_unlocked: bool

    def __bool__(self) -> bool:
        return self.was_newly_unlocked


class AchievementTracker:
    """Owns the set of unlocked achievement ids for one learner."""

    def __init__(
        self,
        ledger: ProgressionLedger,
        catalog: AchievementCatalog | None = None,
        rewards: RewardEventQueue | None = None,
        clock: Clock | None = None,
    ):
        self.ledger = ledger
        self.catalog = catalog or AchievementCatalog()
        self.rewards = rewards if rewards is not None else ledger.rewards
        self.clock = clock or ledger.clock

        self._unlocked: dict[str, UnlockedAchievement] = {}
        self._progress: dict[str, int] = {}

    def unlock(self, achievement_id: str) -> UnlockResult:
        """
        Unlock an achievement once.

        Returns:
            UnlockResult(True) only on the call that actually unlocked it
        """
        achievement = self.catalog.get(achievement_id)
        if achievement is None:
            logger.warning(f"Ignoring unlock of unknown achievement: {achievement_id}")
            return UnlockResult(False)

        if achievement_id in self._unlocked:
            return UnlockResult(False)

        now = self.clock.now()
        self._unlocked[achievement_id] = UnlockedAchievement(achievement_id, now)
        logger.info(f"Achievement unlocked: {achievement.title} (+{achievement.xp_reward} XP)")

        self.rewards.enqueue(
            RewardEvent(
                RewardEventType.ACHIEVEMENT_UNLOCKED,
                {
                    "achievement_id": achievement.id,
                    "title": achievement.title,
                    "icon": achievement.icon,
                    "category": achievement.category.value,
                    "xp_reward": achievement.xp_reward,
                },
                now,
            )
        )
        self._grant_reward(achievement, now)
        return UnlockResult(True)

    def _grant_reward(self, achievement: Achievement, now: datetime) -> None:
        reason = f"achievement:{achievement.id}"
        if achievement.xp_reward > 0:
            self.ledger.grant_xp(achievement.xp_reward, reason)
            return

        # The ledger only accepts positive amounts; a zero reward still
        # gets its XP celebration, without a ledger entry.
        self.rewards.enqueue(
            RewardEvent(
                RewardEventType.XP_GRANTED,
                {"amount": 0, "reason": reason, "total_xp": self.ledger.total_xp()},
                now,
            )
        )

    def record_progress(self, achievement_id: str, progress: int) -> UnlockResult:
        """
        Report progress toward an achievement.

        Progress-gated achievements keep the highest value reported and
        unlock once it reaches the target. Achievements without a target
        unlock on any positive progress.
        """
        achievement = self.catalog.get(achievement_id)
        if achievement is None:
            logger.warning(f"Ignoring progress for unknown achievement: {achievement_id}")
            return UnlockResult(False)

        progress = max(0, int(progress))
        best = max(self._progress.get(achievement_id, 0), progress)
        if achievement.target is not None:
            best = min(best, achievement.target)
        self._progress[achievement_id] = best

        threshold = achievement.target if achievement.target is not None else 1
        if best >= threshold:
            return self.unlock(achievement_id)
        return UnlockResult(False)

    def progress_for(self, achievement_id: str) -> int:
        if achievement_id in self._unlocked:
            achievement = self.catalog.get(achievement_id)
            if achievement is not None and achievement.target is not None:
                return achievement.target
        return self._progress.get(achievement_id, 0)

    def is_unlocked(self, achievement_id: str) -> bool:
        return achievement_id in self._unlocked

    def unlocked_list(self) -> list[UnlockedAchievement]:
        """Unlocked achievements in unlock order."""
        return list(self._unlocked.values())

    def unlocked_achievements(self) -> list[Achievement]:
        """Catalog definitions of the unlocked achievements, in unlock order."""
        result = []
        for record in self._unlocked.values():
            achievement = self.catalog.get(record.achievement_id)
            if achievement is not None:
                result.append(achievement)
        return result

    def locked_achievements(self) -> list[Achievement]:
        return [a for a in self.catalog if a.id not in self._unlocked]
