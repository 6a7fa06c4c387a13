"""
Daily Challenge Tracker.

Challenges are time-boxed, progress-gated tasks. Progress is clamped to
[0, target]; reaching the target completes the challenge exactly once,
grants its XP and queues a ``challenge_completed`` event.

Expiry is advisory: ``expires_at`` is metadata for the UI and
``active_challenges()`` hides expired ones, but ``set_progress`` does not
reject writes to an expired challenge.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum

from loguru import logger

from src.core.clock import Clock
from src.progression.ledger import ProgressionLedger
from src.progression.rewards import RewardEvent, RewardEventQueue, RewardEventType

DEFAULT_CHALLENGE_WINDOW = timedelta(hours=24)


class ChallengeType(str, Enum):
    """Activity a challenge counts."""

    VIDEO = "video"
    QUIZ = "quiz"
    PRACTICE = "practice"
    SOCIAL = "social"


@dataclass
class DailyChallenge:
    """A single challenge instance."""

    id: str
    title: str
    type: ChallengeType
    xp_reward: int
    target: int
    expires_at: datetime
    description: str = ""
    progress: int = 0
    completed: bool = False

    def __post_init__(self):
        if isinstance(self.target, bool) or not isinstance(self.target, int):
            raise ValueError(f"Challenge {self.id} target must be an integer")
        if isinstance(self.xp_reward, bool) or not isinstance(self.xp_reward, int):
            raise ValueError(f"Challenge {self.id} XP reward must be an integer")
        if self.target <= 0:
            raise ValueError(f"Challenge {self.id} target must be positive")
        if self.xp_reward <= 0:
            raise ValueError(f"Challenge {self.id} XP reward must be positive")
        self.type = ChallengeType(self.type)
        self.progress = min(max(self.progress, 0), self.target)
        if self.progress >= self.target:
            self.completed = True

    @property
    def progress_percent(self) -> float:
        return self.progress / self.target * 100

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class ProgressResult:
    completed_now: bool

    def __bool__(self) -> bool:
        return self.completed_now


def default_daily_challenges(
    clock: Clock, window: timedelta = DEFAULT_CHALLENGE_WINDOW
) -> list[DailyChallenge]:
    """The portal's standard set of daily challenges, expiring after ``window``."""
    expires_at = clock.now() + window
    return [
        DailyChallenge(
            id="daily_video",
            title="Video Watcher",
            description="Watch 2 lesson videos",
            type=ChallengeType.VIDEO,
            xp_reward=50,
            target=2,
            expires_at=expires_at,
        ),
        DailyChallenge(
            id="daily_quiz",
            title="Quiz Champion",
            description="Complete 1 practice quiz",
            type=ChallengeType.QUIZ,
            xp_reward=75,
            target=1,
            expires_at=expires_at,
        ),
        DailyChallenge(
            id="daily_practice",
            title="Practice Makes Perfect",
            description="Answer 10 practice questions",
            type=ChallengeType.PRACTICE,
            xp_reward=60,
            target=10,
            expires_at=expires_at,
        ),
    ]


class ChallengeTracker:
    """Owns the current set of challenge instances for one learner."""

    def __init__(
        self,
        ledger: ProgressionLedger,
        rewards: RewardEventQueue | None = None,
        clock: Clock | None = None,
        window: timedelta = DEFAULT_CHALLENGE_WINDOW,
    ):
        self.ledger = ledger
        self.rewards = rewards if rewards is not None else ledger.rewards
        self.clock = clock or ledger.clock
        self.window = window

        self._challenges: dict[str, DailyChallenge] = {}

    def add_challenge(self, challenge: DailyChallenge) -> DailyChallenge:
        """Register a challenge. Re-adding an id replaces the previous instance."""
        if challenge.id in self._challenges:
            logger.info(f"Replacing challenge {challenge.id}")
        self._challenges[challenge.id] = replace(challenge)
        return replace(challenge)

    def create_challenge(
        self,
        challenge_id: str,
        title: str,
        type: ChallengeType | str,
        xp_reward: int,
        target: int,
        description: str = "",
    ) -> DailyChallenge:
        """Build and register a challenge expiring one window from now."""
        challenge = DailyChallenge(
            id=challenge_id,
            title=title,
            type=ChallengeType(type),
            xp_reward=xp_reward,
            target=target,
            description=description,
            expires_at=self.clock.now() + self.window,
        )
        return self.add_challenge(challenge)

    def set_progress(self, challenge_id: str, progress: int) -> ProgressResult:
        """
        Set a challenge's progress.

        Args:
            challenge_id: Challenge to update (unknown ids are ignored)
            progress: New absolute progress; clamped to [0, target]

        Returns:
            ProgressResult(True) only on the call that completed the challenge
        """
        challenge = self._challenges.get(challenge_id)
        if challenge is None:
            logger.warning(f"Ignoring progress for unknown challenge: {challenge_id}")
            return ProgressResult(False)

        if challenge.completed:
            return ProgressResult(False)

        now = self.clock.now()
        if challenge.is_expired(now):
            logger.debug(f"Progress on expired challenge {challenge_id} accepted")

        challenge.progress = min(max(int(progress), 0), challenge.target)
        if challenge.progress < challenge.target:
            return ProgressResult(False)

        challenge.completed = True
        logger.info(f"Challenge completed: {challenge.title} (+{challenge.xp_reward} XP)")

        self.rewards.enqueue(
            RewardEvent(
                RewardEventType.CHALLENGE_COMPLETED,
                {
                    "challenge_id": challenge.id,
                    "title": challenge.title,
                    "type": challenge.type.value,
                    "xp_reward": challenge.xp_reward,
                },
                now,
            )
        )
        self.ledger.grant_xp(challenge.xp_reward, f"challenge:{challenge.title}")
        return ProgressResult(True)

    def increment(self, challenge_id: str, by: int = 1) -> ProgressResult:
        """Add to a challenge's current progress."""
        challenge = self._challenges.get(challenge_id)
        if challenge is None:
            logger.warning(f"Ignoring progress for unknown challenge: {challenge_id}")
            return ProgressResult(False)
        return self.set_progress(challenge_id, challenge.progress + by)

    def get(self, challenge_id: str) -> DailyChallenge | None:
        """Snapshot of a challenge; mutating it does not affect the tracker."""
        challenge = self._challenges.get(challenge_id)
        return replace(challenge) if challenge is not None else None

    def all_challenges(self) -> list[DailyChallenge]:
        return [replace(c) for c in self._challenges.values()]

    def active_challenges(self) -> list[DailyChallenge]:
        """Challenges that have not expired yet, completed ones included."""
        now = self.clock.now()
        return [replace(c) for c in self._challenges.values() if not c.is_expired(now)]

    def open_challenges(self) -> list[DailyChallenge]:
        """Unexpired challenges that can still be completed."""
        return [c for c in self.active_challenges() if not c.completed]

    def is_expired(self, challenge_id: str) -> bool:
        challenge = self._challenges.get(challenge_id)
        return challenge is not None and challenge.is_expired(self.clock.now())
