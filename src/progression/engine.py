"""
Mastery Engine - per-learner facade over the progression components.

One engine instance owns one learner's XP ledger, achievements, daily
challenges, streak and flashcards. Collaborators (lesson player, quiz
runner, focus timer, flashcard view) call into it; the celebration overlay
drains its reward queue.

Every public method runs under the engine's lock, so concurrent calls for
the same learner are serialized. EngineRegistry hands out one engine per
learner id; engines for different learners share nothing.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from functools import wraps

from loguru import logger

from config import Settings, get_settings
from src.core.clock import Clock, SystemClock
from src.progression.achievements import AchievementTracker, UnlockedAchievement
from src.progression.activities import ActivityRecorder
from src.progression.catalog import Achievement, AchievementCatalog
from src.progression.challenges import (
    ChallengeTracker,
    ChallengeType,
    DailyChallenge,
    default_daily_challenges,
)
from src.progression.ledger import GrantResult, ProgressionLedger, XPEvent
from src.progression.levels import LevelDefinition, LevelTable
from src.progression.rewards import RewardEvent, RewardEventQueue, RewardListener
from src.progression.streaks import StreakTracker
from src.study.flashcards import FlashcardSchedule, FlashcardScheduler, SM2Config, SM2Scheduler


def _locked(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class MasteryEngine:
    """Session-scoped progression state machine for a single learner."""

    def __init__(
        self,
        learner_id: str = "default",
        clock: Clock | None = None,
        settings: Settings | None = None,
        catalog: AchievementCatalog | None = None,
        level_table: LevelTable | None = None,
    ):
        self.learner_id = learner_id
        self.clock = clock or SystemClock()
        self.settings = settings or get_settings()
        self._lock = threading.RLock()

        self.rewards = RewardEventQueue()
        self.ledger = ProgressionLedger(level_table or LevelTable(), self.rewards, self.clock)
        self.achievements = AchievementTracker(
            self.ledger, catalog or AchievementCatalog(), self.rewards, self.clock
        )
        self.challenges = ChallengeTracker(
            self.ledger,
            self.rewards,
            self.clock,
            window=timedelta(hours=self.settings.challenge_window_hours),
        )
        self.streaks = StreakTracker(self.achievements, self.clock)
        self.activities = ActivityRecorder(
            self.ledger,
            self.achievements,
            self.streaks,
            lesson_xp=self.settings.lesson_xp,
            quiz_xp=self.settings.quiz_xp,
            pomodoro_xp=self.settings.pomodoro_xp,
        )
        self.flashcards = FlashcardScheduler(
            self.clock, SM2Scheduler(SM2Config(**self.settings.get_sm2_config()))
        )

        logger.debug(f"MasteryEngine created for learner {learner_id}")

    # =========================================================================
    # Mutations
    # =========================================================================

    @_locked
    def grant_xp(self, amount: int, reason: str) -> GrantResult:
        return self.ledger.grant_xp(amount, reason)

    @_locked
    def unlock_achievement(self, achievement_id: str) -> bool:
        return self.achievements.unlock(achievement_id).was_newly_unlocked

    @_locked
    def add_challenge(self, challenge: DailyChallenge) -> DailyChallenge:
        return self.challenges.add_challenge(challenge)

    @_locked
    def create_challenge(
        self,
        challenge_id: str,
        title: str,
        type: ChallengeType | str,
        xp_reward: int,
        target: int,
        description: str = "",
    ) -> DailyChallenge:
        return self.challenges.create_challenge(
            challenge_id, title, type, xp_reward, target, description
        )

    @_locked
    def seed_daily_challenges(self) -> list[DailyChallenge]:
        """Register the standard daily challenges for the current day."""
        window = timedelta(hours=self.settings.challenge_window_hours)
        return [
            self.challenges.add_challenge(challenge)
            for challenge in default_daily_challenges(self.clock, window)
        ]

    @_locked
    def set_challenge_progress(self, challenge_id: str, progress: int) -> bool:
        return self.challenges.set_progress(challenge_id, progress).completed_now

    @_locked
    def add_flashcard(self, front: str, back: str, difficulty: int = 3) -> FlashcardSchedule:
        return self.flashcards.add_card(front, back, difficulty)

    @_locked
    def review_flashcard(self, card_id: str, quality: int) -> FlashcardSchedule:
        return self.flashcards.review_card(card_id, quality)

    @_locked
    def record_activity(self, day: date | None = None) -> int:
        return self.streaks.record_activity(day)

    @_locked
    def complete_lesson(self) -> GrantResult:
        return self.activities.lesson_completed()

    @_locked
    def pass_quiz(self, score_percent: float = 100) -> GrantResult:
        return self.activities.quiz_passed(score_percent)

    @_locked
    def fail_quiz(self) -> None:
        self.activities.quiz_failed()

    @_locked
    def complete_pomodoro(self) -> GrantResult:
        return self.activities.pomodoro_completed()

    @_locked
    def complete_practice_test(self, score_percent: float) -> GrantResult | None:
        return self.activities.practice_test_completed(score_percent)

    # =========================================================================
    # Queries
    # =========================================================================

    @_locked
    def current_level(self) -> LevelDefinition:
        return self.ledger.current_level()

    @_locked
    def total_xp(self) -> int:
        return self.ledger.total_xp()

    @_locked
    def xp_to_next_level(self) -> int | None:
        return self.ledger.xp_to_next_level()

    @_locked
    def level_progress_percent(self) -> float:
        return self.ledger.level_progress_percent()

    @_locked
    def xp_history(self) -> tuple[XPEvent, ...]:
        return self.ledger.history()

    @_locked
    def is_unlocked(self, achievement_id: str) -> bool:
        return self.achievements.is_unlocked(achievement_id)

    @_locked
    def unlocked_achievements(self) -> list[UnlockedAchievement]:
        return self.achievements.unlocked_list()

    @_locked
    def unlocked_achievement_definitions(self) -> list[Achievement]:
        return self.achievements.unlocked_achievements()

    @_locked
    def active_challenges(self) -> list[DailyChallenge]:
        return self.challenges.active_challenges()

    @_locked
    def due_flashcards(self, now: datetime | None = None) -> list[FlashcardSchedule]:
        return self.flashcards.due_cards(now)

    @_locked
    def flashcard_count(self) -> int:
        return self.flashcards.count()

    @_locked
    def streak(self) -> int:
        return self.streaks.current

    # =========================================================================
    # Reward events
    # =========================================================================

    @_locked
    def drain_next_reward_event(self) -> RewardEvent | None:
        return self.rewards.drain_next()

    @_locked
    def drain_reward_events(self) -> list[RewardEvent]:
        return self.rewards.drain_all()

    def subscribe_rewards(self, listener: RewardListener) -> Callable[[], None]:
        with self._lock:
            return self.rewards.subscribe(listener)

    @_locked
    def snapshot(self) -> dict:
        """Display summary for dashboards."""
        level = self.ledger.current_level()
        return {
            "learner_id": self.learner_id,
            "total_xp": self.ledger.total_xp(),
            "level": level.to_dict(),
            "xp_to_next_level": self.ledger.xp_to_next_level(),
            "level_progress_percent": round(self.ledger.level_progress_percent(), 1),
            "streak": self.streaks.current,
            "longest_streak": self.streaks.longest,
            "unlocked_achievements": [u.achievement_id for u in self.achievements.unlocked_list()],
            "active_challenges": len(self.challenges.active_challenges()),
            "flashcards": self.flashcards.count(),
            "due_flashcards": len(self.flashcards.due_cards()),
            "lessons_completed": self.activities.lessons_completed,
            "quizzes_passed": self.activities.quizzes_passed,
            "pomodoros_completed": self.activities.pomodoros_completed,
            "pending_rewards": len(self.rewards),
        }


class EngineRegistry:
    """One MasteryEngine per learner id, created on first use."""

    def __init__(
        self,
        clock: Clock | None = None,
        settings: Settings | None = None,
        catalog: AchievementCatalog | None = None,
        level_table: LevelTable | None = None,
    ):
        self.clock = clock or SystemClock()
        self.settings = settings
        self.catalog = catalog
        self.level_table = level_table
        self._engines: dict[str, MasteryEngine] = {}
        self._lock = threading.Lock()

    def engine_for(self, learner_id: str) -> MasteryEngine:
        with self._lock:
            engine = self._engines.get(learner_id)
            if engine is None:
                engine = MasteryEngine(
                    learner_id,
                    clock=self.clock,
                    settings=self.settings,
                    catalog=self.catalog,
                    level_table=self.level_table,
                )
                self._engines[learner_id] = engine
            return engine

    def learner_ids(self) -> Iterable[str]:
        with self._lock:
            return list(self._engines)

    def discard(self, learner_id: str) -> bool:
        """Drop a learner's engine (end of session)."""
        with self._lock:
            return self._engines.pop(learner_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._engines)
