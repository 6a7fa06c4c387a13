"""
Activity Recorder - reward rules for learning activities.

Collaborators report what the learner did (finished a lesson, passed a
quiz, completed a Pomodoro session); this module turns each activity into
the matching XP grant, achievement unlocks and achievement progress.
"""

from __future__ import annotations

from loguru import logger

from src.progression.achievements import AchievementTracker
from src.progression.ledger import GrantResult, ProgressionLedger
from src.progression.streaks import StreakTracker

PERFECT_SCORE = 100


class ActivityRecorder:
    """Applies activity rewards for one learner."""

    def __init__(
        self,
        ledger: ProgressionLedger,
        achievements: AchievementTracker,
        streaks: StreakTracker,
        lesson_xp: int = 20,
        quiz_xp: int = 50,
        pomodoro_xp: int = 25,
    ):
        self.ledger = ledger
        self.achievements = achievements
        self.streaks = streaks
        self.lesson_xp = lesson_xp
        self.quiz_xp = quiz_xp
        self.pomodoro_xp = pomodoro_xp

        self._lessons = 0
        self._quizzes_passed = 0
        self._consecutive_passes = 0
        self._pomodoros = 0

    @property
    def lessons_completed(self) -> int:
        return self._lessons

    @property
    def quizzes_passed(self) -> int:
        return self._quizzes_passed

    @property
    def consecutive_quiz_passes(self) -> int:
        return self._consecutive_passes

    @property
    def pomodoros_completed(self) -> int:
        return self._pomodoros

    def lesson_completed(self) -> GrantResult:
        self._lessons += 1
        result = self.ledger.grant_xp(self.lesson_xp, "Completed a lesson")

        self.achievements.unlock("first_lesson")
        self.achievements.record_progress("five_lessons", self._lessons)
        self.achievements.record_progress("twenty_lessons", self._lessons)
        self.streaks.record_activity()
        return result

    def quiz_passed(self, score_percent: float = PERFECT_SCORE) -> GrantResult:
        """
        Reward a passed quiz.

        Args:
            score_percent: Quiz score 0-100; 100 unlocks Perfect Score
        """
        if not 0 <= score_percent <= 100:
            raise ValueError(f"Quiz score must be within 0-100, got {score_percent}")

        self._quizzes_passed += 1
        self._consecutive_passes += 1
        result = self.ledger.grant_xp(self.quiz_xp, "Passed a quiz")

        self.achievements.unlock("first_quiz")
        if score_percent >= PERFECT_SCORE:
            self.achievements.unlock("perfect_quiz")
        self.achievements.record_progress("quiz_streak", self._consecutive_passes)
        self.streaks.record_activity()
        return result

    def quiz_failed(self) -> None:
        if self._consecutive_passes:
            logger.debug(f"Quiz pass run of {self._consecutive_passes} ended")
        self._consecutive_passes = 0
        self.streaks.record_activity()

    def pomodoro_completed(self) -> GrantResult:
        self._pomodoros += 1
        result = self.ledger.grant_xp(self.pomodoro_xp, "Completed Pomodoro session")
        self.achievements.record_progress("focus_master", self._pomodoros)
        self.streaks.record_activity()
        return result

    def practice_test_completed(self, score_percent: float) -> GrantResult | None:
        """Grant a quarter of the score as XP; nothing for a zero score."""
        if not 0 <= score_percent <= 100:
            raise ValueError(f"Practice test score must be within 0-100, got {score_percent}")

        self.streaks.record_activity()
        amount = int(score_percent / 4 + 0.5)
        if amount <= 0:
            return None
        return self.ledger.grant_xp(amount, "Completed practice test")
