"""
Study Streak Tracker.

Counts consecutive calendar days with study activity and reports the
running streak to the streak achievements.
"""

from __future__ import annotations

from datetime import date, timedelta

from loguru import logger

from src.core.clock import Clock
from src.progression.achievements import AchievementTracker

STREAK_ACHIEVEMENTS = ("three_day_streak", "week_streak", "month_streak")


class StreakTracker:
    """Consecutive-day activity streak for one learner."""

    def __init__(self, achievements: AchievementTracker, clock: Clock | None = None):
        self.achievements = achievements
        self.clock = clock or achievements.clock
        self._current = 0
        self._longest = 0
        self._last_day: date | None = None

    @property
    def current(self) -> int:
        """Streak as of the last recorded day (0 if the streak has lapsed)."""
        if self._last_day is None:
            return 0
        if self.clock.now().date() - self._last_day > timedelta(days=1):
            return 0
        return self._current

    @property
    def longest(self) -> int:
        return self._longest

    @property
    def last_active_day(self) -> date | None:
        return self._last_day

    def record_activity(self, day: date | None = None) -> int:
        """
        Record study activity on ``day`` (default: today per the clock).

        Returns:
            The streak length after recording
        """
        day = day or self.clock.now().date()

        if self._last_day is not None:
            if day <= self._last_day:
                # Same day again, or an out-of-order report
                return self._current
            if day - self._last_day == timedelta(days=1):
                self._current += 1
            else:
                logger.info(f"Streak of {self._current} days broken on {day}")
                self._current = 1
        else:
            self._current = 1

        self._last_day = day
        self._longest = max(self._longest, self._current)
        logger.debug(f"Streak: {self._current} days (longest {self._longest})")

        for achievement_id in STREAK_ACHIEVEMENTS:
            self.achievements.record_progress(achievement_id, self._current)
        return self._current
