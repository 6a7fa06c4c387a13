"""
Achievement Catalog - static registry of unlockable milestones.

The catalog is immutable at runtime. Achievements with a ``target`` are
progress-gated: they unlock once reported progress reaches the target.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class AchievementCategory(str, Enum):
    """Grouping used by the achievements gallery."""

    LEARNING = "learning"
    MASTERY = "mastery"
    ENGAGEMENT = "engagement"
    STREAK = "streak"
    SOCIAL = "social"


@dataclass(frozen=True)
class Achievement:
    """Definition of a one-time milestone."""

    id: str
    title: str
    description: str
    icon: str
    category: AchievementCategory
    xp_reward: int
    target: int | None = None

    def __post_init__(self):
        if isinstance(self.xp_reward, bool) or not isinstance(self.xp_reward, int):
            raise ValueError(f"Achievement {self.id} XP reward must be an integer")
        if self.xp_reward < 0:
            raise ValueError(f"Achievement {self.id} has a negative XP reward")
        if self.target is not None and self.target <= 0:
            raise ValueError(f"Achievement {self.id} target must be positive")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "category": self.category.value,
            "xp_reward": self.xp_reward,
            "target": self.target,
        }


_L = AchievementCategory.LEARNING
_M = AchievementCategory.MASTERY
_E = AchievementCategory.ENGAGEMENT
_S = AchievementCategory.STREAK
_SO = AchievementCategory.SOCIAL

DEFAULT_ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Learning
    Achievement("first_lesson", "First Steps", "Complete your first lesson", "👣", _L, 50),
    Achievement("five_lessons", "Getting Started", "Complete 5 lessons", "📖", _L, 100, target=5),
    Achievement("twenty_lessons", "Bookworm", "Complete 20 lessons", "📚", _L, 300, target=20),
    Achievement("first_module", "Module Master", "Complete your first module", "🎓", _L, 150),
    Achievement("all_modules", "Course Champion", "Complete all modules", "🏅", _L, 500),
    # Quizzes
    Achievement("first_quiz", "Quiz Taker", "Complete your first quiz", "❓", _M, 50),
    Achievement("perfect_quiz", "Perfect Score", "Get 100% on a quiz", "💯", _M, 200),
    Achievement("quiz_streak", "Quiz Streak", "Pass 5 quizzes in a row", "🔥", _M, 300, target=5),
    # Engagement
    Achievement("early_bird", "Early Bird", "Study before 7 AM", "🌅", _E, 75),
    Achievement("night_owl", "Night Owl", "Study after 10 PM", "🦉", _E, 75),
    Achievement("weekend_warrior", "Weekend Warrior", "Study on both Saturday and Sunday", "⚔️", _E, 100),
    Achievement("focus_master", "Focus Master", "Complete 5 Pomodoro sessions", "🎯", _E, 150, target=5),
    # Streaks
    Achievement("three_day_streak", "Three Day Streak", "Study for 3 consecutive days", "🔥", _S, 100, target=3),
    Achievement("week_streak", "Week Warrior", "Study for 7 consecutive days", "📅", _S, 250, target=7),
    Achievement("month_streak", "Monthly Master", "Study for 30 consecutive days", "📆", _S, 1000, target=30),
    # Social
    Achievement("first_bookmark", "Bookmarker", "Create your first bookmark", "🔖", _SO, 25),
    Achievement("first_note", "Note Taker", "Create your first note", "📝", _SO, 25),
    Achievement("first_question", "Curious Mind", "Ask your first question", "💭", _SO, 50),
    Achievement("helpful_answer", "Helpful Hand", "Get your answer upvoted", "👍", _SO, 75),
    Achievement("study_group_join", "Team Player", "Join a study group", "👥", _SO, 50),
)


class AchievementCatalog:
    """Read-only lookup over achievement definitions."""

    def __init__(self, achievements: Iterable[Achievement] = DEFAULT_ACHIEVEMENTS):
        by_id: dict[str, Achievement] = {}
        for achievement in achievements:
            if achievement.id in by_id:
                raise ValueError(f"Duplicate achievement id: {achievement.id}")
            by_id[achievement.id] = achievement
        self._by_id = by_id

    def get(self, achievement_id: str) -> Achievement | None:
        return self._by_id.get(achievement_id)

    def __contains__(self, achievement_id: object) -> bool:
        return achievement_id in self._by_id

    def __iter__(self) -> Iterator[Achievement]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def by_category(self, category: AchievementCategory | str) -> list[Achievement]:
        category = AchievementCategory(category)
        return [a for a in self._by_id.values() if a.category == category]
