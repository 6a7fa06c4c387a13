"""
Progression Module.

Tracks a learner's XP, level, achievements, daily challenges and study
streak, and queues reward events for the celebration overlay.
"""

from src.progression.achievements import AchievementTracker, UnlockedAchievement, UnlockResult
from src.progression.catalog import Achievement, AchievementCatalog, AchievementCategory
from src.progression.challenges import (
    ChallengeTracker,
    ChallengeType,
    DailyChallenge,
    ProgressResult,
    default_daily_challenges,
)
from src.progression.engine import EngineRegistry, MasteryEngine
from src.progression.ledger import GrantResult, ProgressionLedger, XPEvent
from src.progression.levels import LevelDefinition, LevelTable
from src.progression.rewards import RewardEvent, RewardEventQueue, RewardEventType
from src.progression.streaks import StreakTracker

__all__ = [
    "Achievement",
    "AchievementCatalog",
    "AchievementCategory",
    "AchievementTracker",
    "ChallengeTracker",
    "ChallengeType",
    "DailyChallenge",
    "EngineRegistry",
    "GrantResult",
    "LevelDefinition",
    "LevelTable",
    "MasteryEngine",
    "ProgressResult",
    "ProgressionLedger",
    "RewardEvent",
    "RewardEventQueue",
    "RewardEventType",
    "StreakTracker",
    "UnlockResult",
    "UnlockedAchievement",
    "XPEvent",
    "default_daily_challenges",
]
