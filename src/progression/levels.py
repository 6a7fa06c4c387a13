"""
Level Table - static XP thresholds.

Levels are derived purely from total XP. The table is ordered, contiguous
(each level's max_xp is the next level's min_xp) and the last level is
unbounded (max_xp is None).
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class LevelDefinition:
    """One tier of the level table."""

    level: int
    title: str
    badge: str
    min_xp: int
    max_xp: int | None  # None = no upper bound

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "title": self.title,
            "badge": self.badge,
            "min_xp": self.min_xp,
            "max_xp": self.max_xp,
        }


DEFAULT_LEVELS: tuple[LevelDefinition, ...] = (
    LevelDefinition(1, "Novice Learner", "🌱", 0, 100),
    LevelDefinition(2, "Curious Student", "📚", 100, 300),
    LevelDefinition(3, "Active Learner", "⭐", 300, 600),
    LevelDefinition(4, "Knowledge Seeker", "🎯", 600, 1000),
    LevelDefinition(5, "Dedicated Scholar", "🏆", 1000, 1500),
    LevelDefinition(6, "Expert Learner", "💎", 1500, 2200),
    LevelDefinition(7, "Master Student", "🔥", 2200, 3000),
    LevelDefinition(8, "Knowledge Master", "👑", 3000, 4000),
    LevelDefinition(9, "Grand Scholar", "🌟", 4000, 5500),
    LevelDefinition(10, "Legendary Learner", "🦄", 5500, None),
)


class LevelTable:
    """
    Pure lookup from total XP to level metadata.

    Negative XP never reaches this class; the ledger rejects it upstream.
    """

    def __init__(self, levels: Sequence[LevelDefinition] = DEFAULT_LEVELS):
        self._levels = tuple(levels)
        self._validate(self._levels)
        self._thresholds = [lvl.min_xp for lvl in self._levels]

    @staticmethod
    def _validate(levels: tuple[LevelDefinition, ...]) -> None:
        if not levels:
            raise ValueError("Level table must contain at least one level")
        if levels[0].min_xp != 0:
            raise ValueError("First level must start at 0 XP")
        if levels[-1].max_xp is not None:
            raise ValueError("Last level must have an unbounded max_xp")

        for current, following in zip(levels, levels[1:]):
            if following.level != current.level + 1:
                raise ValueError(f"Levels out of order at level {current.level}")
            if current.max_xp != following.min_xp:
                raise ValueError(
                    f"Level {current.level} max_xp ({current.max_xp}) must equal "
                    f"level {following.level} min_xp ({following.min_xp})"
                )
            if following.min_xp <= current.min_xp:
                raise ValueError(f"Level {following.level} threshold must increase")

    @property
    def levels(self) -> tuple[LevelDefinition, ...]:
        return self._levels

    @property
    def max_level(self) -> LevelDefinition:
        return self._levels[-1]

    def __len__(self) -> int:
        return len(self._levels)

    def level_for(self, total_xp: int) -> LevelDefinition:
        """Highest level whose min_xp <= total_xp."""
        index = bisect_right(self._thresholds, total_xp) - 1
        return self._levels[max(index, 0)]

    def xp_to_next(self, total_xp: int) -> int | None:
        """XP still needed for the next level, or None at the max level."""
        level = self.level_for(total_xp)
        if level.max_xp is None:
            return None
        return level.max_xp - total_xp

    def progress_percent(self, total_xp: int) -> float:
        """How far through the current level the learner is (0-100)."""
        level = self.level_for(total_xp)
        if level.max_xp is None:
            return 100.0
        span = level.max_xp - level.min_xp
        percent = (total_xp - level.min_xp) / span * 100
        return min(max(percent, 0.0), 100.0)
