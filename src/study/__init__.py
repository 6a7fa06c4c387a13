"""
Study Module.

Provides spaced-repetition scheduling for learner-created flashcards:
- SM-2 interval and ease-factor updates
- Due-card selection
"""

from src.study.flashcards import (
    FlashcardSchedule,
    FlashcardScheduler,
    SM2Config,
    SM2Scheduler,
)

__all__ = [
    "FlashcardSchedule",
    "FlashcardScheduler",
    "SM2Config",
    "SM2Scheduler",
]
