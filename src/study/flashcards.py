"""
SM-2 Flashcard Scheduler.

Implements:
- SM-2 algorithm for review intervals
- Per-card schedule state (interval, ease factor, repetitions, next review)
- Due-card selection against an injected clock

SM-2 Grade Scale:
0 - Complete blackout, wrong response
1 - Incorrect, but upon seeing answer remembered
2 - Incorrect, but answer seemed easy to recall
3 - Correct, but with significant difficulty
4 - Correct, with some hesitation
5 - Correct, with perfect recall
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from loguru import logger

from src.core.clock import Clock, SystemClock
from src.core.exceptions import InvalidQualityScore, UnknownCardId

PASSING_GRADE = 3

# =============================================================================
# SM-2 Algorithm
# =============================================================================


@dataclass
class SM2Config:
    """Configuration for SM-2 algorithm."""

    initial_easiness: float = 2.5
    minimum_easiness: float = 1.3
    first_interval: int = 1  # Days for first review
    second_interval: int = 6  # Days for second review


@dataclass(frozen=True)
class FlashcardSchedule:
    """Schedule state for a single flashcard."""

    id: str
    front: str
    back: str
    interval: int  # days
    ease_factor: float
    repetitions: int  # consecutive successful recalls
    next_review_at: datetime
    difficulty: int = 3  # 1-5, informational only
    created_at: datetime | None = None
    last_reviewed_at: datetime | None = None

    def is_due(self, now: datetime) -> bool:
        return self.next_review_at <= now


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (round() would bank)."""
    return int(math.floor(value + 0.5))


class SM2Scheduler:
    """
    Implements the SM-2 spaced repetition algorithm.

    The SuperMemo 2 algorithm calculates review intervals based on
    performance history. Each card has:
    - Easiness Factor (EF): How easy the item is (2.5 default, min 1.3)
    - Interval: Days until next review
    - Repetitions: Consecutive correct recalls
    """

    def __init__(self, config: SM2Config | None = None):
        """
        Initialize SM-2 scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
        """
        self.config = config or SM2Config()

    @staticmethod
    def validate_quality(quality: object) -> int:
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise InvalidQualityScore(quality)
        if not 0 <= quality <= 5:
            raise InvalidQualityScore(quality)
        return quality

    def next_easiness(self, easiness: float, quality: int) -> float:
        # EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        miss = 5 - quality
        return max(self.config.minimum_easiness, easiness + 0.1 - miss * (0.08 + miss * 0.02))

    def calculate_next_review(
        self,
        card: FlashcardSchedule,
        quality: int,
        now: datetime,
    ) -> FlashcardSchedule:
        """
        Calculate the next schedule for a card.

        The interval for a third or later pass grows by the ease factor the
        card had going into this review; the ease update applies afterwards.

        Args:
            card: Current schedule
            quality: User grade (0-5)
            now: Review time

        Returns:
            Updated FlashcardSchedule
        """
        quality = self.validate_quality(quality)

        if quality >= PASSING_GRADE:
            if card.repetitions == 0:
                interval = self.config.first_interval
            elif card.repetitions == 1:
                interval = self.config.second_interval
            else:
                interval = round_half_up(card.interval * card.ease_factor)
            repetitions = card.repetitions + 1
        else:
            # Lapse - reset to beginning
            interval = self.config.first_interval
            repetitions = 0

        return replace(
            card,
            interval=max(1, interval),
            repetitions=repetitions,
            ease_factor=self.next_easiness(card.ease_factor, quality),
            next_review_at=now + timedelta(days=max(1, interval)),
            last_reviewed_at=now,
        )


# =============================================================================
# Flashcard Scheduler
# =============================================================================


class FlashcardScheduler:
    """
    Owns the learner's flashcards and their SM-2 schedules.

    Reviews never grant XP here; rewarding a review is up to the caller.
    """

    def __init__(self, clock: Clock | None = None, sm2: SM2Scheduler | None = None):
        self.clock = clock or SystemClock()
        self.sm2 = sm2 or SM2Scheduler()
        self._cards: dict[str, FlashcardSchedule] = {}
        self._sequence = 0

    def _next_id(self) -> str:
        self._sequence += 1
        return f"card-{self._sequence:04d}"

    def add_card(self, front: str, back: str, difficulty: int = 3) -> FlashcardSchedule:
        """
        Create a new card, due immediately.

        Raises:
            ValueError: Empty front/back or difficulty outside 1-5
        """
        if not front or not front.strip():
            raise ValueError("Flashcard front must not be empty")
        if not back or not back.strip():
            raise ValueError("Flashcard back must not be empty")
        if isinstance(difficulty, bool) or not isinstance(difficulty, int) or not 1 <= difficulty <= 5:
            raise ValueError(f"Flashcard difficulty must be an integer in [1, 5], got {difficulty!r}")

        now = self.clock.now()
        card = FlashcardSchedule(
            id=self._next_id(),
            front=front,
            back=back,
            interval=1,
            ease_factor=self.sm2.config.initial_easiness,
            repetitions=0,
            next_review_at=now,
            difficulty=difficulty,
            created_at=now,
        )
        self._cards[card.id] = card
        logger.debug(f"Flashcard added: {card.id}")
        return card

    def review_card(self, card_id: str, quality: int) -> FlashcardSchedule:
        """
        Apply a review and reschedule the card.

        Raises:
            InvalidQualityScore: quality is not an integer in [0, 5]
            UnknownCardId: no card with this id
        """
        SM2Scheduler.validate_quality(quality)
        card = self._cards.get(card_id)
        if card is None:
            raise UnknownCardId(card_id)

        updated = self.sm2.calculate_next_review(card, quality, self.clock.now())
        self._cards[card_id] = updated

        logger.debug(
            f"Reviewed {card_id} q={quality}: interval {card.interval}->{updated.interval}, "
            f"EF {card.ease_factor:.2f}->{updated.ease_factor:.2f}, reps {updated.repetitions}"
        )
        return updated

    def due_cards(self, now: datetime | None = None) -> list[FlashcardSchedule]:
        """Cards whose next review is at or before ``now``, in creation order."""
        now = now or self.clock.now()
        return [card for card in self._cards.values() if card.next_review_at <= now]

    def get(self, card_id: str) -> FlashcardSchedule:
        card = self._cards.get(card_id)
        if card is None:
            raise UnknownCardId(card_id)
        return card

    def count(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
