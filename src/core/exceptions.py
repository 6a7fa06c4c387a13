"""
Error taxonomy for the mastery engine.

Validation errors on caller-supplied arguments are raised. Unknown
achievement and challenge ids are NOT errors: trackers absorb them and
report a False result, so there are no classes for them here.
"""

from __future__ import annotations


class ProgressionError(Exception):
    """Base class for all engine errors."""


class InvalidXPAmount(ProgressionError, ValueError):
    """XP grant with a non-positive or non-integer amount, or an empty reason."""

    def __init__(self, amount: object, reason: object = None, message: str | None = None):
        self.amount = amount
        self.reason = reason
        super().__init__(message or f"Invalid XP grant: amount={amount!r} reason={reason!r}")


class InvalidQualityScore(ProgressionError, ValueError):
    """Review quality outside the 0-5 SM-2 scale."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Review quality must be an integer in [0, 5], got {quality!r}")


class UnknownCardId(ProgressionError, KeyError):
    """Review or lookup on a flashcard that does not exist."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(card_id)

    def __str__(self) -> str:
        return f"Unknown flashcard id: {self.card_id}"
