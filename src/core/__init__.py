"""
Core Module - Shared building blocks.

Components:
- clock: Injected time source (SystemClock, ManualClock)
- exceptions: Error taxonomy (InvalidXPAmount, InvalidQualityScore, UnknownCardId)
- logging_config: loguru sink setup

Design Principle:
Progression and study modules read time only through a Clock and raise
only the errors defined here.
"""

from src.core.clock import Clock, ManualClock, SystemClock
from src.core.exceptions import (
    InvalidQualityScore,
    InvalidXPAmount,
    ProgressionError,
    UnknownCardId,
)

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "ProgressionError",
    "InvalidXPAmount",
    "InvalidQualityScore",
    "UnknownCardId",
]
