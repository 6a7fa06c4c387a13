"""
Configuration settings for the mastery engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Spaced Repetition (SM-2)
    # ========================================
    sm2_initial_ease: float = Field(
        default=2.5,
        ge=1.3,
        description="Ease factor assigned to a freshly added flashcard",
    )
    sm2_minimum_ease: float = Field(
        default=1.3,
        ge=1.3,
        description="Floor for the ease factor after any review",
    )
    sm2_first_interval: int = Field(
        default=1,
        ge=1,
        description="Days until review after the first successful recall",
    )
    sm2_second_interval: int = Field(
        default=6,
        ge=1,
        description="Days until review after the second successful recall",
    )

    # ========================================
    # Daily Challenges
    # ========================================
    challenge_window_hours: int = Field(
        default=24,
        gt=0,
        description="Lifetime of a daily challenge from creation to expiry",
    )

    # ========================================
    # Activity Rewards
    # ========================================
    lesson_xp: int = Field(
        default=20,
        gt=0,
        description="XP granted for completing a lesson",
    )
    quiz_xp: int = Field(
        default=50,
        gt=0,
        description="XP granted for passing a quiz",
    )
    pomodoro_xp: int = Field(
        default=25,
        gt=0,
        description="XP granted for completing a Pomodoro focus session",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    def get_sm2_config(self) -> dict[str, float | int]:
        """Get SM-2 scheduling parameters as a dictionary."""
        return {
            "initial_easiness": self.sm2_initial_ease,
            "minimum_easiness": self.sm2_minimum_ease,
            "first_interval": self.sm2_first_interval,
            "second_interval": self.sm2_second_interval,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
