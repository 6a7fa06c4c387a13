"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings  # noqa: E402
from src.core.clock import ManualClock  # noqa: E402
from src.progression.achievements import AchievementTracker  # noqa: E402
from src.progression.challenges import ChallengeTracker  # noqa: E402
from src.progression.engine import MasteryEngine  # noqa: E402
from src.progression.ledger import ProgressionLedger  # noqa: E402
from src.progression.rewards import RewardEventQueue  # noqa: E402
from src.study.flashcards import FlashcardScheduler  # noqa: E402

START = datetime(2025, 3, 3, 9, 0, tzinfo=UTC)  # a Monday


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def clock():
    """Manual clock starting at a fixed Monday morning."""
    return ManualClock(START)


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def rewards():
    return RewardEventQueue()


@pytest.fixture
def ledger(rewards, clock):
    return ProgressionLedger(rewards=rewards, clock=clock)


@pytest.fixture
def achievements(ledger):
    return AchievementTracker(ledger)


@pytest.fixture
def challenges(ledger):
    return ChallengeTracker(ledger)


@pytest.fixture
def scheduler(clock):
    return FlashcardScheduler(clock)


@pytest.fixture
def engine(clock, settings):
    """Fresh engine for a single learner."""
    return MasteryEngine("learner-1", clock=clock, settings=settings)

