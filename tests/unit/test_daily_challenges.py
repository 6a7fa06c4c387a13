"""
Unit tests for ChallengeTracker.

Tests:
- Progress clamping and regression
- Completion fires exactly once
- Unknown ids are absorbed
- Expiry is advisory
"""

from datetime import timedelta

import pytest

from src.progression.challenges import (
    ChallengeType,
    DailyChallenge,
    default_daily_challenges,
)
from src.progression.rewards import RewardEventType


@pytest.fixture
def c1(challenges):
    return challenges.create_challenge("c1", "Five Cards", ChallengeType.PRACTICE, xp_reward=40, target=5)


class TestSetProgress:
    def test_progress_below_target(self, challenges, c1, ledger):
        result = challenges.set_progress("c1", 3)

        assert result.completed_now is False
        assert challenges.get("c1").progress == 3
        assert challenges.get("c1").completed is False
        assert ledger.total_xp() == 0

    def test_overshoot_is_clamped_and_completes_once(self, challenges, c1, ledger):
        challenges.set_progress("c1", 3)
        result = challenges.set_progress("c1", 10)

        challenge = challenges.get("c1")
        assert result.completed_now is True
        assert challenge.progress == 5
        assert challenge.completed is True
        assert ledger.total_xp() == 40
        assert ledger.history()[-1].reason == "challenge:Five Cards"

    def test_repeated_sets_after_completion_do_not_reward(self, challenges, c1, ledger):
        challenges.set_progress("c1", 5)
        flips = [challenges.set_progress("c1", p).completed_now for p in (5, 0, 7, 2)]

        assert flips == [False, False, False, False]
        assert ledger.total_xp() == 40
        assert challenges.get("c1").completed is True
        assert challenges.get("c1").progress == 5

    def test_regression_accepted_before_completion(self, challenges, c1):
        challenges.set_progress("c1", 4)
        challenges.set_progress("c1", 2)
        assert challenges.get("c1").progress == 2

    def test_negative_progress_clamped_to_zero(self, challenges, c1):
        challenges.set_progress("c1", -3)
        assert challenges.get("c1").progress == 0

    def test_unknown_challenge_is_noop(self, challenges, ledger, rewards):
        assert challenges.set_progress("missing", 100).completed_now is False
        assert ledger.total_xp() == 0
        assert len(rewards) == 0

    def test_completion_event_precedes_xp(self, challenges, c1, rewards):
        challenges.set_progress("c1", 5)
        types = [e.type for e in rewards.drain_all()]
        assert types == [RewardEventType.CHALLENGE_COMPLETED, RewardEventType.XP_GRANTED]

    def test_increment(self, challenges, c1):
        challenges.increment("c1")
        challenges.increment("c1", by=2)
        assert challenges.get("c1").progress == 3


class TestExpiry:
    def test_expires_after_window(self, challenges, c1, clock):
        assert c1.expires_at == clock.now() + timedelta(hours=24)
        assert [c.id for c in challenges.active_challenges()] == ["c1"]

        clock.advance(hours=24)
        assert challenges.is_expired("c1")
        assert challenges.active_challenges() == []
        assert len(challenges.all_challenges()) == 1

    def test_expired_challenge_still_completes(self, challenges, c1, clock, ledger):
        clock.advance(days=3)
        assert challenges.set_progress("c1", 5).completed_now is True
        assert ledger.total_xp() == 40

    def test_completed_challenges_stay_active_until_expiry(self, challenges, c1):
        challenges.set_progress("c1", 5)
        assert [c.id for c in challenges.active_challenges()] == ["c1"]
        assert challenges.open_challenges() == []


class TestChallengeModel:
    def test_invalid_target_rejected(self, clock):
        with pytest.raises(ValueError):
            DailyChallenge("x", "X", ChallengeType.QUIZ, 10, 0, clock.now())

    @pytest.mark.parametrize("xp_reward", [12.5, True])
    def test_non_integer_reward_rejected(self, clock, xp_reward):
        with pytest.raises(ValueError):
            DailyChallenge("x", "X", ChallengeType.QUIZ, xp_reward, 1, clock.now())

    def test_non_integer_target_rejected(self, clock):
        with pytest.raises(ValueError):
            DailyChallenge("x", "X", ChallengeType.QUIZ, 10, 2.5, clock.now())

    def test_bad_reward_never_reaches_tracker(self, challenges, ledger, rewards):
        with pytest.raises(ValueError):
            challenges.create_challenge("c", "Half", ChallengeType.QUIZ, xp_reward=12.5, target=1)
        assert challenges.set_progress("c", 1).completed_now is False
        assert ledger.total_xp() == 0
        assert len(rewards) == 0

    def test_snapshot_is_detached(self, challenges, c1):
        snapshot = challenges.get("c1")
        snapshot.progress = 4
        assert challenges.get("c1").progress == 0

    def test_default_daily_challenges(self, clock):
        defaults = default_daily_challenges(clock)
        assert [c.id for c in defaults] == ["daily_video", "daily_quiz", "daily_practice"]
        assert {c.expires_at for c in defaults} == {clock.now() + timedelta(hours=24)}
        assert [c.target for c in defaults] == [2, 1, 10]
