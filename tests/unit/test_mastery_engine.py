"""
Unit tests for MasteryEngine and EngineRegistry.

Covers the collaborator-facing surface end to end, including the
worked scenarios for XP, flashcards and challenges, and serialization of
concurrent calls for the same learner.
"""

import threading
from datetime import timedelta

import pytest

from src.core.exceptions import InvalidQualityScore, InvalidXPAmount, UnknownCardId
from src.progression.engine import EngineRegistry, MasteryEngine
from src.progression.rewards import RewardEventType


class TestXPScenario:
    def test_level_transition_emits_one_level_up_and_one_xp_event(self, engine):
        assert engine.current_level().level == 1

        engine.grant_xp(60, "a")
        engine.grant_xp(60, "b")

        assert engine.total_xp() == 120
        assert engine.current_level().level == 2
        assert engine.xp_to_next_level() == 180

        first = engine.drain_next_reward_event()
        second = engine.drain_next_reward_event()
        assert first.type == RewardEventType.XP_GRANTED
        assert second.type == RewardEventType.LEVEL_UP
        assert engine.drain_next_reward_event() is None

    def test_invalid_grant_raises(self, engine):
        with pytest.raises(InvalidXPAmount):
            engine.grant_xp(0, "nothing")
        assert engine.total_xp() == 0

    def test_max_level_has_no_next(self, engine):
        engine.grant_xp(6000, "legend")
        assert engine.current_level().level == 10
        assert engine.xp_to_next_level() is None
        assert engine.level_progress_percent() == 100.0


class TestAchievementSurface:
    def test_double_unlock_same_as_single(self, engine):
        assert engine.unlock_achievement("first_lesson") is True
        total = engine.total_xp()
        unlocked = engine.unlocked_achievements()

        assert engine.unlock_achievement("first_lesson") is False
        assert engine.total_xp() == total
        assert engine.unlocked_achievements() == unlocked

    def test_unknown_achievement(self, engine):
        assert engine.unlock_achievement("stale_catalog_id") is False

    def test_definitions(self, engine):
        engine.unlock_achievement("first_note")
        assert [a.title for a in engine.unlocked_achievement_definitions()] == ["Note Taker"]


class TestFlashcardScenario:
    def test_worked_sequence(self, engine, clock):
        card = engine.add_flashcard("Q", "A", 3)
        assert engine.flashcard_count() == 1

        card = engine.review_flashcard(card.id, 5)
        assert (card.interval, card.repetitions) == (1, 1)
        assert card.ease_factor == pytest.approx(2.6)
        assert card.next_review_at == clock.now() + timedelta(days=1)

        card = engine.review_flashcard(card.id, 5)
        assert (card.interval, card.repetitions) == (6, 2)
        assert card.next_review_at == clock.now() + timedelta(days=6)

        card = engine.review_flashcard(card.id, 5)
        assert (card.interval, card.repetitions) == (16, 3)

        card = engine.review_flashcard(card.id, 1)
        assert (card.interval, card.repetitions) == (1, 0)
        assert card.ease_factor >= 1.3

    def test_reviews_do_not_grant_xp(self, engine):
        card = engine.add_flashcard("Q", "A")
        engine.review_flashcard(card.id, 5)
        assert engine.total_xp() == 0
        assert engine.drain_next_reward_event() is None

    def test_due_flashcards_inclusive(self, engine):
        card = engine.review_flashcard(engine.add_flashcard("Q", "A").id, 4)
        assert engine.due_flashcards(card.next_review_at) == [card]
        assert engine.due_flashcards(card.next_review_at - timedelta(microseconds=1)) == []

    def test_errors(self, engine):
        card = engine.add_flashcard("Q", "A")
        with pytest.raises(InvalidQualityScore):
            engine.review_flashcard(card.id, 7)
        with pytest.raises(UnknownCardId):
            engine.review_flashcard("card-0404", 3)


class TestChallengeScenario:
    def test_clamped_completion_grants_once(self, engine):
        engine.create_challenge("c1", "Practice Run", "practice", xp_reward=60, target=5)

        assert engine.set_challenge_progress("c1", 3) is False
        assert engine.set_challenge_progress("c1", 10) is True
        assert engine.set_challenge_progress("c1", 10) is False

        (challenge,) = engine.active_challenges()
        assert challenge.progress == 5
        assert challenge.completed is True
        assert engine.total_xp() == 60

    def test_seeded_challenges_use_configured_window(self, clock, settings):
        settings.challenge_window_hours = 12
        engine = MasteryEngine("learner-2", clock=clock, settings=settings)
        engine.seed_daily_challenges()

        assert len(engine.active_challenges()) == 3
        clock.advance(hours=12)
        assert engine.active_challenges() == []

    def test_unknown_challenge(self, engine):
        assert engine.set_challenge_progress("ghost", 1) is False


class TestActivities:
    def test_lesson_and_quiz_flow(self, engine):
        engine.complete_lesson()
        engine.pass_quiz(100)

        assert engine.is_unlocked("first_lesson")
        assert engine.is_unlocked("perfect_quiz")
        assert engine.streak() == 1
        # 20 + 50 (first_lesson) + 50 + 50 (first_quiz) + 200 (perfect_quiz)
        assert engine.total_xp() == 370
        assert engine.current_level().level == 3

    def test_reward_events_are_ordered(self, engine):
        engine.complete_lesson()
        types = [e.type for e in engine.drain_reward_events()]
        assert types == [
            RewardEventType.XP_GRANTED,
            RewardEventType.ACHIEVEMENT_UNLOCKED,
            RewardEventType.XP_GRANTED,
        ]

    def test_subscribe_rewards(self, engine):
        seen = []
        unsubscribe = engine.subscribe_rewards(seen.append)
        engine.complete_pomodoro()
        unsubscribe()
        engine.complete_pomodoro()
        assert len(seen) == 1

    def test_snapshot(self, engine):
        engine.complete_lesson()
        engine.complete_pomodoro()
        engine.add_flashcard("Q", "A")
        snapshot = engine.snapshot()

        assert snapshot["learner_id"] == "learner-1"
        assert snapshot["total_xp"] == 95
        assert snapshot["level"]["level"] == 1
        assert snapshot["flashcards"] == 1
        assert snapshot["due_flashcards"] == 1
        assert snapshot["unlocked_achievements"] == ["first_lesson"]
        assert snapshot["lessons_completed"] == 1
        assert snapshot["quizzes_passed"] == 0
        assert snapshot["pomodoros_completed"] == 1


class TestConcurrency:
    def test_concurrent_unlocks_grant_once(self, engine):
        barrier = threading.Barrier(16)
        results = []

        def worker():
            barrier.wait()
            results.append(engine.unlock_achievement("all_modules"))

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        assert engine.total_xp() == 500

    def test_concurrent_grants_sum_exactly(self, engine):
        def worker():
            for _ in range(100):
                engine.grant_xp(3, "tick")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert engine.total_xp() == 2400
        assert len(engine.xp_history()) == 800


class TestRegistry:
    def test_one_engine_per_learner(self, clock, settings):
        registry = EngineRegistry(clock=clock, settings=settings)

        alice = registry.engine_for("alice")
        assert registry.engine_for("alice") is alice
        assert registry.engine_for("bob") is not alice
        assert len(registry) == 2

    def test_learners_are_isolated(self, clock, settings):
        registry = EngineRegistry(clock=clock, settings=settings)
        registry.engine_for("alice").grant_xp(500, "binge")

        bob = registry.engine_for("bob")
        assert bob.total_xp() == 0
        assert bob.drain_next_reward_event() is None

    def test_discard(self, clock, settings):
        registry = EngineRegistry(clock=clock, settings=settings)
        registry.engine_for("alice")
        assert registry.discard("alice") is True
        assert registry.discard("alice") is False
        assert list(registry.learner_ids()) == []
