"""
ProgressTracker tests: completion cascade, streaks, unlocking, achievements
and persistence.
"""

import logging
from datetime import datetime

from kudzidza.classroom import (
    ACHIEVEMENT_RULES,
    ContentCatalog,
    MemoryProgressStore,
    ProgressTracker,
    SqliteProgressStore,
    evaluate_achievements,
)
from kudzidza.schemas import UserProgress


class TestQueries:
    """Test unit and availability queries."""

    def test_get_units_and_lessons(self, tracker):
        assert tracker.get_units() == [1, 2]
        assert [l.id for l in tracker.get_lessons_for_unit(1)] == ["u1-l1", "u1-l2"]
        assert tracker.get_lessons_for_unit(7) == []

    def test_fresh_progress_only_entry_point_available(self, tracker, small_catalog):
        available = [l.id for l in small_catalog if tracker.is_lesson_available(l)]
        assert available == ["u1-l1"]
        assert tracker.progress == UserProgress()

    def test_unknown_lesson_not_available(self, tracker, lesson_factory):
        assert tracker.is_lesson_available(lesson_factory(9, 9)) is False
        assert tracker.is_lesson_available("missing") is False

    def test_progress_snapshot_is_a_copy(self, tracker):
        snapshot = tracker.progress
        snapshot.total_xp = 999
        snapshot.completed_lessons.add("u1-l1")
        assert tracker.progress.total_xp == 0
        assert tracker.completed_count == 0


class TestCompleteLesson:
    """Test the completion cascade."""

    def test_scenario_two_days(self, tracker, small_catalog, clock):
        first = tracker.complete_lesson(small_catalog.find_lesson(1, 1))
        assert first.total_xp == 50
        assert first.current_streak == 1
        assert first.unlocked_lesson_id == "u1-l2"
        assert tracker.is_lesson_available("u1-l2")
        assert not tracker.is_lesson_available("u2-l1")

        clock.advance(days=1)
        second = tracker.complete_lesson(small_catalog.find_lesson(1, 2))
        assert second.total_xp == 100
        assert second.current_streak == 2
        assert second.unlocked_lesson_id == "u2-l1"
        assert tracker.is_lesson_available("u2-l1")

    def test_first_completion_sets_streaks(self, tracker, clock):
        tracker.complete_lesson("u1-l1")
        progress = tracker.progress
        assert progress.current_streak == 1
        assert progress.longest_streak == 1
        assert progress.last_study_date == clock().date()

    def test_xp_counts_every_completion(self, tracker):
        tracker.complete_lesson("u1-l1")
        tracker.complete_lesson("u1-l1")
        progress = tracker.progress
        assert progress.total_xp == 100
        assert progress.completed_lessons == {"u1-l1"}
        assert tracker.completed_count == 1

    def test_completion_flags_derived(self, tracker):
        assert not tracker.is_lesson_completed("u1-l1")
        tracker.complete_lesson("u1-l1")
        assert tracker.is_lesson_completed("u1-l1")
        assert tracker.is_lesson_unlocked("u1-l2")

    def test_end_of_course_unlocks_nothing(self, tracker):
        result = tracker.complete_lesson("u2-l1")
        assert result.unlocked_lesson_id is None
        assert tracker.progress.unlocked_lessons == set()

    def test_unit_gap_unlocks_nothing(self, lesson_factory, store, clock):
        catalog = ContentCatalog([lesson_factory(1, 1), lesson_factory(3, 1)])
        tracker = ProgressTracker(catalog, store, clock=clock)
        assert tracker.complete_lesson("u1-l1").unlocked_lesson_id is None

    def test_unknown_lesson_ignored(self, tracker, store, caplog):
        with caplog.at_level(logging.WARNING):
            assert tracker.complete_lesson("missing") is None
        assert "unknown lesson" in caplog.text
        assert tracker.progress == UserProgress()
        assert store.load(tracker.key) is None
        assert tracker.version == 0


class TestStreaks:
    """Test daily streak arithmetic."""

    def test_same_day_keeps_streak(self, tracker, clock):
        tracker.complete_lesson("u1-l1")
        clock.advance(hours=5)
        tracker.complete_lesson("u1-l2")
        assert tracker.progress.current_streak == 1

    def test_consecutive_days_increment(self, tracker, clock):
        for expected in (1, 2, 3, 4):
            tracker.complete_lesson("u1-l1")
            assert tracker.progress.current_streak == expected
            clock.advance(days=1)
        assert tracker.progress.longest_streak == 4

    def test_gap_resets_streak(self, tracker, clock):
        tracker.complete_lesson("u1-l1")
        clock.advance(days=1)
        tracker.complete_lesson("u1-l1")
        clock.advance(days=2)
        tracker.complete_lesson("u1-l1")
        progress = tracker.progress
        assert progress.current_streak == 1
        assert progress.longest_streak == 2

    def test_day_boundary_not_24_hours(self, tracker, clock):
        clock.now = clock.now.replace(hour=23, minute=50)
        tracker.complete_lesson("u1-l1")
        clock.advance(hours=1)
        tracker.complete_lesson("u1-l1")
        assert tracker.progress.current_streak == 2

    def test_clock_moving_backwards_keeps_streak(self, tracker, clock):
        tracker.complete_lesson("u1-l1")
        clock.advance(days=1)
        tracker.complete_lesson("u1-l1")
        clock.advance(days=-1)
        tracker.complete_lesson("u1-l1")
        assert tracker.progress.current_streak == 2

    def test_longest_never_below_current(self, tracker, clock):
        for step in (1, 1, 3, 1, 0, 1):
            clock.advance(days=step)
            tracker.complete_lesson("u1-l1")
            progress = tracker.progress
            assert progress.longest_streak >= progress.current_streak


class TestAchievements:
    """Test achievement evaluation."""

    def test_week_warrior_after_seven_days(self, tracker, clock):
        for _ in range(6):
            tracker.complete_lesson("u1-l1")
            clock.advance(days=1)
        assert not tracker.progress.has_achievement("Week Warrior")

        result = tracker.complete_lesson("u1-l1")
        assert [a.title for a in result.new_achievements] == ["Week Warrior"]
        earned = tracker.progress.achievements[0]
        assert earned.is_unlocked
        assert earned.streak_required == 7
        assert earned.unlocked_date == clock()

    def test_xp_master_awarded_once(self, lesson_factory, store, clock):
        catalog = ContentCatalog([lesson_factory(1, 1, xp=400)])
        tracker = ProgressTracker(catalog, store, clock=clock)
        for _ in range(6):
            tracker.complete_lesson("u1-l1")
        progress = tracker.progress
        assert progress.total_xp == 2400
        assert [a.title for a in progress.achievements] == ["XP Master"]

    def test_evaluate_is_pure(self):
        progress = UserProgress(total_xp=1000, current_streak=7, longest_streak=7)
        earned = evaluate_achievements(progress, datetime(2024, 1, 1), ACHIEVEMENT_RULES)
        assert {a.title for a in earned} == {"Week Warrior", "XP Master"}
        assert progress.achievements == []


class TestPersistence:
    """Test load/save behaviour against stores."""

    def test_saved_after_each_completion(self, tracker, store):
        tracker.complete_lesson("u1-l1")
        saved = UserProgress.from_bytes(store.load(tracker.key))
        assert saved == tracker.progress

    def test_reload_restores_state(self, small_catalog, tmp_path, clock):
        db_path = tmp_path / "progress.db"
        first = ProgressTracker(small_catalog, SqliteProgressStore(db_path), clock=clock)
        first.complete_lesson("u1-l1")
        first.complete_lesson("u1-l2")

        second = ProgressTracker(small_catalog, SqliteProgressStore(db_path), clock=clock)
        assert second.progress == first.progress
        assert second.is_lesson_available("u2-l1")
        assert second.is_lesson_completed("u1-l2")

    def test_corrupt_blob_falls_back_to_default(self, small_catalog, clock, caplog):
        store = MemoryProgressStore({"userProgress": b"{not json"})
        with caplog.at_level(logging.WARNING):
            tracker = ProgressTracker(small_catalog, store, clock=clock)
        assert tracker.progress == UserProgress()
        assert "unreadable" in caplog.text

        tracker.complete_lesson("u1-l1")
        assert UserProgress.from_bytes(store.load("userProgress")).total_xp == 50

    def test_custom_key(self, small_catalog, store, clock):
        tracker = ProgressTracker(small_catalog, store, key="learner-2", clock=clock)
        tracker.complete_lesson("u1-l1")
        assert store.keys() == ["learner-2"]

    def test_save_failure_keeps_memory_state(self, small_catalog, failing_store, clock):
        tracker = ProgressTracker(small_catalog, failing_store, clock=clock)
        result = tracker.complete_lesson("u1-l1")
        assert result.saved is False
        assert tracker.progress.total_xp == 50
        assert tracker.is_lesson_available("u1-l2")


class TestSubscriptions:
    """Test change notification."""

    def test_listener_called_per_completion(self, tracker):
        seen = []
        tracker.subscribe(lambda progress: seen.append(progress.total_xp))
        tracker.complete_lesson("u1-l1")
        tracker.complete_lesson("u1-l2")
        assert seen == [50, 100]
        assert tracker.version == 2

    def test_unsubscribe(self, tracker):
        seen = []
        unsubscribe = tracker.subscribe(lambda progress: seen.append(progress))
        unsubscribe()
        unsubscribe()
        tracker.complete_lesson("u1-l1")
        assert seen == []

    def test_failing_listener_does_not_block_others(self, tracker, caplog):
        seen = []

        def broken(progress):
            raise RuntimeError("render failed")

        tracker.subscribe(broken)
        tracker.subscribe(lambda progress: seen.append(progress.total_xp))
        with caplog.at_level(logging.ERROR):
            result = tracker.complete_lesson("u1-l1")
        assert result is not None
        assert seen == [50]
        assert "listener" in caplog.text
