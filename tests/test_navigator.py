"""
Navigator tests: availability, course tree and progress summary.
"""

from kudzidza.classroom import (
    ContentCatalog,
    LessonAvailability,
    MemoryProgressStore,
    Navigator,
    ProgressTracker,
)
from kudzidza.schemas import UserProgress


class TestAvailability:
    """Test availability status derivation."""

    def test_fresh_course(self, tracker, small_catalog):
        navigator = Navigator(tracker)
        states = [navigator.get_lesson_availability(l) for l in small_catalog]
        assert states == [
            LessonAvailability.AVAILABLE,
            LessonAvailability.LOCKED,
            LessonAvailability.LOCKED,
        ]

    def test_completed_wins_over_available(self, tracker, small_catalog):
        tracker.complete_lesson("u1-l1")
        navigator = Navigator(tracker)
        assert navigator.get_lesson_availability(small_catalog.get_lesson("u1-l1")) == LessonAvailability.COMPLETED
        assert navigator.get_lesson_availability(small_catalog.get_lesson("u1-l2")) == LessonAvailability.AVAILABLE

    def test_available_lessons_include_completed(self, tracker):
        tracker.complete_lesson("u1-l1")
        navigator = Navigator(tracker)
        assert [l.id for l in navigator.get_available_lessons()] == ["u1-l1", "u1-l2"]

    def test_status_indicators(self, tracker, small_catalog):
        tracker.complete_lesson("u1-l1")
        navigator = Navigator(tracker)
        indicators = [navigator.get_status_indicator(l) for l in small_catalog]
        assert indicators == ["✓", "○", "◌"]


class TestRecommendation:
    """Test recommended next lesson."""

    def test_recommends_entry_point_first(self, tracker):
        assert Navigator(tracker).get_recommended_lesson().id == "u1-l1"

    def test_recommends_next_unfinished(self, tracker):
        tracker.complete_lesson("u1-l1")
        assert Navigator(tracker).get_recommended_lesson().id == "u1-l2"

    def test_all_done_falls_back_to_first(self, tracker):
        for lesson_id in ("u1-l1", "u1-l2", "u2-l1"):
            tracker.complete_lesson(lesson_id)
        assert Navigator(tracker).get_recommended_lesson().id == "u1-l1"


class TestTreeAndSummary:
    """Test course tree and summary figures."""

    def test_navigation_tree(self, tracker):
        tracker.complete_lesson("u1-l1")
        tree = Navigator(tracker).get_navigation_tree()

        assert [u.unit for u in tree] == [1, 2]
        assert tree[0].title == "Unit 1"
        assert (tree[0].completed_count, tree[0].total_count) == (1, 2)
        assert (tree[1].completed_count, tree[1].total_count) == (0, 1)
        recommended = [nl.lesson.id for u in tree for nl in u.lessons if nl.is_recommended]
        assert recommended == ["u1-l2"]

    def test_progress_summary(self, tracker, clock):
        tracker.complete_lesson("u1-l1")
        summary = Navigator(tracker).get_progress_summary()

        assert summary["total_lessons"] == 3
        assert summary["completed"] == 1
        assert summary["completion_percent"] == 33.3
        assert summary["total_xp"] == 50
        assert summary["current_streak"] == 1
        assert summary["longest_streak"] == 1
        assert summary["last_study_date"] == clock().date()
        assert summary["achievements"] == []
        assert summary["units"][0] == {"unit": 1, "title": "Unit 1", "completed": 1, "total": 2}

    def test_summary_ignores_lessons_missing_from_catalog(self, small_catalog, clock):
        saved = UserProgress(completed_lessons={"u1-l1", "retired-lesson"})
        store = MemoryProgressStore({"userProgress": saved.to_bytes()})
        tracker = ProgressTracker(small_catalog, store, clock=clock)

        summary = Navigator(tracker).get_progress_summary()
        assert summary["completed"] == 1
        assert tracker.completed_count == 2

    def test_empty_catalog_summary(self, store, clock):
        tracker = ProgressTracker(ContentCatalog([]), store, clock=clock)
        summary = Navigator(tracker).get_progress_summary()
        assert summary["completion_percent"] == 0
        assert summary["units"] == []
        assert Navigator(tracker).get_recommended_lesson() is None
