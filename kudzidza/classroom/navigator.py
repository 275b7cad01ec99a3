"""
Navigator - Course tree, lesson availability and progress summaries.

Provides:
- Lesson availability status for display
- Unit tree with per-unit completion counts
- Recommended next lesson
- Progress summary for the profile screen
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from kudzidza.schemas import Lesson

from .tracker import ProgressTracker


class LessonAvailability(str, Enum):
    """Lesson availability status for UI display."""
    LOCKED = "locked"           # Previous lesson not completed yet
    AVAILABLE = "available"     # Can start
    COMPLETED = "completed"     # Finished at least once


@dataclass
class NavigationLesson:
    """Lesson with navigation metadata."""
    lesson: Lesson
    availability: LessonAvailability
    is_recommended: bool


@dataclass
class NavigationUnit:
    """Unit with lessons and navigation metadata."""
    unit: int
    lessons: list[NavigationLesson]
    completed_count: int
    total_count: int

    @property
    def title(self) -> str:
        return f"Unit {self.unit}"


class Navigator:
    """
    Navigate through the course.

    Read-only view over a ProgressTracker; all state changes go through
    the tracker itself.
    """

    def __init__(self, tracker: ProgressTracker):
        self.tracker = tracker

    @property
    def total_lessons(self) -> int:
        return len(self.tracker.catalog)

    # -------------------------------------------------------------------------
    # Availability Checking
    # -------------------------------------------------------------------------

    def get_lesson_availability(self, lesson: Lesson) -> LessonAvailability:
        """Completed wins over available; anything else is locked."""
        if self.tracker.is_lesson_completed(lesson):
            return LessonAvailability.COMPLETED
        if self.tracker.is_lesson_available(lesson):
            return LessonAvailability.AVAILABLE
        return LessonAvailability.LOCKED

    def get_available_lessons(self) -> list[Lesson]:
        """Get all lessons that can be started or practiced again."""
        return [
            lesson for lesson in self.tracker.catalog
            if self.tracker.is_lesson_available(lesson)
        ]

    def get_recommended_lesson(self) -> Optional[Lesson]:
        """
        Get the recommended next lesson.

        Priority:
        1. First available lesson not yet completed
        2. First lesson (everything done: practice again)
        """
        for lesson in self.tracker.catalog:
            if self.get_lesson_availability(lesson) == LessonAvailability.AVAILABLE:
                return lesson
        return self.tracker.catalog.first_lesson()

    # -------------------------------------------------------------------------
    # Course Tree
    # -------------------------------------------------------------------------

    def get_navigation_tree(self) -> list[NavigationUnit]:
        """
        Get the full course tree with navigation metadata.

        Returns list of units with lessons, each annotated with availability
        and whether it is the recommended next lesson.
        """
        recommended = self.get_recommended_lesson()
        recommended_id = recommended.id if recommended else None

        tree = []
        for unit in self.tracker.get_units():
            lessons = self.tracker.get_lessons_for_unit(unit)
            nav_lessons = []
            completed_count = 0

            for lesson in lessons:
                availability = self.get_lesson_availability(lesson)
                if availability == LessonAvailability.COMPLETED:
                    completed_count += 1
                nav_lessons.append(NavigationLesson(
                    lesson=lesson,
                    availability=availability,
                    is_recommended=lesson.id == recommended_id,
                ))

            tree.append(NavigationUnit(
                unit=unit,
                lessons=nav_lessons,
                completed_count=completed_count,
                total_count=len(lessons),
            ))

        return tree

    def get_status_indicator(self, lesson: Lesson) -> str:
        """
        Get status indicator for sidebar display.

        Returns:
            ✓ for completed
            ○ for available
            ◌ for locked
        """
        availability = self.get_lesson_availability(lesson)
        if availability == LessonAvailability.COMPLETED:
            return "✓"
        elif availability == LessonAvailability.AVAILABLE:
            return "○"
        else:
            return "◌"

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        progress = self.tracker.progress
        tree = self.get_navigation_tree()
        total = self.total_lessons
        # Count only lessons still in the catalog
        completed = sum(nav_unit.completed_count for nav_unit in tree)

        unit_stats = []
        for nav_unit in tree:
            unit_stats.append({
                "unit": nav_unit.unit,
                "title": nav_unit.title,
                "completed": nav_unit.completed_count,
                "total": nav_unit.total_count,
            })

        return {
            "total_lessons": total,
            "completed": completed,
            "completion_percent": round(completed / total * 100, 1) if total > 0 else 0,
            "total_xp": progress.total_xp,
            "current_streak": progress.current_streak,
            "longest_streak": progress.longest_streak,
            "last_study_date": progress.last_study_date,
            "achievements": [a.title for a in progress.achievements],
            "units": unit_stats,
        }
