"""
ContentCatalog - Static course content grouped by unit and lesson number.

Provides read-only access to:
- Units and their lessons in course order
- Lesson lookup by id or by (unit, lesson_number)
- Content integrity checks for course authors
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Iterable, Iterator, Optional

from kudzidza.schemas import Course, Lesson
from kudzidza.utils.content_loader import DEFAULT_COURSE_PATH, load_yaml_file


logger = logging.getLogger(__name__)


class ContentCatalog:
    """
    Immutable, ordered collection of lessons.

    Lessons are kept sorted by (unit, lesson_number). Duplicate lesson ids or
    duplicate positions are authoring errors and rejected at construction.
    """

    def __init__(self, lessons: Iterable[Lesson], title: str = ""):
        """
        Initialize catalog from lesson records.

        Args:
            lessons: Lesson records in any order
            title: Optional course title for display

        Raises:
            ValueError: On duplicate lesson ids or (unit, lesson_number) pairs
        """
        self.title = title
        self._lessons: tuple[Lesson, ...] = tuple(sorted(lessons, key=lambda l: l.position))
        self._by_id: dict[str, Lesson] = {}
        self._by_position: dict[tuple[int, int], Lesson] = {}

        for lesson in self._lessons:
            if lesson.id in self._by_id:
                raise ValueError(f"Duplicate lesson id: {lesson.id}")
            if lesson.position in self._by_position:
                other = self._by_position[lesson.position]
                raise ValueError(
                    f"Duplicate lesson position unit {lesson.unit} lesson {lesson.lesson_number}: "
                    f"{other.id} and {lesson.id}"
                )
            self._by_id[lesson.id] = lesson
            self._by_position[lesson.position] = lesson

    @classmethod
    def from_course(cls, course: Course) -> "ContentCatalog":
        return cls(course.lessons, title=course.title)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ContentCatalog":
        """
        Load a catalog from a course YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the course fails validation
        """
        document = load_yaml_file(Path(path))
        course = Course(**document)
        catalog = cls.from_course(course)
        logger.info(f"Loaded course '{catalog.title}' with {len(catalog)} lessons from {path}")
        return catalog

    @classmethod
    def load_default(cls) -> "ContentCatalog":
        """Load the bundled sample course."""
        return cls.from_yaml(DEFAULT_COURSE_PATH)

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    @property
    def lessons(self) -> tuple[Lesson, ...]:
        """All lessons ordered by unit then lesson number."""
        return self._lessons

    def __len__(self) -> int:
        return len(self._lessons)

    def __iter__(self) -> Iterator[Lesson]:
        return iter(self._lessons)

    def __contains__(self, lesson: object) -> bool:
        if isinstance(lesson, Lesson):
            return lesson.id in self._by_id
        return lesson in self._by_id

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get a lesson by ID."""
        return self._by_id.get(lesson_id)

    def find_lesson(self, unit: int, lesson_number: int) -> Optional[Lesson]:
        """Get the lesson at a (unit, lesson_number) position."""
        return self._by_position.get((unit, lesson_number))

    def first_lesson(self) -> Optional[Lesson]:
        """Get the first lesson in course order."""
        return self._lessons[0] if self._lessons else None

    # -------------------------------------------------------------------------
    # Units
    # -------------------------------------------------------------------------

    def get_units(self) -> list[int]:
        """Get distinct unit numbers in ascending order."""
        return sorted({lesson.unit for lesson in self._lessons})

    def get_lessons_for_unit(self, unit: int) -> list[Lesson]:
        """Get all lessons for a unit, ordered by lesson number."""
        return [lesson for lesson in self._lessons if lesson.unit == unit]

    # -------------------------------------------------------------------------
    # Integrity Checks
    # -------------------------------------------------------------------------

    def find_content_issues(self) -> list[str]:
        """
        Check authoring invariants the tracker relies on but does not enforce.

        Returns:
            Human-readable issue descriptions (empty if content is clean)
        """
        issues = []

        for lesson in self._lessons:
            if not lesson.exercises:
                issues.append(f"Lesson {lesson.id} has no exercises")

            for exercise in lesson.exercises:
                if not exercise.is_choice_style:
                    continue
                options = exercise.options or []
                if exercise.correct_answer not in options:
                    issues.append(
                        f"Exercise {exercise.id} in {lesson.id}: options do not contain "
                        f"correct answer '{exercise.correct_answer}'"
                    )
                duplicates = [opt for opt, count in Counter(options).items() if count > 1]
                if duplicates:
                    issues.append(
                        f"Exercise {exercise.id} in {lesson.id}: duplicate options {duplicates}"
                    )

        for unit in self.get_units():
            numbers = [lesson.lesson_number for lesson in self.get_lessons_for_unit(unit)]
            expected = list(range(1, len(numbers) + 1))
            if numbers != expected:
                # Unlocking walks lesson_number + 1, so a gap strands later lessons
                issues.append(f"Unit {unit} lesson numbers {numbers} are not contiguous from 1")

        return issues
