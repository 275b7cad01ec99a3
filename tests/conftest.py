"""
Pytest fixtures shared across Kudzidza tests.
"""

from datetime import datetime, timedelta

import pytest

from kudzidza.classroom import ContentCatalog, MemoryProgressStore, ProgressTracker
from kudzidza.schemas import Exercise, ExerciseType, Lesson


def make_lesson(unit: int, number: int, xp: int = 50, exercises: list[Exercise] | None = None) -> Lesson:
    """Build a minimal lesson at (unit, number)."""
    lesson_id = f"u{unit}-l{number}"
    if exercises is None:
        exercises = [
            Exercise(
                id=f"{lesson_id}-1",
                type=ExerciseType.MULTIPLE_CHOICE,
                question="What does 'Mhoro' mean?",
                correct_answer="Hello",
                options=["Hello", "Goodbye", "Father"],
            )
        ]
    return Lesson(
        id=lesson_id,
        title=f"Lesson {unit}.{number}",
        unit=unit,
        lesson_number=number,
        exercises=exercises,
        xp_reward=xp,
    )


class FakeClock:
    """Settable clock for deterministic streak tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0):
        self.now = self.now + timedelta(days=days, hours=hours)


class FailingStore(MemoryProgressStore):
    """Store whose writes always fail."""

    def save(self, key: str, data: bytes) -> bool:
        return False


@pytest.fixture
def lesson_factory():
    return make_lesson


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def small_catalog():
    """Unit 1 with lessons 1-2, unit 2 with lesson 1 (50 XP each)."""
    return ContentCatalog([make_lesson(1, 1), make_lesson(1, 2), make_lesson(2, 1)])


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 9, 30))


@pytest.fixture
def store():
    return MemoryProgressStore()


@pytest.fixture
def tracker(small_catalog, store, clock):
    return ProgressTracker(small_catalog, store, clock=clock)
