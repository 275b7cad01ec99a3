"""
Course content schemas for Kudzidza.

Defines Pydantic models for static lesson content including:
- Vocabulary words and phrases
- Exercises and their answer checking
- Lessons grouped into units
"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class WordCategory(str, Enum):
    GREETINGS = "Greetings"
    FAMILY = "Family"
    FOOD = "Food"
    COLORS = "Colors"
    NUMBERS = "Numbers"
    ANIMALS = "Animals"
    CLOTHING = "Clothing"
    TRANSPORTATION = "Transportation"
    TIME = "Time"
    WEATHER = "Weather"


class DifficultyLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ExerciseType(str, Enum):
    TRANSLATION = "Translation"
    MULTIPLE_CHOICE = "Multiple Choice"
    FILL_IN_BLANK = "Fill in the Blank"
    MATCH_PAIRS = "Match Pairs"
    LISTEN_AND_REPEAT = "Listen and Repeat"


# Exercise types answered by picking one of the listed options
CHOICE_EXERCISE_TYPES = frozenset({
    ExerciseType.TRANSLATION,
    ExerciseType.MULTIPLE_CHOICE,
    ExerciseType.MATCH_PAIRS,
})


# -----------------------------------------------------------------------------
# Vocabulary
# -----------------------------------------------------------------------------

class ShonaWord(BaseModel):
    shona: str
    english: str
    pronunciation: str       # syllable guide, stressed syllable in caps
    category: WordCategory
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER


class ShonaPhrase(BaseModel):
    shona: str
    english: str
    pronunciation: str
    context: str             # when the phrase is used
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER


# -----------------------------------------------------------------------------
# Exercises
# -----------------------------------------------------------------------------

def normalize_answer(text: str) -> str:
    """Normalize an answer for comparison (trimmed, case-insensitive)."""
    return text.strip().casefold()


class Exercise(BaseModel):
    """
    One question in a lesson's exercise set.

    For choice-style types the options are expected to contain the correct
    answer. The catalog reports violations but does not reject them.
    """
    id: str
    type: ExerciseType
    question: str
    correct_answer: str
    options: Optional[list[str]] = None
    shona_text: Optional[str] = None
    english_text: Optional[str] = None
    audio_file_name: Optional[str] = None

    @property
    def is_choice_style(self) -> bool:
        return self.type in CHOICE_EXERCISE_TYPES and bool(self.options)

    def checks_answer(self, answer: str) -> bool:
        """Return True if the answer matches the correct answer."""
        return normalize_answer(answer) == normalize_answer(self.correct_answer)


# -----------------------------------------------------------------------------
# Lessons
# -----------------------------------------------------------------------------

class Lesson(BaseModel):
    """
    A lesson within a unit.

    Lessons are immutable content. Completion and unlock state live in
    UserProgress and are derived by the tracker on every read.
    """
    id: str
    title: str
    description: str = ""
    unit: int = Field(..., ge=1)
    lesson_number: int = Field(..., ge=1)
    words: list[ShonaWord] = []
    phrases: list[ShonaPhrase] = []
    exercises: list[Exercise] = []
    xp_reward: int = Field(..., gt=0)

    @property
    def position(self) -> tuple[int, int]:
        """(unit, lesson_number) ordering key."""
        return (self.unit, self.lesson_number)

    @property
    def is_entry_point(self) -> bool:
        """The first lesson of the course is always available."""
        return self.unit == 1 and self.lesson_number == 1


class Course(BaseModel):
    """Top-level course document as stored in course YAML files."""
    title: str
    language: str = "Shona"
    lessons: list[Lesson]
