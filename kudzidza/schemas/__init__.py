"""
Kudzidza Schemas - Pydantic models for the Shona course.

This module exports all schema classes for:
- Content: words, phrases, exercises, lessons, courses
- Progress: learner progress and achievements
"""

# Content schemas
from .content import (
    WordCategory,
    DifficultyLevel,
    ExerciseType,
    CHOICE_EXERCISE_TYPES,
    ShonaWord,
    ShonaPhrase,
    Exercise,
    Lesson,
    Course,
    normalize_answer,
)

# Progress schemas
from .progress import (
    Achievement,
    UserProgress,
)

__all__ = [
    # Content
    'WordCategory',
    'DifficultyLevel',
    'ExerciseType',
    'CHOICE_EXERCISE_TYPES',
    'ShonaWord',
    'ShonaPhrase',
    'Exercise',
    'Lesson',
    'Course',
    'normalize_answer',
    # Progress
    'Achievement',
    'UserProgress',
]
