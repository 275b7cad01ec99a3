"""
Kudzidza Classroom - Runtime components for progressing through the course.

This module provides:
- ContentCatalog: Static lessons grouped by unit
- ProgressStore implementations: Persist the progress blob
- ProgressTracker: Completion, streaks, unlocking and achievements
- Navigator: Course tree and progress summaries
- ExerciseSession: Answer checking for one lesson
"""

from .catalog import ContentCatalog

from .store import (
    ProgressStore,
    MemoryProgressStore,
    SqliteProgressStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
    DEFAULT_PROGRESS_KEY,
)

from .achievements import (
    AchievementRule,
    ACHIEVEMENT_RULES,
    WEEK_WARRIOR,
    XP_MASTER,
    evaluate_achievements,
)

from .tracker import (
    ProgressTracker,
    CompletionResult,
)

from .navigator import (
    Navigator,
    LessonAvailability,
    NavigationLesson,
    NavigationUnit,
)

from .session import (
    ExerciseSession,
    AnswerResult,
)

__all__ = [
    # Catalog
    "ContentCatalog",
    # Store
    "ProgressStore",
    "MemoryProgressStore",
    "SqliteProgressStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    "DEFAULT_PROGRESS_KEY",
    # Achievements
    "AchievementRule",
    "ACHIEVEMENT_RULES",
    "WEEK_WARRIOR",
    "XP_MASTER",
    "evaluate_achievements",
    # Tracker
    "ProgressTracker",
    "CompletionResult",
    # Navigator
    "Navigator",
    "LessonAvailability",
    "NavigationLesson",
    "NavigationUnit",
    # Session
    "ExerciseSession",
    "AnswerResult",
]
