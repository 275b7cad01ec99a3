"""
ProgressTracker - Lesson progression, streaks, unlocking and achievements.

Owns the mutable UserProgress record for a single learner:
- Loads it from a ProgressStore at startup (falling back to a fresh record)
- Answers availability queries against the ContentCatalog
- Applies lesson completion and persists after every change
- Notifies subscribers so the presentation layer can re-render

All operations run synchronously on the caller's thread.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional, Union

from kudzidza.schemas import Achievement, Lesson, UserProgress

from .achievements import ACHIEVEMENT_RULES, AchievementRule, evaluate_achievements
from .catalog import ContentCatalog
from .store import DEFAULT_PROGRESS_KEY, ProgressStore


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
ProgressListener = Callable[[UserProgress], None]
LessonRef = Union[Lesson, str]


@dataclass
class CompletionResult:
    """Outcome of one complete_lesson call, for the lesson-complete screen."""
    lesson_id: str
    xp_earned: int
    total_xp: int
    current_streak: int
    longest_streak: int
    unlocked_lesson_id: Optional[str]
    new_achievements: list[Achievement] = field(default_factory=list)
    saved: bool = True


class ProgressTracker:
    """
    Track learner progress through a course.

    Combines ContentCatalog (content) with a ProgressStore (persistence).
    Lesson completed/unlocked state is derived from the progress sets on every
    query rather than cached on the lesson records.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        store: ProgressStore,
        *,
        key: str = DEFAULT_PROGRESS_KEY,
        clock: Clock = datetime.now,
        rules: tuple[AchievementRule, ...] = ACHIEVEMENT_RULES,
    ):
        """
        Initialize tracker and load saved progress.

        Args:
            catalog: Course content
            store: Persistence for the serialized progress blob
            key: Store key holding the blob
            clock: Returns the current local time (injectable for tests)
            rules: Achievement rules checked after each completion
        """
        self.catalog = catalog
        self.store = store
        self.key = key
        self.clock = clock
        self.rules = rules
        self._listeners: list[ProgressListener] = []
        self._version = 0
        self._progress = self._load_progress()

    def _load_progress(self) -> UserProgress:
        """Load progress from the store, or start fresh."""
        data = self.store.load(self.key)
        if data is None:
            logger.debug(f"No saved progress under '{self.key}', starting fresh")
            return UserProgress()
        try:
            return UserProgress.from_bytes(data)
        except ValueError as e:
            logger.warning(f"Saved progress under '{self.key}' is unreadable, starting fresh: {e}")
            return UserProgress()

    # -------------------------------------------------------------------------
    # State Access
    # -------------------------------------------------------------------------

    @property
    def progress(self) -> UserProgress:
        """Snapshot of current progress (a copy; mutating it has no effect)."""
        return self._progress.model_copy(deep=True)

    @property
    def version(self) -> int:
        """Incremented after every state change."""
        return self._version

    @property
    def completed_count(self) -> int:
        return len(self._progress.completed_lessons)

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """
        Register a callback invoked with a progress snapshot after each change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        self._version += 1
        for listener in list(self._listeners):
            try:
                listener(self.progress)
            except Exception:
                logger.exception(f"Progress listener {listener!r} failed")

    # -------------------------------------------------------------------------
    # Catalog Queries
    # -------------------------------------------------------------------------

    def get_units(self) -> list[int]:
        """Distinct unit numbers, ascending."""
        return self.catalog.get_units()

    def get_lessons_for_unit(self, unit: int) -> list[Lesson]:
        """Lessons in a unit, ascending by lesson number."""
        return self.catalog.get_lessons_for_unit(unit)

    def _resolve(self, lesson: LessonRef) -> Optional[Lesson]:
        lesson_id = lesson.id if isinstance(lesson, Lesson) else lesson
        return self.catalog.get_lesson(lesson_id)

    # -------------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------------

    def is_lesson_completed(self, lesson: LessonRef) -> bool:
        lesson_id = lesson.id if isinstance(lesson, Lesson) else lesson
        return lesson_id in self._progress.completed_lessons

    def is_lesson_unlocked(self, lesson: LessonRef) -> bool:
        """Unlocked by progress, or the course entry point (unit 1, lesson 1)."""
        resolved = self._resolve(lesson)
        if resolved is None:
            return False
        return resolved.id in self._progress.unlocked_lessons or resolved.is_entry_point

    def is_lesson_available(self, lesson: LessonRef) -> bool:
        """Check if a lesson can be started."""
        return self.is_lesson_unlocked(lesson)

    # -------------------------------------------------------------------------
    # Lesson Completion
    # -------------------------------------------------------------------------

    def complete_lesson(self, lesson: LessonRef) -> Optional[CompletionResult]:
        """
        Record completion of a lesson's exercise set.

        Re-completing a lesson is allowed and awards XP again.

        Args:
            lesson: Lesson or lesson ID from the catalog

        Returns:
            CompletionResult, or None if the lesson is not in the catalog
        """
        resolved = self._resolve(lesson)
        if resolved is None:
            logger.warning(f"Ignoring completion of unknown lesson: {lesson!r}")
            return None

        now = self.clock()
        progress = self._progress

        progress.completed_lessons.add(resolved.id)
        progress.total_xp += resolved.xp_reward
        self._update_streak(now.date())
        unlocked = self._unlock_next_lesson(resolved)

        new_achievements = evaluate_achievements(progress, now, self.rules)
        progress.achievements.extend(new_achievements)
        for achievement in new_achievements:
            logger.info(f"Achievement earned: {achievement.title}")

        saved = self.store.save(self.key, progress.to_bytes())
        if not saved:
            logger.warning(f"Progress for '{self.key}' was not saved; keeping in-memory state")

        logger.info(
            f"Completed lesson {resolved.id} (+{resolved.xp_reward} XP, "
            f"total {progress.total_xp}, streak {progress.current_streak})"
        )
        self._notify()

        return CompletionResult(
            lesson_id=resolved.id,
            xp_earned=resolved.xp_reward,
            total_xp=progress.total_xp,
            current_streak=progress.current_streak,
            longest_streak=progress.longest_streak,
            unlocked_lesson_id=unlocked.id if unlocked else None,
            new_achievements=new_achievements,
            saved=saved,
        )

    def _update_streak(self, today: date):
        """
        Advance the daily streak.

        Next calendar day increments, a longer gap resets to 1, the same day
        (or an earlier one, if the clock moved back) leaves it alone.
        """
        progress = self._progress
        if progress.last_study_date is None:
            progress.current_streak = 1
        else:
            days = (today - progress.last_study_date).days
            if days == 1:
                progress.current_streak += 1
            elif days > 1:
                progress.current_streak = 1

        progress.longest_streak = max(progress.longest_streak, progress.current_streak)
        progress.last_study_date = today

    def _unlock_next_lesson(self, lesson: Lesson) -> Optional[Lesson]:
        """Unlock the next lesson in the unit, else the next unit's first lesson."""
        next_lesson = self.catalog.find_lesson(lesson.unit, lesson.lesson_number + 1)
        if next_lesson is None:
            next_lesson = self.catalog.find_lesson(lesson.unit + 1, 1)
        if next_lesson is None:
            logger.debug(f"No lesson follows {lesson.id}; end of course")
            return None

        if next_lesson.id not in self._progress.unlocked_lessons:
            logger.info(f"Unlocked lesson {next_lesson.id}")
        self._progress.unlocked_lessons.add(next_lesson.id)
        return next_lesson
