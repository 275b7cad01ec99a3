"""
ExerciseSession - Work through one lesson's exercises and record completion.

Provides:
- Current exercise and position tracking
- Answer checking and scoring
- Accuracy for the lesson-complete screen
"""

from dataclasses import dataclass
from typing import Optional

from kudzidza.schemas import Exercise, Lesson

from .tracker import CompletionResult, ProgressTracker


@dataclass
class AnswerResult:
    """Feedback shown after an answer is checked."""
    exercise_id: str
    is_correct: bool
    correct_answer: str


class ExerciseSession:
    """
    One pass through a lesson's exercise set.

    Flow: submit_answer() then next_exercise() for each exercise, and
    finish() once is_finished. Completion is recorded regardless of score.
    """

    def __init__(self, lesson: Lesson, tracker: ProgressTracker):
        self.lesson = lesson
        self.tracker = tracker
        self.index = 0
        self.correct_answers = 0
        self.results: list[AnswerResult] = []
        self._completion: Optional[CompletionResult] = None

    @property
    def total_questions(self) -> int:
        return len(self.lesson.exercises)

    @property
    def current_exercise(self) -> Optional[Exercise]:
        if 0 <= self.index < self.total_questions:
            return self.lesson.exercises[self.index]
        return None

    @property
    def position(self) -> int:
        """1-based number of the exercise on screen."""
        return min(self.index + 1, self.total_questions)

    @property
    def progress(self) -> float:
        """Fraction of exercises moved past (0.0-1.0)."""
        if not self.total_questions:
            return 0.0
        return self.index / self.total_questions

    @property
    def is_finished(self) -> bool:
        return self.current_exercise is None

    @property
    def awaiting_next(self) -> bool:
        """True once the current exercise has been answered."""
        return len(self.results) > self.index

    # -------------------------------------------------------------------------
    # Answering
    # -------------------------------------------------------------------------

    def submit_answer(self, answer: str) -> AnswerResult:
        """
        Check an answer to the current exercise.

        Raises:
            RuntimeError: If there is no current exercise or it was already answered
        """
        exercise = self.current_exercise
        if exercise is None:
            raise RuntimeError("No exercise left to answer")
        if self.awaiting_next:
            raise RuntimeError(f"Exercise {exercise.id} was already answered")

        result = AnswerResult(
            exercise_id=exercise.id,
            is_correct=exercise.checks_answer(answer),
            correct_answer=exercise.correct_answer,
        )
        if result.is_correct:
            self.correct_answers += 1
        self.results.append(result)
        return result

    def next_exercise(self) -> Optional[Exercise]:
        """Advance past an answered exercise and return the next one."""
        if not self.awaiting_next:
            raise RuntimeError("Answer the current exercise before moving on")
        self.index += 1
        return self.current_exercise

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    @property
    def accuracy(self) -> int:
        """Percent correct, truncated to an integer."""
        if not self.total_questions:
            return 0
        return int(self.correct_answers / self.total_questions * 100)

    @property
    def is_perfect(self) -> bool:
        return self.total_questions > 0 and self.correct_answers == self.total_questions

    @property
    def accuracy_band(self) -> str:
        """'high' (>= 80), 'medium' (>= 60) or 'low', for result colouring."""
        if self.accuracy >= 80:
            return "high"
        if self.accuracy >= 60:
            return "medium"
        return "low"

    def finish(self) -> Optional[CompletionResult]:
        """Record the lesson as completed. Only the first call reaches the tracker."""
        if self._completion is None:
            self._completion = self.tracker.complete_lesson(self.lesson)
        return self._completion
