"""
Progress tracking schemas for Kudzidza.

Defines Pydantic models for learner progress including:
- Earned achievements
- The persisted UserProgress record and its JSON encoding
"""

from pydantic import BaseModel, Field, field_serializer, model_validator
from typing import Optional
from datetime import date, datetime
from uuid import uuid4


class Achievement(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str               # uniqueness key within UserProgress.achievements
    description: str
    icon_name: str
    xp_required: Optional[int] = None
    streak_required: Optional[int] = None
    is_unlocked: bool = False
    unlocked_date: Optional[datetime] = None


class UserProgress(BaseModel):
    """
    Single-user progress record, persisted as one JSON blob.

    Set-valued fields are serialized as sorted arrays so the encoding is
    stable across runs.
    """
    total_xp: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    completed_lessons: set[str] = Field(default_factory=set)
    unlocked_lessons: set[str] = Field(default_factory=set)
    last_study_date: Optional[date] = None
    achievements: list[Achievement] = []

    @model_validator(mode="after")
    def _check_streaks(self) -> "UserProgress":
        if self.longest_streak < self.current_streak:
            raise ValueError(
                f"longest_streak ({self.longest_streak}) must be >= "
                f"current_streak ({self.current_streak})"
            )
        return self

    @field_serializer("completed_lessons", "unlocked_lessons")
    def _serialize_id_set(self, ids: set[str]) -> list[str]:
        return sorted(ids)

    def has_achievement(self, title: str) -> bool:
        return any(a.title == title for a in self.achievements)

    def to_bytes(self) -> bytes:
        """Encode as UTF-8 JSON for the persistence store."""
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "UserProgress":
        """
        Decode a blob written by to_bytes().

        Raises:
            ValueError: If the blob is not valid UTF-8 JSON for this model
                (pydantic.ValidationError is a ValueError subclass)
        """
        return cls.model_validate_json(data)
