"""Pydantic models for mood entry endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from wellness.tools.mood import MAX_MOOD_SCORE, MIN_MOOD_SCORE


class MoodEntry(BaseModel):
    """A recorded mood score."""

    id: UUID
    user_id: str
    mood_score: int
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class MoodEntryCreate(BaseModel):
    """Request body for logging a mood score."""

    mood_score: int = Field(ge=MIN_MOOD_SCORE, le=MAX_MOOD_SCORE)
    notes: str | None = None


class MoodEntryUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""

    mood_score: int | None = Field(default=None, ge=MIN_MOOD_SCORE, le=MAX_MOOD_SCORE)
    notes: str | None = None
