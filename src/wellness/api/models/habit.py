"""Pydantic models for habit endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Habit(BaseModel):
    """A habit the user wants to build."""

    id: UUID
    user_id: str
    name: str
    description: str | None = None
    target_frequency: str
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class HabitCreate(BaseModel):
    name: str = Field(min_length=1)
    target_frequency: str = Field(min_length=1)
    description: str | None = None


class HabitUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    target_frequency: str | None = None
    is_active: bool | None = None


class HabitLog(BaseModel):
    """One completion of a habit."""

    id: UUID
    habit_id: UUID
    user_id: str
    completed_at: datetime
    notes: str | None = None
    created_at: datetime


class HabitLogCreate(BaseModel):
    completed_at: datetime | None = None
    notes: str | None = None
