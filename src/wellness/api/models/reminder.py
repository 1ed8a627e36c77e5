"""Pydantic models for reminder endpoints.

Time, weekday and type rules are enforced by the reminder handlers so they
apply to every caller, not only the API.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Reminder(BaseModel):
    id: UUID
    user_id: str
    title: str
    message: str | None = None
    reminder_time: str  # "HH:MM"
    days_of_week: list[int]  # 0 = Sunday ... 6 = Saturday
    reminder_type: str
    target_id: UUID | None = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class ReminderCreate(BaseModel):
    title: str = Field(min_length=1)
    reminder_time: str
    days_of_week: list[int]
    reminder_type: str
    message: str | None = None
    target_id: UUID | None = None


class ReminderUpdate(BaseModel):
    title: str | None = None
    message: str | None = None
    reminder_time: str | None = None
    days_of_week: list[int] | None = None
    reminder_type: str | None = None
    target_id: UUID | None = None
    is_active: bool | None = None
