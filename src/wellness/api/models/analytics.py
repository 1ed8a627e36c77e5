"""Pydantic models for the analytics endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Mood
# ---------------------------------------------------------------------------


class MoodDay(BaseModel):
    date: datetime
    mood: int


class WeeklyMoodAverage(BaseModel):
    week: str  # ISO date of the week's Monday
    average: float


class MoodScoreCount(BaseModel):
    score: int
    count: int


class MoodAnalytics(BaseModel):
    """Mood summary for a date range."""

    average_mood: float
    mood_trend: Literal["improving", "declining", "stable"]
    total_entries: int
    best_day: MoodDay | None = None
    worst_day: MoodDay | None = None
    weekly_averages: list[WeeklyMoodAverage] = Field(default_factory=list)
    mood_distribution: list[MoodScoreCount] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Habits
# ---------------------------------------------------------------------------


class WeeklyCompletions(BaseModel):
    week: str  # ISO date of the week's Sunday
    completions: int


class HabitSummary(BaseModel):
    habit_id: UUID
    habit_name: str
    completion_rate: int
    current_streak: int
    longest_streak: int
    total_completions: int
    weekly_completions: list[WeeklyCompletions] = Field(default_factory=list)
    consistency_score: float


class HabitAnalytics(BaseModel):
    """Habit summary for a date range, habits ordered by name."""

    total_habits: int
    active_habits: int
    overall_completion_rate: float
    habits: list[HabitSummary] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Adherence
# ---------------------------------------------------------------------------


class WeeklyAdherence(BaseModel):
    week: str  # "YYYY-Www"
    rate: int


class ItemAdherence(BaseModel):
    item_id: UUID
    item_name: str
    item_type: Literal["medication", "supplement"]
    frequency: str | None = None
    adherence_rate: int
    total_expected: int
    total_logged: int
    missed_doses: int
    streak_days: int
    weekly_adherence: list[WeeklyAdherence] = Field(default_factory=list)


class AdherenceAnalytics(BaseModel):
    """Adherence for active medications and supplements over a date range."""

    medication_adherence: list[ItemAdherence] = Field(default_factory=list)
    supplement_adherence: list[ItemAdherence] = Field(default_factory=list)
    overall_medication_rate: float
    overall_supplement_rate: float
