"""Pydantic model for the full-data export."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from wellness.api.models.habit import Habit, HabitLog
from wellness.api.models.mood import MoodEntry
from wellness.api.models.regimen import Medication, MedicationLog, Supplement, SupplementLog
from wellness.api.models.reminder import Reminder


class ExportSnapshot(BaseModel):
    """Everything one user has recorded, as of ``exported_at``."""

    mood_entries: list[MoodEntry]
    medications: list[Medication]
    medication_logs: list[MedicationLog]
    supplements: list[Supplement]
    supplement_logs: list[SupplementLog]
    habits: list[Habit]
    habit_logs: list[HabitLog]
    reminders: list[Reminder]
    exported_at: datetime
