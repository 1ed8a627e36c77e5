"""Shared Pydantic response/request models for the Wellness API.

Provides the generic ``{"data": ..., "meta": ...}`` wrapper, the error
envelope, and re-exports the per-entity models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Base response wrappers
# ---------------------------------------------------------------------------


class ApiMeta(BaseModel):
    """Extensible metadata bag attached to every API response."""

    model_config = {"extra": "allow"}


class ApiResponse[T](BaseModel):
    """Generic API response wrapper.

    All successful responses follow ``{"data": T, "meta": {...}}``.
    """

    data: T
    meta: ApiMeta = Field(default_factory=ApiMeta)


class ErrorDetail(BaseModel):
    """Structured error payload."""

    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    """Standard error response envelope."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health-check response."""

    status: str


# ---------------------------------------------------------------------------
# Entity models (re-exported from sub-modules)
# ---------------------------------------------------------------------------

from wellness.api.models.analytics import (  # noqa: E402
    AdherenceAnalytics,
    HabitAnalytics,
    MoodAnalytics,
)
from wellness.api.models.export import ExportSnapshot  # noqa: E402
from wellness.api.models.habit import (  # noqa: E402
    Habit,
    HabitCreate,
    HabitLog,
    HabitLogCreate,
    HabitUpdate,
)
from wellness.api.models.mood import MoodEntry, MoodEntryCreate, MoodEntryUpdate  # noqa: E402
from wellness.api.models.regimen import (  # noqa: E402
    DoseLogCreate,
    Medication,
    MedicationLog,
    RegimenItemCreate,
    RegimenItemUpdate,
    ScheduleInput,
    Supplement,
    SupplementLog,
)
from wellness.api.models.reminder import Reminder, ReminderCreate, ReminderUpdate  # noqa: E402

__all__ = [
    "AdherenceAnalytics",
    "ApiMeta",
    "ApiResponse",
    "DoseLogCreate",
    "ErrorDetail",
    "ErrorResponse",
    "ExportSnapshot",
    "Habit",
    "HabitAnalytics",
    "HabitCreate",
    "HabitLog",
    "HabitLogCreate",
    "HabitUpdate",
    "HealthResponse",
    "Medication",
    "MedicationLog",
    "MoodAnalytics",
    "MoodEntry",
    "MoodEntryCreate",
    "MoodEntryUpdate",
    "RegimenItemCreate",
    "RegimenItemUpdate",
    "Reminder",
    "ReminderCreate",
    "ReminderUpdate",
    "ScheduleInput",
    "Supplement",
    "SupplementLog",
]
