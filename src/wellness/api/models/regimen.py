"""Pydantic models for medication and supplement endpoints.

Medications and supplements share one shape; the log models differ only in
the name of the parent id field.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from wellness.analytics.schedule import DoseSchedule, ScheduleKind


class ScheduleInput(BaseModel):
    """Explicit dose schedule; omit it to infer one from ``frequency``."""

    kind: ScheduleKind
    doses: int = Field(default=1, ge=0)

    def to_schedule(self) -> DoseSchedule:
        return DoseSchedule(self.kind, self.doses)


class RegimenItem(BaseModel):
    id: UUID
    user_id: str
    name: str
    dosage: str | None = None
    frequency: str
    schedule_kind: ScheduleKind
    schedule_doses: int
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class Medication(RegimenItem):
    """A tracked medication."""


class Supplement(RegimenItem):
    """A tracked supplement."""


class RegimenItemCreate(BaseModel):
    """Request body for adding a medication or supplement."""

    name: str = Field(min_length=1)
    frequency: str = Field(min_length=1)
    dosage: str | None = None
    schedule: ScheduleInput | None = None


class RegimenItemUpdate(BaseModel):
    """Partial update; a new ``frequency`` re-derives the schedule unless one is given."""

    name: str | None = None
    dosage: str | None = None
    frequency: str | None = None
    is_active: bool | None = None
    schedule: ScheduleInput | None = None


class DoseLogCreate(BaseModel):
    """Request body for logging a dose; ``taken_at`` defaults to now."""

    taken_at: datetime | None = None
    notes: str | None = None


class MedicationLog(BaseModel):
    id: UUID
    medication_id: UUID
    user_id: str
    taken_at: datetime
    notes: str | None = None
    created_at: datetime


class SupplementLog(BaseModel):
    id: UUID
    supplement_id: UUID
    user_id: str
    taken_at: datetime
    notes: str | None = None
    created_at: datetime
