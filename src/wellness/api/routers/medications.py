"""Medication endpoints: the medication list and its dose log."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wellness.api.deps import get_current_user_id, get_db, optional_date_range
from wellness.api.models import (
    ApiResponse,
    DoseLogCreate,
    Medication,
    MedicationLog,
    RegimenItemCreate,
    RegimenItemUpdate,
)
from wellness.db import Database
from wellness.tools import medications as medication_tools

router = APIRouter(tags=["medications"])


@router.post("/api/medications", response_model=ApiResponse[Medication], status_code=201)
async def create_medication(
    body: RegimenItemCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Medication]:
    """Add a medication; the dose schedule is inferred from ``frequency`` unless given."""
    row = await medication_tools.medication_create(
        db,
        user_id,
        body.name,
        body.frequency,
        dosage=body.dosage,
        schedule=body.schedule.to_schedule() if body.schedule else None,
    )
    return ApiResponse[Medication](data=Medication(**row))


@router.get("/api/medications", response_model=ApiResponse[list[Medication]])
async def list_medications(
    active: bool = Query(False, description="Only return active medications"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[Medication]]:
    if active:
        rows = await medication_tools.medication_list_active(db, user_id)
    else:
        rows = await medication_tools.medication_list(db, user_id)
    return ApiResponse[list[Medication]](data=[Medication(**r) for r in rows])


@router.patch("/api/medications/{medication_id}", response_model=ApiResponse[Medication])
async def update_medication(
    medication_id: UUID,
    body: RegimenItemUpdate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Medication]:
    fields = body.model_dump(exclude_unset=True, exclude={"schedule"})
    if body.schedule is not None:
        fields["schedule"] = body.schedule.to_schedule()
    row = await medication_tools.medication_update(db, user_id, medication_id, **fields)
    return ApiResponse[Medication](data=Medication(**row))


@router.post(
    "/api/medications/{medication_id}/logs",
    response_model=ApiResponse[MedicationLog],
    status_code=201,
)
async def log_medication_dose(
    medication_id: UUID,
    body: DoseLogCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[MedicationLog]:
    """Record a dose taken (now, unless ``taken_at`` is given)."""
    row = await medication_tools.medication_log_create(
        db, user_id, medication_id, taken_at=body.taken_at, notes=body.notes
    )
    return ApiResponse[MedicationLog](data=MedicationLog(**row))


@router.get("/api/medication-logs", response_model=ApiResponse[list[MedicationLog]])
async def list_medication_logs(
    since: date | None = Query(None, description="First day of the range (inclusive)"),
    until: date | None = Query(None, description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[MedicationLog]]:
    """Dose history, newest first, optionally within a date range."""
    bounds = optional_date_range(since, until)
    if bounds is None:
        rows = await medication_tools.medication_log_list(db, user_id)
    else:
        rows = await medication_tools.medication_log_list_by_date_range(db, user_id, *bounds)
    return ApiResponse[list[MedicationLog]](data=[MedicationLog(**r) for r in rows])
