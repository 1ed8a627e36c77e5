"""Supplement endpoints: the supplement list and its dose log."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wellness.api.deps import get_current_user_id, get_db, optional_date_range
from wellness.api.models import (
    ApiResponse,
    DoseLogCreate,
    RegimenItemCreate,
    RegimenItemUpdate,
    Supplement,
    SupplementLog,
)
from wellness.db import Database
from wellness.tools import supplements as supplement_tools

router = APIRouter(tags=["supplements"])


@router.post("/api/supplements", response_model=ApiResponse[Supplement], status_code=201)
async def create_supplement(
    body: RegimenItemCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Supplement]:
    """Add a supplement; the dose schedule is inferred from ``frequency`` unless given."""
    row = await supplement_tools.supplement_create(
        db,
        user_id,
        body.name,
        body.frequency,
        dosage=body.dosage,
        schedule=body.schedule.to_schedule() if body.schedule else None,
    )
    return ApiResponse[Supplement](data=Supplement(**row))


@router.get("/api/supplements", response_model=ApiResponse[list[Supplement]])
async def list_supplements(
    active: bool = Query(False, description="Only return active supplements"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[Supplement]]:
    if active:
        rows = await supplement_tools.supplement_list_active(db, user_id)
    else:
        rows = await supplement_tools.supplement_list(db, user_id)
    return ApiResponse[list[Supplement]](data=[Supplement(**r) for r in rows])


@router.patch("/api/supplements/{supplement_id}", response_model=ApiResponse[Supplement])
async def update_supplement(
    supplement_id: UUID,
    body: RegimenItemUpdate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Supplement]:
    fields = body.model_dump(exclude_unset=True, exclude={"schedule"})
    if body.schedule is not None:
        fields["schedule"] = body.schedule.to_schedule()
    row = await supplement_tools.supplement_update(db, user_id, supplement_id, **fields)
    return ApiResponse[Supplement](data=Supplement(**row))


@router.post(
    "/api/supplements/{supplement_id}/logs",
    response_model=ApiResponse[SupplementLog],
    status_code=201,
)
async def log_supplement_dose(
    supplement_id: UUID,
    body: DoseLogCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[SupplementLog]:
    """Record a dose taken (now, unless ``taken_at`` is given)."""
    row = await supplement_tools.supplement_log_create(
        db, user_id, supplement_id, taken_at=body.taken_at, notes=body.notes
    )
    return ApiResponse[SupplementLog](data=SupplementLog(**row))


@router.get("/api/supplement-logs", response_model=ApiResponse[list[SupplementLog]])
async def list_supplement_logs(
    since: date | None = Query(None, description="First day of the range (inclusive)"),
    until: date | None = Query(None, description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[SupplementLog]]:
    """Dose history, newest first, optionally within a date range."""
    bounds = optional_date_range(since, until)
    if bounds is None:
        rows = await supplement_tools.supplement_log_list(db, user_id)
    else:
        rows = await supplement_tools.supplement_log_list_by_date_range(db, user_id, *bounds)
    return ApiResponse[list[SupplementLog]](data=[SupplementLog(**r) for r in rows])
