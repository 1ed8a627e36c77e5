"""Reminder endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wellness.api.deps import get_current_user_id, get_db
from wellness.api.models import ApiResponse, Reminder, ReminderCreate, ReminderUpdate
from wellness.db import Database
from wellness.tools import reminders as reminder_tools

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


@router.post("", response_model=ApiResponse[Reminder], status_code=201)
async def create_reminder(
    body: ReminderCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Reminder]:
    row = await reminder_tools.reminder_create(
        db,
        user_id,
        body.title,
        body.reminder_time,
        body.days_of_week,
        body.reminder_type,
        message=body.message,
        target_id=body.target_id,
    )
    return ApiResponse[Reminder](data=Reminder(**row))


@router.get("", response_model=ApiResponse[list[Reminder]])
async def list_reminders(
    active: bool = Query(False, description="Only return reminders that are switched on"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[Reminder]]:
    if active:
        rows = await reminder_tools.reminder_list_active(db, user_id)
    else:
        rows = await reminder_tools.reminder_list(db, user_id)
    return ApiResponse[list[Reminder]](data=[Reminder(**r) for r in rows])


@router.patch("/{reminder_id}", response_model=ApiResponse[Reminder])
async def update_reminder(
    reminder_id: UUID,
    body: ReminderUpdate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Reminder]:
    row = await reminder_tools.reminder_update(
        db, user_id, reminder_id, **body.model_dump(exclude_unset=True)
    )
    return ApiResponse[Reminder](data=Reminder(**row))
