"""Habit endpoints: habit definitions and their completion log."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wellness.api.deps import get_current_user_id, get_db, optional_date_range
from wellness.api.models import (
    ApiResponse,
    Habit,
    HabitCreate,
    HabitLog,
    HabitLogCreate,
    HabitUpdate,
)
from wellness.db import Database
from wellness.tools import habits as habit_tools

router = APIRouter(tags=["habits"])


@router.post("/api/habits", response_model=ApiResponse[Habit], status_code=201)
async def create_habit(
    body: HabitCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Habit]:
    row = await habit_tools.habit_create(
        db, user_id, body.name, body.target_frequency, description=body.description
    )
    return ApiResponse[Habit](data=Habit(**row))


@router.get("/api/habits", response_model=ApiResponse[list[Habit]])
async def list_habits(
    active: bool = Query(False, description="Only return active habits"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[Habit]]:
    if active:
        rows = await habit_tools.habit_list_active(db, user_id)
    else:
        rows = await habit_tools.habit_list(db, user_id)
    return ApiResponse[list[Habit]](data=[Habit(**r) for r in rows])


@router.patch("/api/habits/{habit_id}", response_model=ApiResponse[Habit])
async def update_habit(
    habit_id: UUID,
    body: HabitUpdate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[Habit]:
    row = await habit_tools.habit_update(
        db, user_id, habit_id, **body.model_dump(exclude_unset=True)
    )
    return ApiResponse[Habit](data=Habit(**row))


@router.post(
    "/api/habits/{habit_id}/logs",
    response_model=ApiResponse[HabitLog],
    status_code=201,
)
async def log_habit_completion(
    habit_id: UUID,
    body: HabitLogCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[HabitLog]:
    """Mark the habit done (now, unless ``completed_at`` is given)."""
    row = await habit_tools.habit_log_create(
        db, user_id, habit_id, completed_at=body.completed_at, notes=body.notes
    )
    return ApiResponse[HabitLog](data=HabitLog(**row))


@router.get("/api/habit-logs", response_model=ApiResponse[list[HabitLog]])
async def list_habit_logs(
    since: date | None = Query(None, description="First day of the range (inclusive)"),
    until: date | None = Query(None, description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[HabitLog]]:
    bounds = optional_date_range(since, until)
    if bounds is None:
        rows = await habit_tools.habit_log_list(db, user_id)
    else:
        rows = await habit_tools.habit_log_list_by_date_range(db, user_id, *bounds)
    return ApiResponse[list[HabitLog]](data=[HabitLog(**r) for r in rows])
