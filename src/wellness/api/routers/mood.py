"""Mood entry endpoints."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wellness.api.deps import get_current_user_id, get_db, optional_date_range
from wellness.api.models import ApiResponse, MoodEntry, MoodEntryCreate, MoodEntryUpdate
from wellness.db import Database
from wellness.tools import mood as mood_tools

router = APIRouter(prefix="/api/mood-entries", tags=["mood"])


@router.post("", response_model=ApiResponse[MoodEntry], status_code=201)
async def create_mood_entry(
    body: MoodEntryCreate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[MoodEntry]:
    """Log a mood score."""
    row = await mood_tools.mood_entry_create(db, user_id, body.mood_score, body.notes)
    return ApiResponse[MoodEntry](data=MoodEntry(**row))


@router.get("", response_model=ApiResponse[list[MoodEntry]])
async def list_mood_entries(
    since: date | None = Query(None, description="First day of the range (inclusive)"),
    until: date | None = Query(None, description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[list[MoodEntry]]:
    """List mood entries, newest first, optionally within a date range."""
    bounds = optional_date_range(since, until)
    if bounds is None:
        rows = await mood_tools.mood_entry_list(db, user_id)
    else:
        rows = await mood_tools.mood_entry_list_by_date_range(db, user_id, *bounds)
    return ApiResponse[list[MoodEntry]](data=[MoodEntry(**r) for r in rows])


@router.patch("/{entry_id}", response_model=ApiResponse[MoodEntry])
async def update_mood_entry(
    entry_id: UUID,
    body: MoodEntryUpdate,
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[MoodEntry]:
    """Change the score and/or notes of one of the caller's entries."""
    row = await mood_tools.mood_entry_update(
        db, user_id, entry_id, **body.model_dump(exclude_unset=True)
    )
    return ApiResponse[MoodEntry](data=MoodEntry(**row))
