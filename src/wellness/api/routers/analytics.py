"""Analytics endpoints: summaries over an inclusive date range."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from wellness.api.deps import get_current_user_id, get_db
from wellness.api.models import AdherenceAnalytics, ApiResponse, HabitAnalytics, MoodAnalytics
from wellness.db import Database
from wellness.tools import analytics as analytics_tools

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/mood", response_model=ApiResponse[MoodAnalytics])
async def get_mood_analytics(
    start_date: date = Query(..., description="First day of the range (inclusive)"),
    end_date: date = Query(..., description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[MoodAnalytics]:
    result = await analytics_tools.mood_analytics(db, user_id, start_date, end_date)
    return ApiResponse[MoodAnalytics](data=MoodAnalytics(**result))


@router.get("/habits", response_model=ApiResponse[HabitAnalytics])
async def get_habit_analytics(
    start_date: date = Query(..., description="First day of the range (inclusive)"),
    end_date: date = Query(..., description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[HabitAnalytics]:
    result = await analytics_tools.habit_analytics(db, user_id, start_date, end_date)
    return ApiResponse[HabitAnalytics](data=HabitAnalytics(**result))


@router.get("/adherence", response_model=ApiResponse[AdherenceAnalytics])
async def get_adherence_analytics(
    start_date: date = Query(..., description="First day of the range (inclusive)"),
    end_date: date = Query(..., description="Last day of the range (inclusive)"),
    db: Database = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[AdherenceAnalytics]:
    """Adherence for active medications and supplements; streaks end at ``end_date``."""
    result = await analytics_tools.adherence_analytics(db, user_id, start_date, end_date)
    return ApiResponse[AdherenceAnalytics](data=AdherenceAnalytics(**result))
