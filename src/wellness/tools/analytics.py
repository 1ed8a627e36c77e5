"""Analytics handlers: fetch a user's records for a date range and summarise them."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.analytics.adherence import compute_adherence_analytics
from wellness.analytics.habits import compute_overall_habit_analytics
from wellness.analytics.mood import compute_mood_analytics
from wellness.tools._helpers import _list_for_user, _list_in_range, _range

logger = logging.getLogger(__name__)


async def mood_analytics(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> dict[str, Any]:
    """Mood trend, weekly averages, best/worst days and score distribution."""
    entries = await _list_in_range(
        pool, "mood_entries", "created_at", user_id, start_date, end_date
    )
    return compute_mood_analytics(entries)


async def habit_analytics(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> dict[str, Any]:
    """Completion rate, streaks and consistency for every habit the user has.

    Inactive habits are included in the per-habit list and in
    ``total_habits``; only ``active_habits`` filters on the flag.
    """
    _range(start_date, end_date)
    habits = await _list_for_user(pool, "habits", user_id)
    logs = await _list_in_range(
        pool, "habit_logs", "completed_at", user_id, start_date, end_date
    )
    return compute_overall_habit_analytics(habits, logs, start_date, end_date)


async def adherence_analytics(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> dict[str, Any]:
    """Dose adherence for the user's active medications and supplements.

    Streaks are anchored at *end_date*, the same as habit streaks, so the
    result depends only on the arguments.
    """
    _range(start_date, end_date)
    medications = await _list_for_user(pool, "medications", user_id, active_only=True)
    supplements = await _list_for_user(pool, "supplements", user_id, active_only=True)
    medication_logs = await _list_in_range(
        pool, "medication_logs", "taken_at", user_id, start_date, end_date
    )
    supplement_logs = await _list_in_range(
        pool, "supplement_logs", "taken_at", user_id, start_date, end_date
    )
    result = compute_adherence_analytics(
        medications, medication_logs, supplements, supplement_logs, start_date, end_date
    )
    logger.debug(
        "Adherence for %d medication(s), %d supplement(s)",
        len(result["medication_adherence"]),
        len(result["supplement_adherence"]),
    )
    return result
