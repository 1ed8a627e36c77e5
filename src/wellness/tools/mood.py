"""Mood entries: log, list, and edit daily mood scores."""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.errors import ValidationError
from wellness.tools._helpers import (
    _as_uuid,
    _list_for_user,
    _list_in_range,
    _require_user,
    _row_to_dict,
    _update_owned,
)

logger = logging.getLogger(__name__)

MIN_MOOD_SCORE = 1
MAX_MOOD_SCORE = 10


def validate_mood_score(score: Any) -> int:
    """Accept only integers 1–10 (booleans are not scores)."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(f"mood_score must be an integer, got {score!r}")
    if not MIN_MOOD_SCORE <= score <= MAX_MOOD_SCORE:
        raise ValidationError(
            f"mood_score must be between {MIN_MOOD_SCORE} and {MAX_MOOD_SCORE}, got {score}"
        )
    return score


async def mood_entry_create(
    pool: asyncpg.Pool,
    user_id: str,
    mood_score: int,
    notes: str | None = None,
) -> dict[str, Any]:
    """Record a mood score (1–10) with optional notes."""
    row = await pool.fetchrow(
        """
        INSERT INTO mood_entries (user_id, mood_score, notes)
        VALUES ($1, $2, $3)
        RETURNING *
        """,
        _require_user(user_id),
        validate_mood_score(mood_score),
        notes,
    )
    logger.info("Logged mood entry %s (score=%d)", row["id"], mood_score)
    return _row_to_dict(row)


async def mood_entry_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """All of the user's mood entries, newest first."""
    return await _list_for_user(pool, "mood_entries", user_id)


async def mood_entry_list_by_date_range(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> list[dict[str, Any]]:
    """Mood entries created inside [start_date, end_date], newest first."""
    return await _list_in_range(pool, "mood_entries", "created_at", user_id, start_date, end_date)


async def mood_entry_update(
    pool: asyncpg.Pool,
    user_id: str,
    entry_id: str | uuid.UUID,
    **fields: Any,
) -> dict[str, Any]:
    """Update a mood entry. Allowed fields: mood_score, notes."""
    allowed = {"mood_score", "notes"}
    updates = {k: v for k, v in fields.items() if k in allowed}
    if "mood_score" in updates:
        validate_mood_score(updates["mood_score"])
    return await _update_owned(
        pool,
        "mood_entries",
        "mood_entry",
        _require_user(user_id),
        _as_uuid(entry_id, "mood_entry"),
        updates,
    )
