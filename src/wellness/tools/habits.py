"""Habits: define habits, mark completions, and read completion history."""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.tools._helpers import (
    _as_uuid,
    _check_parent,
    _list_for_user,
    _list_in_range,
    _require_text,
    _require_user,
    _row_to_dict,
    _timestamp,
    _update_owned,
)

logger = logging.getLogger(__name__)


async def habit_create(
    pool: asyncpg.Pool,
    user_id: str,
    name: str,
    target_frequency: str,
    description: str | None = None,
) -> dict[str, Any]:
    """Define a habit with a free-text target frequency (e.g. "daily", "3x per week")."""
    row = await pool.fetchrow(
        """
        INSERT INTO habits (user_id, name, description, target_frequency)
        VALUES ($1, $2, $3, $4)
        RETURNING *
        """,
        _require_user(user_id),
        _require_text(name, "name"),
        description,
        _require_text(target_frequency, "target_frequency"),
    )
    logger.info("Added habit %s", row["id"])
    return _row_to_dict(row)


async def habit_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Every habit the user has defined, newest first."""
    return await _list_for_user(pool, "habits", user_id)


async def habit_list_active(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    return await _list_for_user(pool, "habits", user_id, active_only=True)


async def habit_update(
    pool: asyncpg.Pool,
    user_id: str,
    habit_id: str | uuid.UUID,
    **fields: Any,
) -> dict[str, Any]:
    """Update a habit. Allowed fields: name, description, target_frequency, is_active."""
    allowed = {"name", "description", "target_frequency", "is_active"}
    updates = {k: v for k, v in fields.items() if k in allowed}
    for required in ("name", "target_frequency"):
        if required in updates:
            updates[required] = _require_text(updates[required], required)
    return await _update_owned(
        pool,
        "habits",
        "habit",
        _require_user(user_id),
        _as_uuid(habit_id, "habit"),
        updates,
    )


async def habit_log_create(
    pool: asyncpg.Pool,
    user_id: str,
    habit_id: str | uuid.UUID,
    completed_at: datetime | None = None,
    notes: str | None = None,
) -> dict[str, Any]:
    """Mark a habit completed. The habit must exist and belong to *user_id*."""
    user_id = _require_user(user_id)
    habit_uuid = _as_uuid(habit_id, "habit")
    await _check_parent(pool, "habits", "habit", habit_uuid, user_id)

    row = await pool.fetchrow(
        """
        INSERT INTO habit_logs (habit_id, user_id, completed_at, notes)
        VALUES ($1, $2, COALESCE($3, now()), $4)
        RETURNING *
        """,
        habit_uuid,
        user_id,
        _timestamp(completed_at),
        notes,
    )
    return _row_to_dict(row)


async def habit_log_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Full completion history for the user, newest first."""
    return await _list_for_user(pool, "habit_logs", user_id)


async def habit_log_list_by_date_range(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> list[dict[str, Any]]:
    """Completions inside [start_date, end_date], newest first."""
    return await _list_in_range(pool, "habit_logs", "completed_at", user_id, start_date, end_date)
