"""Reminders: configure when the user wants to be nudged to log something."""

from __future__ import annotations

import json
import logging
import re
import uuid
from collections.abc import Iterable
from typing import Any

import asyncpg

from wellness.errors import ValidationError
from wellness.tools._helpers import (
    _as_uuid,
    _list_for_user,
    _require_text,
    _require_user,
    _row_to_dict,
    _update_owned,
)

logger = logging.getLogger(__name__)

VALID_REMINDER_TYPES = {"mood", "medication", "supplement", "habit", "general"}

_REMINDER_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_reminder_time(value: str) -> str:
    """Accept a 24h ``HH:MM`` string."""
    if not isinstance(value, str) or not _REMINDER_TIME.fullmatch(value):
        raise ValidationError(f"reminder_time must be HH:MM (00:00-23:59), got {value!r}")
    return value


def validate_days_of_week(days: Iterable[int]) -> list[int]:
    """Weekday indices 0 (Sunday) to 6 (Saturday), deduplicated and sorted."""
    if days is None or isinstance(days, (str, bytes, dict)):
        raise ValidationError(f"days_of_week must be a list of integers 0-6, got {days!r}")
    result: set[int] = set()
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise ValidationError(f"days_of_week entries must be integers 0-6, got {day!r}")
        result.add(day)
    return sorted(result)


def validate_reminder_type(value: str) -> str:
    if value not in VALID_REMINDER_TYPES:
        raise ValidationError(
            f"Invalid reminder type: {value!r}. "
            f"Must be one of: {', '.join(sorted(VALID_REMINDER_TYPES))}"
        )
    return value


async def reminder_create(
    pool: asyncpg.Pool,
    user_id: str,
    title: str,
    reminder_time: str,
    days_of_week: Iterable[int],
    reminder_type: str,
    message: str | None = None,
    target_id: str | uuid.UUID | None = None,
) -> dict[str, Any]:
    """Create a reminder.

    *target_id* optionally points at the medication, supplement or habit the
    reminder is about; it is stored as given and not checked.
    """
    row = await pool.fetchrow(
        """
        INSERT INTO reminders
            (user_id, title, message, reminder_time, days_of_week, reminder_type, target_id)
        VALUES ($1, $2, $3, $4, $5::jsonb, $6, $7)
        RETURNING *
        """,
        _require_user(user_id),
        _require_text(title, "title"),
        message,
        validate_reminder_time(reminder_time),
        json.dumps(validate_days_of_week(days_of_week)),
        validate_reminder_type(reminder_type),
        None if target_id is None else _as_uuid(target_id, "reminder target"),
    )
    logger.info("Created %s reminder %s at %s", reminder_type, row["id"], reminder_time)
    return _row_to_dict(row)


async def reminder_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """All of the user's reminders, newest first."""
    return await _list_for_user(pool, "reminders", user_id)


async def reminder_list_active(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Only reminders that are switched on."""
    return await _list_for_user(pool, "reminders", user_id, active_only=True)


async def reminder_update(
    pool: asyncpg.Pool,
    user_id: str,
    reminder_id: str | uuid.UUID,
    **fields: Any,
) -> dict[str, Any]:
    """Update a reminder.

    Allowed fields: title, message, reminder_time, days_of_week, is_active,
    reminder_type, target_id.
    """
    allowed = {
        "title",
        "message",
        "reminder_time",
        "days_of_week",
        "is_active",
        "reminder_type",
        "target_id",
    }
    updates = {k: v for k, v in fields.items() if k in allowed}

    if "title" in updates:
        updates["title"] = _require_text(updates["title"], "title")
    if "reminder_time" in updates:
        validate_reminder_time(updates["reminder_time"])
    if "days_of_week" in updates:
        updates["days_of_week"] = json.dumps(validate_days_of_week(updates["days_of_week"]))
    if "reminder_type" in updates:
        validate_reminder_type(updates["reminder_type"])
    if updates.get("target_id") is not None:
        updates["target_id"] = _as_uuid(updates["target_id"], "reminder target")

    return await _update_owned(
        pool,
        "reminders",
        "reminder",
        _require_user(user_id),
        _as_uuid(reminder_id, "reminder"),
        updates,
        casts={"days_of_week": "::jsonb"},
    )
