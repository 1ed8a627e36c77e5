"""Shared helpers for the wellness entry handlers."""

from __future__ import annotations

import json
import uuid
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.analytics.dates import range_bounds, to_utc
from wellness.errors import OwnershipViolationError, RecordNotFoundError, ValidationError

# Keeps updated_at strictly increasing even when two writes share a clock tick.
_TOUCH_UPDATED_AT = "updated_at = GREATEST(now(), updated_at + interval '1 microsecond')"


def _row_to_dict(row: asyncpg.Record) -> dict[str, Any]:
    """Convert an asyncpg Record to a dict, parsing JSONB strings."""
    d = dict(row)
    if "days_of_week" in d and isinstance(d["days_of_week"], str):
        d["days_of_week"] = json.loads(d["days_of_week"])
    return d


def _as_uuid(value: str | uuid.UUID, kind: str) -> uuid.UUID:
    """Coerce an id argument to a UUID, rejecting malformed strings."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid {kind.replace('_', ' ')} id: {value!r}") from exc


def _require_text(value: str | None, field: str) -> str:
    """Return *value* stripped, or raise if it is missing or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return str(value).strip()


def _require_user(user_id: str) -> str:
    return _require_text(user_id, "user_id")


def _timestamp(value: datetime | None) -> datetime | None:
    """Normalise an optional event timestamp to aware UTC."""
    return None if value is None else to_utc(value)


def _range(start: date | datetime, end: date | datetime) -> tuple[datetime, datetime]:
    return range_bounds(start, end)


async def _check_parent(
    pool: asyncpg.Pool,
    table: str,
    kind: str,
    parent_id: uuid.UUID,
    user_id: str,
) -> None:
    """Ensure the parent of a log exists and belongs to *user_id*."""
    parent = await pool.fetchrow(f"SELECT id, user_id FROM {table} WHERE id = $1", parent_id)
    if parent is None:
        raise RecordNotFoundError(kind, parent_id)
    if parent["user_id"] != user_id:
        raise OwnershipViolationError(kind, parent_id, user_id)


async def _update_owned(
    pool: asyncpg.Pool,
    table: str,
    kind: str,
    user_id: str,
    record_id: uuid.UUID,
    updates: dict[str, Any],
    casts: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Apply a partial update to a row the user owns and return the new row.

    Only the columns in *updates* change; ``updated_at`` is refreshed.
    *casts* maps a column to a SQL cast suffix (e.g. ``"::jsonb"``).
    """
    if not updates:
        raise ValidationError("No valid fields to update")
    if "is_active" in updates and not isinstance(updates["is_active"], bool):
        raise ValidationError(f"is_active must be true or false, got {updates['is_active']!r}")

    casts = casts or {}
    set_parts: list[str] = []
    params: list[Any] = [record_id, user_id]
    idx = 3

    for col, val in updates.items():
        set_parts.append(f"{col} = ${idx}{casts.get(col, '')}")
        params.append(val)
        idx += 1

    set_parts.append(_TOUCH_UPDATED_AT)
    set_clause = ", ".join(set_parts)

    row = await pool.fetchrow(
        f"UPDATE {table} SET {set_clause} WHERE id = $1 AND user_id = $2 RETURNING *",
        *params,
    )
    if row is None:
        raise RecordNotFoundError(kind, record_id)
    return _row_to_dict(row)


async def _list_for_user(
    pool: asyncpg.Pool,
    table: str,
    user_id: str,
    *,
    active_only: bool = False,
    order_column: str = "created_at",
) -> list[dict[str, Any]]:
    """All of a user's rows in *table*, newest first."""
    active = " AND is_active = true" if active_only else ""
    rows = await pool.fetch(
        f"SELECT * FROM {table} WHERE user_id = $1{active} ORDER BY {order_column} DESC",
        _require_user(user_id),
    )
    return [_row_to_dict(r) for r in rows]


async def _list_in_range(
    pool: asyncpg.Pool,
    table: str,
    column: str,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> list[dict[str, Any]]:
    """A user's rows whose *column* falls inside the inclusive range, newest first."""
    lower, upper = _range(start_date, end_date)
    rows = await pool.fetch(
        f"SELECT * FROM {table}"
        f" WHERE user_id = $1 AND {column} >= $2 AND {column} <= $3"
        f" ORDER BY {column} DESC",
        _require_user(user_id),
        lower,
        upper,
    )
    return [_row_to_dict(r) for r in rows]
