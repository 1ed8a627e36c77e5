"""Shared implementation behind medications and supplements.

Both kinds have the same shape (name, dosage, frequency + dose schedule,
active flag) and the same dose-log table layout; only the table and column
names differ.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.analytics.schedule import DoseSchedule, parse_frequency
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


@dataclass(frozen=True)
class RegimenKind:
    """Table layout for one dosed item kind."""

    kind: str
    table: str
    log_table: str
    parent_column: str


MEDICATION = RegimenKind("medication", "medications", "medication_logs", "medication_id")
SUPPLEMENT = RegimenKind("supplement", "supplements", "supplement_logs", "supplement_id")


async def create_item(
    pool: asyncpg.Pool,
    spec: RegimenKind,
    user_id: str,
    name: str,
    frequency: str,
    dosage: str | None = None,
    schedule: DoseSchedule | None = None,
) -> dict[str, Any]:
    frequency = _require_text(frequency, "frequency")
    if schedule is None:
        schedule = parse_frequency(frequency)
    row = await pool.fetchrow(
        f"""
        INSERT INTO {spec.table} (user_id, name, dosage, frequency, schedule_kind, schedule_doses)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING *
        """,
        _require_user(user_id),
        _require_text(name, "name"),
        dosage,
        frequency,
        str(schedule.kind),
        schedule.doses,
    )
    logger.info("Added %s %s (%s, %s)", spec.kind, row["id"], frequency, schedule.kind)
    return _row_to_dict(row)


async def list_items(
    pool: asyncpg.Pool,
    spec: RegimenKind,
    user_id: str,
    active_only: bool = False,
) -> list[dict[str, Any]]:
    return await _list_for_user(pool, spec.table, user_id, active_only=active_only)


async def update_item(
    pool: asyncpg.Pool,
    spec: RegimenKind,
    user_id: str,
    item_id: str | uuid.UUID,
    fields: dict[str, Any],
) -> dict[str, Any]:
    """Partial update. A new frequency re-derives the schedule unless one is given."""
    allowed = {"name", "dosage", "frequency", "is_active"}
    updates = {k: v for k, v in fields.items() if k in allowed}

    if "name" in updates:
        updates["name"] = _require_text(updates["name"], "name")

    schedule: DoseSchedule | None = fields.get("schedule")
    if "frequency" in updates:
        updates["frequency"] = _require_text(updates["frequency"], "frequency")
        if schedule is None:
            schedule = parse_frequency(updates["frequency"])
    if schedule is not None:
        updates["schedule_kind"] = str(schedule.kind)
        updates["schedule_doses"] = schedule.doses

    return await _update_owned(
        pool,
        spec.table,
        spec.kind,
        _require_user(user_id),
        _as_uuid(item_id, spec.kind),
        updates,
    )


async def create_log(
    pool: asyncpg.Pool,
    spec: RegimenKind,
    user_id: str,
    item_id: str | uuid.UUID,
    taken_at: datetime | None = None,
    notes: str | None = None,
) -> dict[str, Any]:
    """Record a dose after checking the item exists and belongs to the user."""
    user_id = _require_user(user_id)
    item_uuid = _as_uuid(item_id, spec.kind)
    await _check_parent(pool, spec.table, spec.kind, item_uuid, user_id)

    row = await pool.fetchrow(
        f"""
        INSERT INTO {spec.log_table} ({spec.parent_column}, user_id, taken_at, notes)
        VALUES ($1, $2, COALESCE($3, now()), $4)
        RETURNING *
        """,
        item_uuid,
        user_id,
        _timestamp(taken_at),
        notes,
    )
    logger.info("Logged %s dose %s for %s", spec.kind, row["id"], item_uuid)
    return _row_to_dict(row)


async def list_logs(
    pool: asyncpg.Pool,
    spec: RegimenKind,
    user_id: str,
) -> list[dict[str, Any]]:
    return await _list_for_user(pool, spec.log_table, user_id)


async def list_logs_in_range(
    pool: asyncpg.Pool,
    spec: RegimenKind,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> list[dict[str, Any]]:
    return await _list_in_range(pool, spec.log_table, "taken_at", user_id, start_date, end_date)
