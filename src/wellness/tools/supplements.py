"""Supplements: add, list, edit, log doses, and read dose history."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.analytics.schedule import DoseSchedule
from wellness.tools import _regimen
from wellness.tools._regimen import SUPPLEMENT


async def supplement_create(
    pool: asyncpg.Pool,
    user_id: str,
    name: str,
    frequency: str,
    dosage: str | None = None,
    schedule: DoseSchedule | None = None,
) -> dict[str, Any]:
    """Add a supplement. Without an explicit *schedule* one is inferred from *frequency*."""
    return await _regimen.create_item(pool, SUPPLEMENT, user_id, name, frequency, dosage, schedule)


async def supplement_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Every supplement the user has added, newest first."""
    return await _regimen.list_items(pool, SUPPLEMENT, user_id)


async def supplement_list_active(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """The user's active supplements, newest first."""
    return await _regimen.list_items(pool, SUPPLEMENT, user_id, active_only=True)


async def supplement_update(
    pool: asyncpg.Pool,
    user_id: str,
    supplement_id: str | uuid.UUID,
    **fields: Any,
) -> dict[str, Any]:
    """Update a supplement. Allowed fields: name, dosage, frequency, is_active, schedule."""
    return await _regimen.update_item(pool, SUPPLEMENT, user_id, supplement_id, fields)


async def supplement_log_create(
    pool: asyncpg.Pool,
    user_id: str,
    supplement_id: str | uuid.UUID,
    taken_at: datetime | None = None,
    notes: str | None = None,
) -> dict[str, Any]:
    """Log a dose. The supplement must exist and belong to *user_id*."""
    return await _regimen.create_log(pool, SUPPLEMENT, user_id, supplement_id, taken_at, notes)


async def supplement_log_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Full dose history for the user, newest first."""
    return await _regimen.list_logs(pool, SUPPLEMENT, user_id)


async def supplement_log_list_by_date_range(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> list[dict[str, Any]]:
    """Doses taken inside [start_date, end_date], newest first."""
    return await _regimen.list_logs_in_range(pool, SUPPLEMENT, user_id, start_date, end_date)
