"""Medications: add, list, edit, log doses, and read dose history."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

import asyncpg

from wellness.analytics.schedule import DoseSchedule
from wellness.tools import _regimen
from wellness.tools._regimen import MEDICATION


async def medication_create(
    pool: asyncpg.Pool,
    user_id: str,
    name: str,
    frequency: str,
    dosage: str | None = None,
    schedule: DoseSchedule | None = None,
) -> dict[str, Any]:
    """Add a medication. Without an explicit *schedule* one is inferred from *frequency*."""
    return await _regimen.create_item(pool, MEDICATION, user_id, name, frequency, dosage, schedule)


async def medication_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Every medication the user has added, newest first."""
    return await _regimen.list_items(pool, MEDICATION, user_id)


async def medication_list_active(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """The user's active medications, newest first."""
    return await _regimen.list_items(pool, MEDICATION, user_id, active_only=True)


async def medication_update(
    pool: asyncpg.Pool,
    user_id: str,
    medication_id: str | uuid.UUID,
    **fields: Any,
) -> dict[str, Any]:
    """Update a medication. Allowed fields: name, dosage, frequency, is_active, schedule."""
    return await _regimen.update_item(pool, MEDICATION, user_id, medication_id, fields)


async def medication_log_create(
    pool: asyncpg.Pool,
    user_id: str,
    medication_id: str | uuid.UUID,
    taken_at: datetime | None = None,
    notes: str | None = None,
) -> dict[str, Any]:
    """Log a dose. The medication must exist and belong to *user_id*."""
    return await _regimen.create_log(pool, MEDICATION, user_id, medication_id, taken_at, notes)


async def medication_log_list(pool: asyncpg.Pool, user_id: str) -> list[dict[str, Any]]:
    """Full dose history for the user, newest first."""
    return await _regimen.list_logs(pool, MEDICATION, user_id)


async def medication_log_list_by_date_range(
    pool: asyncpg.Pool,
    user_id: str,
    start_date: date | datetime,
    end_date: date | datetime,
) -> list[dict[str, Any]]:
    """Doses taken inside [start_date, end_date], newest first."""
    return await _regimen.list_logs_in_range(pool, MEDICATION, user_id, start_date, end_date)
