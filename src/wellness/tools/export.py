"""Export: one-shot dump of everything a user has recorded."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

import asyncpg

from wellness.schema import TABLES
from wellness.tools._helpers import _list_for_user, _require_user

logger = logging.getLogger(__name__)


async def export_user_data(pool: asyncpg.Pool, user_id: str) -> dict[str, Any]:
    """Read every table for *user_id* concurrently and assemble one snapshot.

    No filtering: inactive items and the full log history are included.
    The first failing read aborts the whole export.
    """
    user_id = _require_user(user_id)
    results = await asyncio.gather(*(_list_for_user(pool, table, user_id) for table in TABLES))
    snapshot: dict[str, Any] = dict(zip(TABLES, results, strict=True))
    snapshot["exported_at"] = datetime.now(UTC)
    logger.info(
        "Exported %d record(s) for user %s",
        sum(len(rows) for rows in results),
        user_id,
    )
    return snapshot
