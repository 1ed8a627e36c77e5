"""Database and identity dependencies for the wellness API.

Provides:
- ``init_database()`` / ``shutdown_database()``: the process-wide ``Database``
  singleton, opened in the app lifespan.
- ``get_db()``: FastAPI dependency handing the database to route handlers.
- ``get_current_user_id()``: resolves the calling user from the configured
  header, falling back to the configured default user.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import Depends, HTTPException, Request

from wellness.config import DatabaseConfig, WellnessConfig
from wellness.db import Database
from wellness.errors import ValidationError
from wellness.schema import create_tables

logger = logging.getLogger(__name__)

_database: Database | None = None


async def init_database(config: DatabaseConfig) -> Database:
    """Open the pool and make sure the tables exist.

    Called once during app startup (in the lifespan handler).
    """
    global _database  # noqa: PLW0603

    db = Database.from_env(
        db_name=config.name,
        schema=config.schema,
        min_pool_size=config.min_pool_size,
        max_pool_size=config.max_pool_size,
    )
    pool = await db.connect()
    await create_tables(pool)
    _database = db
    return db


async def shutdown_database() -> None:
    """Close the Database singleton. Called during app shutdown."""
    global _database  # noqa: PLW0603
    if _database is not None:
        await _database.close()
        _database = None


def get_db() -> Database:
    """FastAPI dependency: the connected Database, or 503 when there is none."""
    if _database is None or _database.pool is None:
        raise HTTPException(status_code=503, detail="Wellness database is not available")
    return _database


def get_config(request: Request) -> WellnessConfig:
    """FastAPI dependency: the configuration the app was created with."""
    return request.app.state.config


def resolve_user_id(request: Request, config: WellnessConfig) -> str | None:
    """Caller id from the identity header, else the configured default user."""
    header_value = request.headers.get(config.identity.user_header, "").strip()
    return header_value or config.identity.default_user_id


def get_current_user_id(
    request: Request,
    config: WellnessConfig = Depends(get_config),
) -> str:
    """FastAPI dependency: the calling user's id, or 401 when it cannot be resolved."""
    user_id = resolve_user_id(request, config)
    if user_id is None:
        raise HTTPException(
            status_code=401,
            detail=f"Missing {config.identity.user_header} header",
        )
    return user_id


def optional_date_range(since: date | None, until: date | None) -> tuple[date, date] | None:
    """Both bounds of a ``since``/``until`` filter, or neither; a half-open range is rejected."""
    if since is None and until is None:
        return None
    if since is None or until is None:
        raise ValidationError("since and until must be given together")
    return since, until
