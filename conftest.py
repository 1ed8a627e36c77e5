"""Root conftest: shared pool mocks, row builders, and the Postgres testcontainer.

Unit tests import the helpers directly (``from conftest import make_pool``);
integration tests use the ``provisioned_postgres_pool`` fixture.
"""

from __future__ import annotations

import shutil
import uuid
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest

if TYPE_CHECKING:
    from asyncpg.pool import Pool
    from testcontainers.postgres import PostgresContainer

docker_available = shutil.which("docker") is not None

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Mock asyncpg pool
# ---------------------------------------------------------------------------


class MockRecord(dict):
    """Stands in for asyncpg.Record: key access and ``dict(row)`` are all the handlers use."""


def make_row(data: dict[str, Any]) -> MockRecord:
    return MockRecord(data)


def make_pool(
    *,
    fetchrow_returns: list[Any] | None = None,
    fetch_returns: list[Any] | None = None,
) -> AsyncMock:
    """Build an AsyncMock behaving like an asyncpg.Pool (direct pool calls)."""
    pool = AsyncMock()

    if fetchrow_returns is not None:
        pool.fetchrow = AsyncMock(side_effect=list(fetchrow_returns))
    else:
        pool.fetchrow = AsyncMock(return_value=None)

    if fetch_returns is not None:
        pool.fetch = AsyncMock(side_effect=list(fetch_returns))
    else:
        pool.fetch = AsyncMock(return_value=[])

    pool.execute = AsyncMock(return_value="CREATE TABLE")
    return pool


# ---------------------------------------------------------------------------
# Row builders (shapes match wellness.schema)
# ---------------------------------------------------------------------------


def mood_row(**overrides: Any) -> MockRecord:
    data = {
        "id": uuid.uuid4(),
        "user_id": USER_ID,
        "mood_score": 7,
        "notes": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return make_row(data)


def _regimen_row(**overrides: Any) -> MockRecord:
    data = {
        "id": uuid.uuid4(),
        "user_id": USER_ID,
        "name": "Vitamin D",
        "dosage": "1000 IU",
        "frequency": "daily",
        "schedule_kind": "daily",
        "schedule_doses": 1,
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return make_row(data)


def medication_row(**overrides: Any) -> MockRecord:
    return _regimen_row(**{"name": "Metformin", "dosage": "500mg", **overrides})


def supplement_row(**overrides: Any) -> MockRecord:
    return _regimen_row(**overrides)


def dose_log_row(parent_column: str, parent_id: uuid.UUID, **overrides: Any) -> MockRecord:
    data = {
        "id": uuid.uuid4(),
        parent_column: parent_id,
        "user_id": USER_ID,
        "taken_at": NOW,
        "notes": None,
        "created_at": NOW,
    }
    data.update(overrides)
    return make_row(data)


def habit_row(**overrides: Any) -> MockRecord:
    data = {
        "id": uuid.uuid4(),
        "user_id": USER_ID,
        "name": "Meditate",
        "description": None,
        "target_frequency": "daily",
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return make_row(data)


def habit_log_row(habit_id: uuid.UUID, **overrides: Any) -> MockRecord:
    data = {
        "id": uuid.uuid4(),
        "habit_id": habit_id,
        "user_id": USER_ID,
        "completed_at": NOW,
        "notes": None,
        "created_at": NOW,
    }
    data.update(overrides)
    return make_row(data)


def reminder_row(**overrides: Any) -> MockRecord:
    data = {
        "id": uuid.uuid4(),
        "user_id": USER_ID,
        "title": "Evening check-in",
        "message": None,
        "reminder_time": "21:00",
        "days_of_week": "[0, 1, 2, 3, 4, 5, 6]",
        "reminder_type": "mood",
        "target_id": None,
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return make_row(data)


# ---------------------------------------------------------------------------
# PostgreSQL (integration)
# ---------------------------------------------------------------------------


def _unique_test_db_name() -> str:
    return f"test_{uuid.uuid4().hex[:12]}"


@pytest.fixture(scope="session")
def postgres_container() -> Iterator[PostgresContainer]:
    """Shared Postgres testcontainer for all DB-backed tests in this pytest session.

    Each ``provisioned_postgres_pool`` usage creates its own database, so rows
    never leak between tests.
    """
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:16") as pg:
        yield pg


@pytest.fixture
def provisioned_postgres_pool(
    postgres_container: PostgresContainer,
) -> Callable[..., AbstractAsyncContextManager[Pool]]:
    """Create a fresh database with the wellness tables and an asyncpg pool.

    Tests should use this as:
        async with provisioned_postgres_pool() as pool:
            ...
    """
    from wellness.db import ConnectionParams, Database
    from wellness.schema import create_tables

    @asynccontextmanager
    async def _provision(
        *,
        min_pool_size: int = 1,
        max_pool_size: int = 3,
    ) -> AsyncIterator[Pool]:
        db = Database(
            db_name=_unique_test_db_name(),
            params=ConnectionParams(
                host=postgres_container.get_container_host_ip(),
                port=int(postgres_container.get_exposed_port(5432)),
                user=postgres_container.username,
                password=postgres_container.password,
            ),
            min_pool_size=min_pool_size,
            max_pool_size=max_pool_size,
        )
        await db.provision()
        pool = await db.connect()
        await create_tables(pool)
        try:
            yield pool
        finally:
            await db.close()

    return _provision


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

USER_HEADERS = {"X-User-Id": USER_ID}


def make_app(pool: Any, config: Any = None):
    """Create the FastAPI app with ``get_db`` overridden to hand out *pool*."""
    from wellness.api.app import create_app
    from wellness.api.deps import get_db

    app = create_app(config=config)
    app.dependency_overrides[get_db] = lambda: pool
    return app


async def call_api(app: Any, method: str, url: str, **kwargs: Any):
    """Issue one request against *app* through ``httpx.ASGITransport``."""
    import httpx

    kwargs.setdefault("headers", USER_HEADERS)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        return await client.request(method, url, **kwargs)
