"""Unit tests for the full-data export handler."""

from __future__ import annotations

import asyncpg
import pytest
from conftest import USER_ID, habit_row, make_pool, mood_row

from wellness.schema import TABLES
from wellness.tools.export import export_user_data

pytestmark = pytest.mark.unit


async def test_empty_user_gets_eight_empty_lists():
    pool = make_pool()

    snapshot = await export_user_data(pool, USER_ID)

    assert set(snapshot) == {*TABLES, "exported_at"}
    for table in TABLES:
        assert snapshot[table] == []
    assert snapshot["exported_at"] is not None
    assert snapshot["exported_at"].tzinfo is not None


async def test_every_read_is_scoped_to_the_user_and_unfiltered():
    pool = make_pool()

    await export_user_data(pool, USER_ID)

    assert pool.fetch.await_count == len(TABLES)
    for call in pool.fetch.await_args_list:
        sql, user_id = call.args
        assert "WHERE user_id = $1 ORDER BY" in sql
        assert "is_active" not in sql
        assert user_id == USER_ID


async def test_rows_land_under_their_table():
    async def fetch(sql, user_id):
        if "FROM mood_entries" in sql:
            return [mood_row(), mood_row()]
        if "FROM habits" in sql:
            return [habit_row(is_active=False)]
        return []

    pool = make_pool()
    pool.fetch.side_effect = fetch

    snapshot = await export_user_data(pool, USER_ID)

    assert len(snapshot["mood_entries"]) == 2
    assert snapshot["habits"][0]["is_active"] is False
    assert snapshot["habit_logs"] == []


async def test_one_failed_read_fails_the_export():
    async def fetch(sql, user_id):
        if "FROM reminders" in sql:
            raise asyncpg.InterfaceError("connection lost")
        return []

    pool = make_pool()
    pool.fetch.side_effect = fetch

    with pytest.raises(asyncpg.InterfaceError):
        await export_user_data(pool, USER_ID)
