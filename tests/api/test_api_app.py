"""Tests for the app factory, identity resolution, error envelope, analytics and export."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from conftest import (
    USER_ID,
    call_api,
    habit_log_row,
    habit_row,
    make_app,
    make_pool,
    mood_row,
)

from wellness.api.app import create_app
from wellness.config import IdentityConfig, WellnessConfig
from wellness.core.logging import get_user_context

pytestmark = pytest.mark.unit


def _at(day: int) -> datetime:
    return datetime(2024, 1, day, 9, 0, tzinfo=UTC)


class TestAppFactory:
    async def test_health(self):
        resp = await call_api(make_app(make_pool()), "GET", "/api/health", headers={})
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_routes_registered(self):
        paths = {route.path for route in create_app().routes}
        for path in (
            "/api/mood-entries",
            "/api/medications",
            "/api/medications/{medication_id}/logs",
            "/api/supplements",
            "/api/habits",
            "/api/reminders",
            "/api/analytics/mood",
            "/api/analytics/habits",
            "/api/analytics/adherence",
            "/api/export",
        ):
            assert path in paths

    def test_config_is_attached(self):
        config = WellnessConfig()
        app = create_app(config=config)
        assert app.state.config is config

    async def test_no_database_is_503(self):
        app = create_app()
        resp = await call_api(app, "GET", "/api/mood-entries")
        assert resp.status_code == 503


class TestIdentity:
    async def test_missing_header_is_401(self):
        pool = make_pool()
        resp = await call_api(make_app(pool), "GET", "/api/mood-entries", headers={})
        assert resp.status_code == 401
        pool.fetch.assert_not_awaited()

    async def test_default_user_fallback(self):
        pool = make_pool(fetch_returns=[[]])
        config = WellnessConfig(identity=IdentityConfig(default_user_id="demo"))

        resp = await call_api(make_app(pool, config), "GET", "/api/habits", headers={})

        assert resp.status_code == 200
        assert pool.fetch.await_args.args[1] == "demo"

    async def test_header_wins_over_default(self):
        pool = make_pool(fetch_returns=[[]])
        config = WellnessConfig(identity=IdentityConfig(default_user_id="demo"))

        await call_api(make_app(pool, config), "GET", "/api/habits")

        assert pool.fetch.await_args.args[1] == USER_ID

    async def test_user_context_is_reset_after_request(self):
        await call_api(make_app(make_pool()), "GET", "/api/reminders")
        assert get_user_context() is None


class TestErrorEnvelope:
    async def test_unhandled_error_is_500(self):
        pool = make_pool()
        pool.fetch.side_effect = RuntimeError("boom")

        resp = await call_api(make_app(pool), "GET", "/api/reminders")

        assert resp.status_code == 500
        assert resp.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "Internal server error", "details": None}
        }

    async def test_not_found_details(self):
        pool = make_pool(fetchrow_returns=[None])
        record_id = "00000000-0000-0000-0000-000000000001"

        resp = await call_api(
            make_app(pool), "PATCH", f"/api/habits/{record_id}", json={"name": "Walk"}
        )

        assert resp.status_code == 404
        assert resp.json()["error"]["details"] == {"kind": "habit", "id": record_id}

    async def test_malformed_path_id_is_422(self):
        resp = await call_api(
            make_app(make_pool()), "PATCH", "/api/habits/not-a-uuid", json={"name": "Walk"}
        )
        assert resp.status_code == 422


class TestAnalyticsEndpoints:
    async def test_mood(self):
        scores = [(1, 3), (2, 4), (5, 7), (6, 8)]
        entries = [mood_row(mood_score=s, created_at=_at(d)) for d, s in scores]
        pool = make_pool(fetch_returns=[entries])

        resp = await call_api(
            make_app(pool), "GET", "/api/analytics/mood?start_date=2024-01-01&end_date=2024-01-07"
        )

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total_entries"] == 4
        assert data["mood_trend"] == "improving"

    async def test_habits(self):
        habit = habit_row()
        logs = [habit_log_row(habit["id"], completed_at=_at(d)) for d in (6, 7)]
        pool = make_pool(fetch_returns=[[habit], logs])

        resp = await call_api(
            make_app(pool),
            "GET",
            "/api/analytics/habits?start_date=2024-01-01&end_date=2024-01-07",
        )

        assert resp.status_code == 200
        summary = resp.json()["data"]["habits"][0]
        assert summary["total_completions"] == 2
        assert summary["current_streak"] == 2

    async def test_adherence_with_no_items(self):
        pool = make_pool(fetch_returns=[[], [], [], []])

        resp = await call_api(
            make_app(pool),
            "GET",
            "/api/analytics/adherence?start_date=2024-01-01&end_date=2024-01-07",
        )

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["medication_adherence"] == []
        assert data["supplement_adherence"] == []

    async def test_missing_param_is_422(self):
        resp = await call_api(
            make_app(make_pool()), "GET", "/api/analytics/mood?start_date=2024-01-01"
        )
        assert resp.status_code == 422

    async def test_inverted_range_is_400(self):
        pool = make_pool()
        resp = await call_api(
            make_app(pool), "GET", "/api/analytics/habits?start_date=2024-02-01&end_date=2024-01-01"
        )
        assert resp.status_code == 400
        pool.fetch.assert_not_awaited()


class TestExportEndpoint:
    async def test_empty_export(self):
        resp = await call_api(make_app(make_pool()), "GET", "/api/export")

        assert resp.status_code == 200
        data = resp.json()["data"]
        for key in (
            "mood_entries",
            "medications",
            "medication_logs",
            "supplements",
            "supplement_logs",
            "habits",
            "habit_logs",
            "reminders",
        ):
            assert data[key] == []
        assert data["exported_at"]

    async def test_export_includes_inactive_habits(self):
        async def fetch(sql, user_id):
            if "FROM habits" in sql:
                return [habit_row(is_active=False)]
            return []

        pool = make_pool()
        pool.fetch.side_effect = fetch

        resp = await call_api(make_app(pool), "GET", "/api/export")

        assert resp.json()["data"]["habits"][0]["is_active"] is False
