"""Unit tests for medication/supplement adherence analytics."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

import pytest

from wellness.analytics.adherence import (
    adherence_rate,
    compute_adherence_analytics,
    compute_item_adherence,
)

pytestmark = pytest.mark.unit

WEEK_START = date(2024, 1, 1)  # a Monday, ISO week 2024-W01
WEEK_END = date(2024, 1, 7)


def _item(
    frequency: str = "daily",
    kind: str = "daily",
    doses: int = 1,
    name: str = "Metformin",
    is_active: bool = True,
) -> dict:
    return {
        "id": uuid.uuid4(),
        "name": name,
        "frequency": frequency,
        "schedule_kind": kind,
        "schedule_doses": doses,
        "is_active": is_active,
    }


def _log(item: dict, day: int, hour: int = 8, column: str = "medication_id") -> dict:
    return {column: item["id"], "taken_at": datetime(2024, 1, day, hour, 0, tzinfo=UTC)}


class TestAdherenceRate:
    def test_rounds_half_up(self):
        assert adherence_rate(4, 7) == 57

    def test_capped_at_100(self):
        assert adherence_rate(9, 7) == 100

    def test_nothing_expected(self):
        assert adherence_rate(5, 0) == 0


class TestComputeItemAdherence:
    def test_daily_all_days_logged(self):
        item = _item()
        logs = [_log(item, d) for d in range(1, 8)]
        result = compute_item_adherence(item, logs, WEEK_START, WEEK_END, "medication")
        assert result["adherence_rate"] == 100
        assert result["total_expected"] == 7
        assert result["total_logged"] == 7
        assert result["missed_doses"] == 0
        assert result["streak_days"] == 7
        assert result["weekly_adherence"] == [{"week": "2024-W01", "rate": 100}]

    def test_daily_four_of_seven(self):
        item = _item()
        logs = [_log(item, d) for d in (1, 2, 3, 7)]
        result = compute_item_adherence(item, logs, WEEK_START, WEEK_END, "medication")
        assert result["adherence_rate"] == 57
        assert result["missed_doses"] == 3
        assert result["streak_days"] == 1

    def test_as_needed_is_always_zero(self):
        item = _item(frequency="as needed", kind="as_needed", doses=0)
        logs = [_log(item, d) for d in range(1, 6)]
        result = compute_item_adherence(item, logs, WEEK_START, WEEK_END, "medication")
        assert result["total_expected"] == 0
        assert result["total_logged"] == 5
        assert result["adherence_rate"] == 0
        assert result["missed_doses"] == 0
        assert result["streak_days"] == 0

    def test_twice_daily_needs_two_doses_for_the_streak(self):
        item = _item(frequency="twice daily", doses=2)
        logs = [_log(item, 7, 8), _log(item, 7, 20), _log(item, 6, 8)]
        result = compute_item_adherence(item, logs, WEEK_START, WEEK_END, "medication")
        assert result["total_expected"] == 14
        assert result["streak_days"] == 1

    def test_weekly_schedule_expects_one_dose_per_seven_days(self):
        item = _item(frequency="weekly", kind="weekly")
        logs = [_log(item, 3), _log(item, 10)]
        result = compute_item_adherence(
            item, logs, date(2024, 1, 1), date(2024, 1, 14), "supplement"
        )
        assert result["total_expected"] == 2
        assert result["adherence_rate"] == 100

    def test_streak_anchored_at_range_end(self):
        item = _item()
        logs = [_log(item, d) for d in (5, 6, 7)]
        result = compute_item_adherence(item, logs, WEEK_START, WEEK_END, "medication")
        assert result["streak_days"] == 3

    def test_weekly_buckets_cover_every_overlapping_iso_week(self):
        item = _item()
        logs = [_log(item, d) for d in range(5, 11)]
        result = compute_item_adherence(
            item, logs, date(2024, 1, 5), date(2024, 1, 10), "medication"
        )
        assert result["weekly_adherence"] == [
            {"week": "2024-W01", "rate": 100},
            {"week": "2024-W02", "rate": 100},
        ]

    def test_rejects_unknown_item_type(self):
        with pytest.raises(ValueError, match="Invalid item type"):
            compute_item_adherence(_item(), [], WEEK_START, WEEK_END, "vitamin")


class TestComputeAdherenceAnalytics:
    def test_only_active_items_and_per_category_means(self):
        full = _item(name="A")
        partial = _item(name="B")
        stopped = _item(name="C", is_active=False)
        med_logs = [_log(full, d) for d in range(1, 8)] + [_log(partial, d) for d in (1, 2, 3, 7)]
        fish_oil = _item(name="Fish oil")
        sup_logs = [_log(fish_oil, 1, column="supplement_id")]

        result = compute_adherence_analytics(
            [full, partial, stopped], med_logs, [fish_oil], sup_logs, WEEK_START, WEEK_END
        )

        assert [a["item_name"] for a in result["medication_adherence"]] == ["A", "B"]
        assert result["overall_medication_rate"] == 78.5
        assert result["supplement_adherence"][0]["item_type"] == "supplement"
        assert result["overall_supplement_rate"] == 14.0

    def test_no_items(self):
        result = compute_adherence_analytics([], [], [], [], WEEK_START, WEEK_END)
        assert result == {
            "medication_adherence": [],
            "supplement_adherence": [],
            "overall_medication_rate": 0.0,
            "overall_supplement_rate": 0.0,
        }
