"""Medication and supplement adherence analytics.

Expected doses come from each item's stored ``DoseSchedule``. As-needed
items have nothing to adhere to, so their expected count, rate and streak
are all zero whatever they logged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from wellness.analytics.dates import (
    ONE_DAY,
    inclusive_day_count,
    iso_week_key,
    iter_days,
    mean,
    round_half_up,
    utc_date,
)
from wellness.analytics.schedule import DoseSchedule

VALID_ITEM_TYPES = ("medication", "supplement")

_PARENT_COLUMN = {"medication": "medication_id", "supplement": "supplement_id"}


def adherence_rate(logged: float, expected: float) -> int:
    """Whole-percent share of *expected* that was *logged*, capped at 100; 0 if nothing expected."""
    if expected <= 0:
        return 0
    return min(round_half_up(logged / expected * 100), 100)


def dose_streak(
    doses_per_day: Mapping[date, int],
    schedule: DoseSchedule,
    start: date,
    end: date,
) -> int:
    """Consecutive days, walking back from *end*, whose dose count meets the daily rate."""
    if schedule.is_as_needed:
        return 0
    required = schedule.daily_rate
    streak = 0
    day = end
    while day >= start and doses_per_day.get(day, 0) >= required:
        streak += 1
        day -= ONE_DAY
    return streak


def weekly_adherence(
    doses_per_day: Mapping[date, int],
    schedule: DoseSchedule,
    start: date,
    end: date,
) -> list[dict[str, Any]]:
    """Adherence per ISO week overlapping [start, end], over each week's clipped span."""
    span: dict[str, int] = {}
    logged: dict[str, int] = {}
    for day in iter_days(start, end):
        key = iso_week_key(day)
        span[key] = span.get(key, 0) + 1
        logged[key] = logged.get(key, 0) + doses_per_day.get(day, 0)
    return [
        {"week": key, "rate": adherence_rate(logged[key], schedule.daily_rate * span[key])}
        for key in sorted(span)
    ]


def compute_item_adherence(
    item: Mapping[str, Any],
    logs: Sequence[Mapping[str, Any]],
    start: date | datetime,
    end: date | datetime,
    item_type: str,
) -> dict[str, Any]:
    """Adherence summary for one medication or supplement.

    *logs* are the item's logs with ``taken_at`` inside [start, end].
    """
    if item_type not in VALID_ITEM_TYPES:
        raise ValueError(
            f"Invalid item type: {item_type!r}. Must be one of: {', '.join(VALID_ITEM_TYPES)}"
        )
    schedule = DoseSchedule.from_row(item)
    first_day, last_day = utc_date(start), utc_date(end)
    total_days = inclusive_day_count(first_day, last_day)

    doses_per_day: dict[date, int] = {}
    for log in logs:
        day = utc_date(log["taken_at"])
        doses_per_day[day] = doses_per_day.get(day, 0) + 1

    total_logged = len(logs)
    total_expected = 0 if schedule.is_as_needed else round_half_up(schedule.daily_rate * total_days)

    return {
        "item_id": item["id"],
        "item_name": item["name"],
        "item_type": item_type,
        "frequency": item.get("frequency"),
        "adherence_rate": adherence_rate(total_logged, total_expected),
        "total_expected": total_expected,
        "total_logged": total_logged,
        "missed_doses": max(0, total_expected - total_logged),
        "streak_days": dose_streak(doses_per_day, schedule, first_day, last_day),
        "weekly_adherence": weekly_adherence(doses_per_day, schedule, first_day, last_day),
    }


def _category(
    items: Sequence[Mapping[str, Any]],
    logs: Sequence[Mapping[str, Any]],
    start: date | datetime,
    end: date | datetime,
    item_type: str,
) -> list[dict[str, Any]]:
    parent_column = _PARENT_COLUMN[item_type]
    by_item: dict[Any, list[Mapping[str, Any]]] = {}
    for log in logs:
        by_item.setdefault(log[parent_column], []).append(log)
    active = sorted((i for i in items if i["is_active"]), key=lambda i: i["name"])
    return [
        compute_item_adherence(item, by_item.get(item["id"], []), start, end, item_type)
        for item in active
    ]


def compute_adherence_analytics(
    medications: Sequence[Mapping[str, Any]],
    medication_logs: Sequence[Mapping[str, Any]],
    supplements: Sequence[Mapping[str, Any]],
    supplement_logs: Sequence[Mapping[str, Any]],
    start: date | datetime,
    end: date | datetime,
) -> dict[str, Any]:
    """Adherence for every active medication and supplement, plus per-category means."""
    medication_adherence = _category(medications, medication_logs, start, end, "medication")
    supplement_adherence = _category(supplements, supplement_logs, start, end, "supplement")
    return {
        "medication_adherence": medication_adherence,
        "supplement_adherence": supplement_adherence,
        "overall_medication_rate": round(
            mean([a["adherence_rate"] for a in medication_adherence]), 2
        ),
        "overall_supplement_rate": round(
            mean([a["adherence_rate"] for a in supplement_adherence]), 2
        ),
    }
