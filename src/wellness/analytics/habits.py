"""Habit analytics: completion rate, streaks, weekly completions, consistency score."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from typing import Any

from wellness.analytics.dates import (
    ONE_DAY,
    inclusive_day_count,
    mean,
    round_half_up,
    utc_date,
    week_start_sunday,
)

# Longest-streak bonus added on top of the completion rate, in points.
MAX_STREAK_BONUS = 20.0
MAX_CONSISTENCY_SCORE = 100.0


def current_streak(completion_days: Iterable[date], end: date) -> int:
    """Count completed days walking back from *end*.

    A single missing day is stepped over without counting; two or more
    missing days in a row end the streak.
    """
    days = sorted(set(completion_days), reverse=True)
    streak = 0
    check = end
    idx = 0
    while idx < len(days):
        gap = (check - days[idx]).days
        if gap == 0:
            streak += 1
            check -= ONE_DAY
            idx += 1
        elif gap == 1:
            check -= ONE_DAY
        else:
            break
    return streak


def longest_streak(completion_days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days with at least one completion."""
    days = sorted(set(completion_days))
    longest = 0
    run = 0
    previous: date | None = None
    for day in days:
        run = run + 1 if previous is not None and (day - previous).days == 1 else 1
        longest = max(longest, run)
        previous = day
    return longest


def weekly_completions(completed_at: Iterable[date | datetime]) -> list[dict[str, Any]]:
    """Completions per Sunday-aligned week, chronological."""
    counts: dict[str, int] = {}
    for value in completed_at:
        week = week_start_sunday(utc_date(value)).isoformat()
        counts[week] = counts.get(week, 0) + 1
    return [{"week": week, "completions": n} for week, n in sorted(counts.items())]


def consistency_score(raw_completion_rate: float, longest: int, total_days: int) -> float:
    """Completion rate plus a longest-streak bonus (max 20 points), capped at 100."""
    if total_days <= 0:
        return 0.0
    bonus = min(longest / total_days * MAX_STREAK_BONUS, MAX_STREAK_BONUS)
    return round(min(raw_completion_rate + bonus, MAX_CONSISTENCY_SCORE), 2)


def compute_habit_analytics(
    habit: Mapping[str, Any],
    logs: Sequence[Mapping[str, Any]],
    start: date | datetime,
    end: date | datetime,
) -> dict[str, Any]:
    """Analytics for one habit given its logs inside [start, end]."""
    total_days = inclusive_day_count(start, end)
    completed_at = [log["completed_at"] for log in logs]
    days = [utc_date(value) for value in completed_at]
    total = len(completed_at)

    raw_rate = total / total_days * 100 if total_days > 0 else 0.0
    longest = longest_streak(days)

    return {
        "habit_id": habit["id"],
        "habit_name": habit["name"],
        "completion_rate": round_half_up(raw_rate),
        "current_streak": current_streak(days, utc_date(end)),
        "longest_streak": longest,
        "total_completions": total,
        "weekly_completions": weekly_completions(completed_at),
        "consistency_score": consistency_score(raw_rate, longest, total_days),
    }


def compute_overall_habit_analytics(
    habits: Sequence[Mapping[str, Any]],
    logs: Sequence[Mapping[str, Any]],
    start: date | datetime,
    end: date | datetime,
) -> dict[str, Any]:
    """Per-habit analytics for every habit plus the user-level aggregate.

    *habits* is every habit the user owns, active or not; *logs* are the
    user's habit logs inside the range.
    """
    by_habit: dict[Any, list[Mapping[str, Any]]] = {}
    for log in logs:
        by_habit.setdefault(log["habit_id"], []).append(log)

    ordered = sorted(habits, key=lambda h: h["name"])
    per_habit = [
        compute_habit_analytics(habit, by_habit.get(habit["id"], []), start, end)
        for habit in ordered
    ]

    return {
        "total_habits": len(ordered),
        "active_habits": sum(1 for h in ordered if h["is_active"]),
        "overall_completion_rate": round(mean([h["completion_rate"] for h in per_habit]), 2),
        "habits": per_habit,
    }
