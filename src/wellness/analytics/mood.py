"""Mood analytics: averages, trend, best/worst days, weekly buckets, distribution."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from wellness.analytics.dates import mean, to_utc, utc_date, week_start_monday

VALID_MOOD_TRENDS = ("improving", "declining", "stable")

# Mean difference between halves that counts as a real change.
TREND_THRESHOLD = 0.5
MIN_ENTRIES_FOR_TREND = 4


def mood_trend(scores: Sequence[int]) -> str:
    """Classify chronologically ordered scores as improving, declining or stable.

    Compares the mean of the second half with the mean of the first half
    (split at ``len // 2``). Fewer than four scores are always stable.
    """
    if len(scores) < MIN_ENTRIES_FOR_TREND:
        return "stable"
    mid = len(scores) // 2
    delta = mean(list(scores[mid:])) - mean(list(scores[:mid]))
    if delta > TREND_THRESHOLD:
        return "improving"
    if delta < -TREND_THRESHOLD:
        return "declining"
    return "stable"


def mood_distribution(scores: Sequence[int]) -> list[dict[str, int]]:
    """Count entries per score, ascending, omitting scores nobody logged."""
    counts: dict[int, int] = {}
    for score in scores:
        counts[score] = counts.get(score, 0) + 1
    return [{"score": score, "count": counts[score]} for score in sorted(counts)]


def weekly_mood_averages(entries: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Average score per Monday-aligned week, keyed by the week's ISO date."""
    buckets: dict[str, list[int]] = {}
    for entry in entries:
        week = week_start_monday(utc_date(entry["created_at"])).isoformat()
        buckets.setdefault(week, []).append(entry["mood_score"])
    return [
        {"week": week, "average": round(mean(scores), 2)}
        for week, scores in sorted(buckets.items())
    ]


def compute_mood_analytics(entries: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    """Summarise mood entries that already fall inside the requested range.

    Entries need ``mood_score`` and ``created_at``; order does not matter.
    Ties for best/worst day go to the earliest entry.
    """
    ordered = sorted(entries, key=lambda e: to_utc(e["created_at"]))
    scores = [e["mood_score"] for e in ordered]

    best: Mapping[str, Any] | None = None
    worst: Mapping[str, Any] | None = None
    for entry in ordered:
        if best is None or entry["mood_score"] > best["mood_score"]:
            best = entry
        if worst is None or entry["mood_score"] < worst["mood_score"]:
            worst = entry

    return {
        "average_mood": round(mean(scores), 2),
        "mood_trend": mood_trend(scores),
        "total_entries": len(ordered),
        "best_day": _day(best),
        "worst_day": _day(worst),
        "weekly_averages": weekly_mood_averages(ordered),
        "mood_distribution": mood_distribution(scores),
    }


def _day(entry: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if entry is None:
        return None
    return {"date": entry["created_at"], "mood": entry["mood_score"]}
