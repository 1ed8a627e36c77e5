"""Analytics engine: pure summaries over already-fetched, already-bounded records."""

from wellness.analytics.adherence import (
    adherence_rate,
    compute_adherence_analytics,
    compute_item_adherence,
)
from wellness.analytics.habits import (
    compute_habit_analytics,
    compute_overall_habit_analytics,
    current_streak,
    longest_streak,
)
from wellness.analytics.mood import (
    VALID_MOOD_TRENDS,
    compute_mood_analytics,
    mood_distribution,
    mood_trend,
)
from wellness.analytics.schedule import DoseSchedule, ScheduleKind, parse_frequency

__all__ = [
    "VALID_MOOD_TRENDS",
    "DoseSchedule",
    "ScheduleKind",
    "adherence_rate",
    "compute_adherence_analytics",
    "compute_habit_analytics",
    "compute_item_adherence",
    "compute_mood_analytics",
    "compute_overall_habit_analytics",
    "current_streak",
    "longest_streak",
    "mood_distribution",
    "mood_trend",
    "parse_frequency",
]
