"""Wellness entry handlers: mood, medications, supplements, habits, reminders, analytics, export.

Re-exports all public symbols so callers can use ``from wellness.tools import X``.
"""

from wellness.tools._helpers import _row_to_dict
from wellness.tools.analytics import adherence_analytics, habit_analytics, mood_analytics
from wellness.tools.export import export_user_data
from wellness.tools.habits import (
    habit_create,
    habit_list,
    habit_list_active,
    habit_log_create,
    habit_log_list,
    habit_log_list_by_date_range,
    habit_update,
)
from wellness.tools.medications import (
    medication_create,
    medication_list,
    medication_list_active,
    medication_log_create,
    medication_log_list,
    medication_log_list_by_date_range,
    medication_update,
)
from wellness.tools.mood import (
    MAX_MOOD_SCORE,
    MIN_MOOD_SCORE,
    mood_entry_create,
    mood_entry_list,
    mood_entry_list_by_date_range,
    mood_entry_update,
)
from wellness.tools.reminders import (
    VALID_REMINDER_TYPES,
    reminder_create,
    reminder_list,
    reminder_list_active,
    reminder_update,
)
from wellness.tools.supplements import (
    supplement_create,
    supplement_list,
    supplement_list_active,
    supplement_log_create,
    supplement_log_list,
    supplement_log_list_by_date_range,
    supplement_update,
)

__all__ = [
    "MAX_MOOD_SCORE",
    "MIN_MOOD_SCORE",
    "VALID_REMINDER_TYPES",
    "_row_to_dict",
    "adherence_analytics",
    "export_user_data",
    "habit_analytics",
    "habit_create",
    "habit_list",
    "habit_list_active",
    "habit_log_create",
    "habit_log_list",
    "habit_log_list_by_date_range",
    "habit_update",
    "medication_create",
    "medication_list",
    "medication_list_active",
    "medication_log_create",
    "medication_log_list",
    "medication_log_list_by_date_range",
    "medication_update",
    "mood_analytics",
    "mood_entry_create",
    "mood_entry_list",
    "mood_entry_list_by_date_range",
    "mood_entry_update",
    "reminder_create",
    "reminder_list",
    "reminder_list_active",
    "reminder_update",
    "supplement_create",
    "supplement_list",
    "supplement_list_active",
    "supplement_log_create",
    "supplement_log_list",
    "supplement_log_list_by_date_range",
    "supplement_update",
]
