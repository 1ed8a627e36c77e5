"""Table definitions for the wellness store.

``create_tables`` is idempotent and is what ``wellness init-db`` and the
integration tests run against a fresh database.
"""

from __future__ import annotations

import logging

import asyncpg

logger = logging.getLogger(__name__)

TABLES: tuple[str, ...] = (
    "mood_entries",
    "medications",
    "medication_logs",
    "supplements",
    "supplement_logs",
    "habits",
    "habit_logs",
    "reminders",
)

DDL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS mood_entries (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id TEXT NOT NULL,
        mood_score INTEGER NOT NULL CHECK (mood_score BETWEEN 1 AND 10),
        notes TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS medications (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        dosage TEXT,
        frequency TEXT NOT NULL,
        schedule_kind TEXT NOT NULL DEFAULT 'daily'
            CHECK (schedule_kind IN ('daily', 'weekly', 'as_needed')),
        schedule_doses INTEGER NOT NULL DEFAULT 1 CHECK (schedule_doses >= 0),
        is_active BOOLEAN NOT NULL DEFAULT true,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS medication_logs (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        medication_id UUID NOT NULL REFERENCES medications(id),
        user_id TEXT NOT NULL,
        taken_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        notes TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS supplements (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        dosage TEXT,
        frequency TEXT NOT NULL,
        schedule_kind TEXT NOT NULL DEFAULT 'daily'
            CHECK (schedule_kind IN ('daily', 'weekly', 'as_needed')),
        schedule_doses INTEGER NOT NULL DEFAULT 1 CHECK (schedule_doses >= 0),
        is_active BOOLEAN NOT NULL DEFAULT true,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS supplement_logs (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        supplement_id UUID NOT NULL REFERENCES supplements(id),
        user_id TEXT NOT NULL,
        taken_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        notes TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS habits (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        description TEXT,
        target_frequency TEXT NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT true,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS habit_logs (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        habit_id UUID NOT NULL REFERENCES habits(id),
        user_id TEXT NOT NULL,
        completed_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        notes TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS reminders (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        message TEXT,
        reminder_time TEXT NOT NULL,
        days_of_week JSONB NOT NULL DEFAULT '[]',
        reminder_type TEXT NOT NULL
            CHECK (reminder_type IN ('mood', 'medication', 'supplement', 'habit', 'general')),
        target_id UUID,
        is_active BOOLEAN NOT NULL DEFAULT true,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_mood_entries_user_created"
        " ON mood_entries (user_id, created_at)"
    ),
    (
        "CREATE INDEX IF NOT EXISTS idx_medication_logs_user_taken"
        " ON medication_logs (user_id, taken_at)"
    ),
    (
        "CREATE INDEX IF NOT EXISTS idx_supplement_logs_user_taken"
        " ON supplement_logs (user_id, taken_at)"
    ),
    (
        "CREATE INDEX IF NOT EXISTS idx_habit_logs_user_completed"
        " ON habit_logs (user_id, completed_at)"
    ),
)


async def create_tables(pool: asyncpg.Pool) -> None:
    """Create all wellness tables and indexes if they do not exist yet."""
    for statement in DDL:
        await pool.execute(statement)
    logger.info("Ensured %d wellness tables", len(TABLES))
