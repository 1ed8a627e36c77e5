"""Domain errors raised by the entry handlers and analytics.

Handlers never retry or swallow these; the API layer maps them onto HTTP
status codes (see ``wellness.api.middleware``).
"""

from __future__ import annotations

from typing import Any


class WellnessError(Exception):
    """Base class for all wellness-tracker domain errors."""


class RecordNotFoundError(WellnessError, LookupError):
    """Raised when a referenced record does not exist for the calling user."""

    def __init__(self, kind: str, record_id: Any) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.replace('_', ' ').capitalize()} {record_id} not found")


class OwnershipViolationError(WellnessError, PermissionError):
    """Raised when a log references a parent record owned by another user."""

    def __init__(self, kind: str, record_id: Any, user_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        self.user_id = user_id
        super().__init__(
            f"{kind.replace('_', ' ').capitalize()} {record_id} does not belong to user {user_id!r}"
        )


class ValidationError(WellnessError, ValueError):
    """Raised when handler input fails a type or range constraint."""
