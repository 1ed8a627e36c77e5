"""Dose schedules for medications and supplements.

A schedule is fixed when the item is created (or its frequency changes) and
stored alongside the free-text ``frequency`` display string, so analytics
never have to guess a dose rate from text.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from wellness.errors import ValidationError


class ScheduleKind(enum.StrEnum):
    """How often doses are expected."""

    DAILY = "daily"
    WEEKLY = "weekly"
    AS_NEEDED = "as_needed"


@dataclass(frozen=True)
class DoseSchedule:
    """Expected dose cadence: ``doses`` per day, per week, or none (PRN)."""

    kind: ScheduleKind
    doses: int = 1

    def __post_init__(self) -> None:
        if self.kind is ScheduleKind.AS_NEEDED:
            if self.doses != 0:
                object.__setattr__(self, "doses", 0)
        elif self.doses < 1:
            raise ValidationError(
                f"A {self.kind} schedule needs at least one dose, got {self.doses}"
            )

    @classmethod
    def daily(cls, doses: int = 1) -> DoseSchedule:
        return cls(ScheduleKind.DAILY, doses)

    @classmethod
    def weekly(cls, doses: int = 1) -> DoseSchedule:
        return cls(ScheduleKind.WEEKLY, doses)

    @classmethod
    def as_needed(cls) -> DoseSchedule:
        return cls(ScheduleKind.AS_NEEDED, 0)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> DoseSchedule:
        """Rebuild the schedule stored in a medications/supplements row."""
        try:
            kind = ScheduleKind(row["schedule_kind"])
        except ValueError as exc:
            raise ValidationError(f"Unknown schedule kind: {row['schedule_kind']!r}") from exc
        return cls(kind, int(row["schedule_doses"]))

    @property
    def is_as_needed(self) -> bool:
        return self.kind is ScheduleKind.AS_NEEDED

    @property
    def daily_rate(self) -> float:
        """Expected doses per calendar day (fractional for weekly schedules)."""
        if self.kind is ScheduleKind.DAILY:
            return float(self.doses)
        if self.kind is ScheduleKind.WEEKLY:
            return self.doses / 7
        return 0.0


_AS_NEEDED = re.compile(r"as[\s-]+needed|\bprn\b")
_WEEKLY = re.compile(r"week")
# Checked in order; the first hit decides the dose count.
_DOSE_COUNTS: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"\btwice\b|(?<!\d)2(?!\d)"), 2),
    (re.compile(r"\bthree\b|(?<!\d)3(?!\d)"), 3),
    (re.compile(r"\bfour\b|(?<!\d)4(?!\d)"), 4),
    (re.compile(r"\bonce\b|\bdaily\b"), 1),
)


def parse_frequency(frequency: str) -> DoseSchedule:
    """Infer a ``DoseSchedule`` from a free-text frequency.

    "as needed"/"prn" is PRN; "twice"/"2", "three"/"3" and "four"/"4" set
    the dose count; anything mentioning "week" is a weekly schedule.
    Unrecognised text defaults to once daily.

    >>> parse_frequency("twice daily")
    DoseSchedule(kind=<ScheduleKind.DAILY: 'daily'>, doses=2)
    >>> parse_frequency("weekly").daily_rate == 1 / 7
    True
    """
    text = frequency.strip().lower()
    if _AS_NEEDED.search(text):
        return DoseSchedule.as_needed()

    doses = 1
    for pattern, count in _DOSE_COUNTS:
        if pattern.search(text):
            doses = count
            break

    if _WEEKLY.search(text):
        return DoseSchedule.weekly(doses)
    return DoseSchedule.daily(doses)
