"""Value types shared by the engine, the sequencer and the gateways."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from .clock import minutes_to_time, parse_date


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(parsed):
        return default
    return parsed


@dataclass(frozen=True, slots=True)
class Subject:
    name: str
    hours: float
    hours_studied: float = 0.0
    deadline: date | None = None

    @property
    def remaining_hours(self) -> float:
        return self.hours - self.hours_studied

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Subject":
        deadline_raw = payload.get("deadline")
        deadline: date | None = None
        if isinstance(deadline_raw, str) and deadline_raw:
            try:
                deadline = parse_date(deadline_raw[:10])
            except ValueError:
                deadline = None
        return cls(
            name=str(payload.get("name", "")),
            hours=_as_float(payload.get("hours")),
            hours_studied=_as_float(payload.get("hoursStudied")),
            deadline=deadline,
        )


@dataclass(frozen=True, slots=True)
class UnavailableInterval:
    date: date
    start_minute: int
    end_minute: int

    @property
    def is_valid(self) -> bool:
        return self.start_minute < self.end_minute

    def as_dict(self) -> dict[str, str]:
        return {
            "date": self.date.isoformat(),
            "startTime": minutes_to_time(self.start_minute),
            "endTime": minutes_to_time(self.end_minute),
        }


@dataclass(frozen=True, slots=True)
class FreeInterval:
    """Half-open ``[start, end)`` range in minutes of day."""

    start: int
    end: int

    @property
    def minutes(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class DayAvailability:
    date: date
    intervals: tuple[FreeInterval, ...]

    @property
    def available_minutes(self) -> int:
        return sum(interval.minutes for interval in self.intervals)


@dataclass(frozen=True, slots=True)
class AllocationState:
    """Progress of one subject's run; replaced, never mutated, by each packing step."""

    total_minutes_needed: int
    minutes_scheduled: int = 0

    @property
    def remaining_minutes(self) -> int:
        return max(0, self.total_minutes_needed - self.minutes_scheduled)

    @property
    def is_complete(self) -> bool:
        return self.minutes_scheduled >= self.total_minutes_needed

    def advance(self, minutes: int) -> "AllocationState":
        return AllocationState(
            total_minutes_needed=self.total_minutes_needed,
            minutes_scheduled=self.minutes_scheduled + minutes,
        )


@dataclass(frozen=True, slots=True)
class Slot:
    start_minute: int
    end_minute: int

    @property
    def minutes(self) -> int:
        return self.end_minute - self.start_minute

    def as_dict(self) -> dict[str, str]:
        return {
            "startTime": minutes_to_time(self.start_minute),
            "endTime": minutes_to_time(self.end_minute),
        }


@dataclass(frozen=True, slots=True)
class ScheduleDay:
    date: date
    slots: tuple[Slot, ...] = ()

    @property
    def scheduled_minutes(self) -> int:
        return sum(slot.minutes for slot in self.slots)

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "slots": [slot.as_dict() for slot in self.slots],
        }
