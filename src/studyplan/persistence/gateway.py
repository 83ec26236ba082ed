"""Persistence gateway contract and tagged save outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Protocol

from studyplan.models import ScheduleDay, UnavailableInterval


class GatewayError(Exception):
    """Raised when stored schedules cannot be loaded."""


class OutcomeKind(str, Enum):
    OK = "ok"
    AUTH = "auth"
    VALIDATION = "validation"
    TRANSIENT = "transient"


@dataclass(frozen=True, slots=True)
class SaveRequest:
    """Everything handed to the gateway for one subject."""

    subject: str
    start_date: date
    end_date: date
    schedule: tuple[ScheduleDay, ...]
    unavailable: tuple[UnavailableInterval, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "schedule": [day.as_dict() for day in self.schedule],
            "unavailableTimes": [interval.as_dict() for interval in self.unavailable],
        }


@dataclass(frozen=True, slots=True)
class SaveOutcome:
    kind: OutcomeKind
    record: dict[str, Any] = field(default_factory=dict)
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @classmethod
    def success(cls, record: dict[str, Any]) -> "SaveOutcome":
        return cls(kind=OutcomeKind.OK, record=record)

    @classmethod
    def failure(cls, kind: OutcomeKind, error: str) -> "SaveOutcome":
        return cls(kind=kind, error=error)


class ScheduleGateway(Protocol):
    """Stores subject schedules for the authenticated user.

    ``save_schedule`` reports expected failures through ``SaveOutcome``
    instead of raising.
    """

    async def save_schedule(self, request: SaveRequest) -> SaveOutcome: ...

    async def load_schedules(self, user_id: str) -> dict[str, Any]: ...
