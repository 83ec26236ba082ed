"""Local schedule stores implementing the gateway contract.

Both stores keep one schedule per (user, subject) and one unavailable-time
list per user, replaced on every save.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

from studyplan.io import read_json, write_json

from .gateway import GatewayError, OutcomeKind, SaveOutcome, SaveRequest

logger = logging.getLogger(__name__)


def _empty_state() -> dict[str, Any]:
    return {"subjectSchedules": [], "userSchedules": []}


def _check_payload(payload: dict[str, Any]) -> str | None:
    if not payload.get("subject") or not payload.get("startDate") or not payload.get("endDate"):
        return "subject, startDate, and endDate are required"
    if not isinstance(payload.get("schedule"), list):
        return "schedule must be an array"
    if not isinstance(payload.get("unavailableTimes"), list):
        return "unavailableTimes must be an array"
    return None


class InMemoryScheduleStore:
    """Schedule store held in a dict; the base for the JSON file store.

    ``expired`` simulates revoked credentials: every save answers with an
    auth outcome.
    """

    def __init__(self, user_id: str = "local", *, expired: bool = False) -> None:
        self.user_id = user_id
        self.expired = expired
        self.save_calls = 0
        self._state: dict[str, Any] = _empty_state()

    def _load(self) -> dict[str, Any]:
        return self._state

    def _dump(self, state: dict[str, Any]) -> None:
        self._state = state

    def _upsert(self, payload: dict[str, Any]) -> dict[str, Any]:
        state = deepcopy(self._load())
        record = {
            "userId": self.user_id,
            "subject": payload["subject"],
            "startDate": payload["startDate"],
            "endDate": payload["endDate"],
            "schedule": payload["schedule"],
        }
        schedules = state.setdefault("subjectSchedules", [])
        for idx, existing in enumerate(schedules):
            if existing.get("userId") == self.user_id and existing.get("subject") == payload["subject"]:
                logger.debug("Updating stored schedule for %s", payload["subject"])
                schedules[idx] = record
                break
        else:
            logger.debug("Creating stored schedule for %s", payload["subject"])
            schedules.append(record)

        user_schedule = {"userId": self.user_id, "unavailableTimes": payload["unavailableTimes"]}
        users = state.setdefault("userSchedules", [])
        for idx, existing in enumerate(users):
            if existing.get("userId") == self.user_id:
                users[idx] = user_schedule
                break
        else:
            users.append(user_schedule)

        self._dump(state)
        return {"subjectSchedule": record, "userSchedule": user_schedule}

    async def save_schedule(self, request: SaveRequest) -> SaveOutcome:
        self.save_calls += 1
        if self.expired:
            return SaveOutcome.failure(OutcomeKind.AUTH, "Invalid token")
        payload = request.as_dict()
        problem = _check_payload(payload)
        if problem:
            return SaveOutcome.failure(OutcomeKind.VALIDATION, problem)
        return SaveOutcome.success(self._upsert(payload))

    async def load_schedules(self, user_id: str) -> dict[str, Any]:
        return self.collect(user_id)

    def collect(self, user_id: str) -> dict[str, Any]:
        state = self._load()
        schedules = [
            deepcopy(item) for item in state.get("subjectSchedules", []) if item.get("userId") == user_id
        ]
        unavailable: list[dict[str, Any]] = []
        for item in state.get("userSchedules", []):
            if item.get("userId") == user_id:
                unavailable = deepcopy(item.get("unavailableTimes", []))
                break
        return {"subjectSchedules": schedules, "unavailableTimes": unavailable}


class JsonScheduleStore(InMemoryScheduleStore):
    """Schedule store persisted to a JSON file, rewritten after each save."""

    def __init__(self, path: str | Path, user_id: str = "local", *, expired: bool = False) -> None:
        super().__init__(user_id, expired=expired)
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return _empty_state()
        return read_json(self.path)

    def _dump(self, state: dict[str, Any]) -> None:
        write_json(self.path, state)

    async def save_schedule(self, request: SaveRequest) -> SaveOutcome:
        try:
            return await super().save_schedule(request)
        except (OSError, ValueError) as exc:
            logger.error("Could not write schedule store %s: %s", self.path, exc)
            return SaveOutcome.failure(OutcomeKind.TRANSIENT, str(exc))

    async def load_schedules(self, user_id: str) -> dict[str, Any]:
        try:
            return self.collect(user_id)
        except (OSError, ValueError) as exc:
            logger.error("Could not read schedule store %s: %s", self.path, exc)
            raise GatewayError(f"Failed to read schedule store {self.path}: {exc}") from exc
