"""REST gateway for a remote schedule service.

Talks to ``<base_url>/api/schedules`` with a bearer token:
- ``POST`` saves one subject schedule and the user's unavailable times,
- ``GET`` returns every stored subject schedule plus unavailable times.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from .gateway import GatewayError, OutcomeKind, SaveOutcome, SaveRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10
_AUTH_ERROR_MESSAGES = {"Invalid token", "No token provided"}


def _response_payload(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def classify_response(response: requests.Response) -> SaveOutcome:
    """Map an HTTP response onto a tagged save outcome."""
    payload = _response_payload(response)
    status = response.status_code
    if 200 <= status < 300:
        return SaveOutcome.success(payload)

    error = str(payload.get("error") or response.reason or f"HTTP {status}")
    details = payload.get("details")
    if details:
        error = f"{error} - {details}"

    if status in (401, 403) or payload.get("error") in _AUTH_ERROR_MESSAGES:
        return SaveOutcome.failure(OutcomeKind.AUTH, error)
    if 400 <= status < 500 and status not in (408, 429):
        return SaveOutcome.failure(OutcomeKind.VALIDATION, error)
    return SaveOutcome.failure(OutcomeKind.TRANSIENT, error)


class HttpScheduleGateway:
    """Gateway backed by the schedule REST API.

    ``requests`` is blocking; calls run in a worker thread so the event loop
    keeps its single sequential flow.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = f"{base_url.rstrip('/')}/api/schedules"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Authorization": f"Bearer {token}"}

    def _post(self, payload: dict[str, Any]) -> SaveOutcome:
        try:
            response = self.session.post(self.endpoint, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.warning("POST %s failed: %s", self.endpoint, exc)
            return SaveOutcome.failure(OutcomeKind.TRANSIENT, str(exc))
        return classify_response(response)

    def _get(self) -> dict[str, Any]:
        try:
            response = self.session.get(self.endpoint, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise GatewayError(f"Failed to fetch schedules: {exc}") from exc
        payload = _response_payload(response)
        return {
            "subjectSchedules": payload.get("subjectSchedules") or [],
            "unavailableTimes": payload.get("unavailableTimes") or [],
        }

    async def save_schedule(self, request: SaveRequest) -> SaveOutcome:
        return await asyncio.to_thread(self._post, request.as_dict())

    async def load_schedules(self, user_id: str) -> dict[str, Any]:
        # The service scopes results by token; user_id is informational here.
        logger.debug("Loading schedules for %s from %s", user_id, self.endpoint)
        return await asyncio.to_thread(self._get)
