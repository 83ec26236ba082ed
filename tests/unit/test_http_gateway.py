from __future__ import annotations

import asyncio
from datetime import date
from unittest.mock import Mock

import pytest
import requests

from studyplan.models import ScheduleDay, Slot, UnavailableInterval
from studyplan.persistence import GatewayError, HttpScheduleGateway, OutcomeKind, SaveRequest
from studyplan.persistence.http import classify_response


def _response(status: int, payload: object = None, reason: str = "") -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status
    response.reason = reason
    if payload is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


def _request() -> SaveRequest:
    day = date(2026, 3, 2)
    return SaveRequest(
        subject="Math",
        start_date=day,
        end_date=day,
        schedule=(ScheduleDay(date=day, slots=(Slot(480, 600),)),),
        unavailable=(UnavailableInterval(date=day, start_minute=720, end_minute=780),),
    )


def test_success_response_returns_stored_record() -> None:
    outcome = classify_response(_response(200, {"subjectSchedule": {"subject": "Math"}}))

    assert outcome.ok
    assert outcome.record == {"subjectSchedule": {"subject": "Math"}}


@pytest.mark.parametrize(
    ("status", "payload", "kind", "error"),
    [
        (400, {"error": "Invalid token"}, OutcomeKind.AUTH, "Invalid token"),
        (401, {"error": "Unauthorized"}, OutcomeKind.AUTH, "Unauthorized"),
        (403, None, OutcomeKind.AUTH, "Forbidden"),
        (400, {"error": "Validation failed", "details": "date missing"}, OutcomeKind.VALIDATION, "Validation failed - date missing"),
        (400, {"error": "schedule must be an array"}, OutcomeKind.VALIDATION, "schedule must be an array"),
        (429, None, OutcomeKind.TRANSIENT, "Too Many Requests"),
        (500, {"error": "Internal server error"}, OutcomeKind.TRANSIENT, "Internal server error"),
        (503, None, OutcomeKind.TRANSIENT, "Service Unavailable"),
    ],
)
def test_error_responses_map_to_outcome_kinds(status: int, payload: object, kind: OutcomeKind, error: str) -> None:
    reasons = {403: "Forbidden", 429: "Too Many Requests", 503: "Service Unavailable"}

    outcome = classify_response(_response(status, payload, reasons.get(status, "")))

    assert outcome.kind is kind
    assert outcome.error == error


def test_save_posts_payload_with_bearer_token_and_timeout() -> None:
    session = Mock(spec=requests.Session)
    session.post.return_value = _response(200, {"ok": True})
    gateway = HttpScheduleGateway("http://localhost:5000/", "secret", session=session)

    outcome = asyncio.run(gateway.save_schedule(_request()))

    assert outcome.ok
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args == ("http://localhost:5000/api/schedules",)
    assert kwargs["headers"] == {"Authorization": "Bearer secret"}
    assert kwargs["timeout"] == 10
    assert kwargs["json"] == {
        "subject": "Math",
        "startDate": "2026-03-02",
        "endDate": "2026-03-02",
        "schedule": [{"date": "2026-03-02", "slots": [{"startTime": "08:00", "endTime": "10:00"}]}],
        "unavailableTimes": [{"date": "2026-03-02", "startTime": "12:00", "endTime": "13:00"}],
    }


def test_network_errors_are_transient() -> None:
    session = Mock(spec=requests.Session)
    session.post.side_effect = requests.exceptions.Timeout("read timed out")
    gateway = HttpScheduleGateway("http://api", "t", session=session)

    outcome = asyncio.run(gateway.save_schedule(_request()))

    assert outcome.kind is OutcomeKind.TRANSIENT
    assert "read timed out" in outcome.error


def test_load_schedules_returns_lists_even_when_missing() -> None:
    session = Mock(spec=requests.Session)
    session.get.return_value = _response(200, {"subjectSchedules": [{"subject": "Math"}], "unavailableTimes": None})
    gateway = HttpScheduleGateway("http://api", "t", session=session)

    stored = asyncio.run(gateway.load_schedules("u1"))

    assert stored == {"subjectSchedules": [{"subject": "Math"}], "unavailableTimes": []}


def test_load_schedules_failure_raises_gateway_error() -> None:
    session = Mock(spec=requests.Session)
    session.get.side_effect = requests.exceptions.ConnectionError("refused")
    gateway = HttpScheduleGateway("http://api", "t", session=session)

    with pytest.raises(GatewayError):
        asyncio.run(gateway.load_schedules("u1"))
