"""Normalization for incoming generation requests."""

from __future__ import annotations

import logging
from typing import Any

from studyplan.clock import parse_date, time_to_minutes
from studyplan.models import Subject, UnavailableInterval

logger = logging.getLogger(__name__)


def normalize_request(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a normalized copy of the request with list/dict defaults filled in."""
    normalized = dict(payload)
    for key in ("subjects", "unavailableTimes", "selectedSubjects"):
        if not isinstance(normalized.get(key), list):
            normalized[key] = []
    if not isinstance(normalized.get("config"), dict):
        normalized["config"] = {}
    return normalized


def extract_subjects(payload: dict[str, Any]) -> list[Subject]:
    return [Subject.from_payload(item) for item in payload.get("subjects", []) if isinstance(item, dict)]


def _parse_unavailable(item: Any) -> UnavailableInterval | None:
    if not isinstance(item, dict):
        return None
    raw_date = item.get("date")
    raw_start = item.get("startTime")
    raw_end = item.get("endTime")
    if not raw_date or not raw_start or not raw_end:
        return None
    try:
        interval = UnavailableInterval(
            date=parse_date(str(raw_date)),
            start_minute=time_to_minutes(str(raw_start)),
            end_minute=time_to_minutes(str(raw_end)),
        )
    except ValueError:
        return None
    return interval if interval.is_valid else None


def extract_unavailable_intervals(payload: dict[str, Any]) -> list[UnavailableInterval]:
    """Parse ``unavailableTimes``, silently dropping incomplete or inverted entries."""
    valid: list[UnavailableInterval] = []
    for idx, item in enumerate(payload.get("unavailableTimes", [])):
        interval = _parse_unavailable(item)
        if interval is None:
            logger.debug("Dropping unavailable time #%d: %r", idx, item)
            continue
        valid.append(interval)
    return valid
