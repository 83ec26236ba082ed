"""Build CLI reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from studyplan.engine.sequencer import GenerationResult
from studyplan.validation import ValidationError


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def build_error_report(errors: list[ValidationError], code: str = "validation_error") -> dict[str, Any]:
    """Return a JSON-serializable error report."""
    return {
        "status": "error",
        "error": {
            "code": code,
            "message": errors[0].message if errors else "",
            "count": len(errors),
            "details": [err.as_dict() for err in errors],
        },
    }


def build_generation_report(
    result: GenerationResult,
    metrics: dict[str, Any],
    calendar: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Return a JSON-serializable report for a generation run, successful or not."""
    payload = result.as_dict()
    payload["generated_at"] = _now()
    payload["metrics"] = metrics
    if calendar is not None:
        payload["calendar"] = calendar
    return payload
