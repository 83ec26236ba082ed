"""Validation for generation request payload."""

from __future__ import annotations

from datetime import date
from typing import Any

from .errors import ValidationError

_REQUIRED_DATE_FIELDS = ("startDate", "endDate")


def _iso_date(value: Any) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def validate_generation_request(payload: dict[str, Any]) -> list[ValidationError]:
    """Validate generation request shape.

    Errors come in the order the caller sees them: missing dates, inverted
    date range, then an empty selection.
    """
    errors: list[ValidationError] = []

    for field in _REQUIRED_DATE_FIELDS:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(
                ValidationError(
                    code="missing_field",
                    message="Please select a start and end date.",
                    path=f"$.{field}",
                )
            )
        elif not isinstance(value, str):
            errors.append(
                ValidationError(
                    code="invalid_type",
                    message=f"Field must be an ISO date string: {field}",
                    path=f"$.{field}",
                )
            )

    start = _iso_date(payload.get("startDate"))
    end = _iso_date(payload.get("endDate"))
    if start is not None and end is not None and start > end:
        errors.append(
            ValidationError(
                code="invalid_date_window",
                message="End date must be after start date.",
                path="$",
            )
        )

    for field in ("subjects", "selectedSubjects", "unavailableTimes"):
        value = payload.get(field)
        if value is not None and not isinstance(value, list):
            errors.append(
                ValidationError(
                    code="invalid_type",
                    message=f"Field must be an array: {field}",
                    path=f"$.{field}",
                )
            )

    selected = payload.get("selectedSubjects")
    if not isinstance(selected, list) or not selected:
        errors.append(
            ValidationError(
                code="no_subjects_selected",
                message="Please select at least one subject to schedule.",
                path="$.selectedSubjects",
            )
        )

    return errors
