"""Domain-level validation rules for generation requests and config."""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from studyplan.clock import time_to_minutes
from studyplan.models import Subject

from .errors import ValidationReport


def validate_domain_inputs(payload: dict[str, Any], config: dict[str, Any]) -> ValidationReport:
    """Validate date formats, subject list coherence and resolved config."""
    report = ValidationReport()

    _validate_date(payload.get("startDate"), "$.startDate", report)
    _validate_date(payload.get("endDate"), "$.endDate", report)

    subjects = payload.get("subjects", [])
    names: set[str] = set()
    for idx, subject in enumerate(subjects if isinstance(subjects, list) else []):
        if not isinstance(subject, dict):
            continue
        name = subject.get("name")
        if not isinstance(name, str) or not name:
            report.add_error(
                code="MISSING_REQUIRED_FIELD",
                message="Subject name is required",
                field_path=f"$.subjects[{idx}].name",
            )
            continue
        if not math.isfinite(Subject.from_payload(subject).remaining_hours * 60):
            report.add_error(
                code="OUT_OF_RANGE",
                message=f"Study hours for {name} are out of range",
                field_path=f"$.subjects[{idx}]",
            )
        if name in names:
            report.add_error(
                code="DUPLICATE_SUBJECT_NAME",
                message=f"Duplicate subject name: {name}",
                field_path=f"$.subjects[{idx}].name",
            )
        names.add(name)

    selected = payload.get("selectedSubjects", [])
    for idx, name in enumerate(selected if isinstance(selected, list) else []):
        if not isinstance(name, str):
            report.add_error(
                code="INVALID_TYPE",
                message="Selected subjects must be subject names",
                field_path=f"$.selectedSubjects[{idx}]",
            )
            continue
        if name not in names:
            report.add_info(
                code="INFO_UNKNOWN_SUBJECT_SKIPPED",
                message=f"Selected subject {name!r} does not exist and will be skipped",
                field_path=f"$.selectedSubjects[{idx}]",
            )

    _validate_config(config, report)
    return report


def _validate_config(config: dict[str, Any], report: ValidationReport) -> None:
    window: list[int] = []
    for key in ("day_start", "day_end"):
        try:
            window.append(time_to_minutes(str(config.get(key))))
        except ValueError:
            report.add_error(
                code="INVALID_TIME_FORMAT",
                message=f"{key} must be an HH:MM time",
                field_path=f"$.config.{key}",
            )
    if len(window) == 2 and window[0] >= window[1]:
        report.add_error(
            code="INVALID_DAY_WINDOW",
            message="day_start must be before day_end",
            field_path="$.config",
        )

    min_slot = config.get("min_slot_minutes")
    max_slot = config.get("max_slot_minutes")
    for key, value in (("min_slot_minutes", min_slot), ("max_slot_minutes", max_slot)):
        if not _is_int(value) or value <= 0:
            report.add_error(
                code="INVALID_SLOT_BOUNDS",
                message=f"{key} must be a positive integer",
                field_path=f"$.config.{key}",
            )
    if _is_int(min_slot) and _is_int(max_slot) and min_slot > max_slot:
        report.add_error(
            code="INVALID_SLOT_BOUNDS",
            message="min_slot_minutes must be <= max_slot_minutes",
            field_path="$.config",
        )

    if not _is_int(config.get("buffer_minutes")):
        report.add_error(
            code="INVALID_TYPE",
            message="buffer_minutes must be an integer",
            field_path="$.config.buffer_minutes",
        )

    attempts = config.get("save_max_attempts")
    if not _is_int(attempts) or attempts < 1:
        report.add_error(
            code="OUT_OF_RANGE",
            message="save_max_attempts must be >= 1",
            field_path="$.config.save_max_attempts",
        )

    for key in ("save_retry_delay_seconds", "save_backoff_factor"):
        value = config.get(key)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            report.add_error(
                code="INVALID_TYPE",
                message=f"{key} must be a number",
                field_path=f"$.config.{key}",
            )
    backoff = config.get("save_backoff_factor")
    if isinstance(backoff, (int, float)) and not isinstance(backoff, bool) and backoff < 1:
        report.add_error(
            code="OUT_OF_RANGE",
            message="save_backoff_factor must be >= 1",
            field_path="$.config.save_backoff_factor",
        )


def _validate_date(raw: Any, path: str, report: ValidationReport) -> None:
    if not isinstance(raw, str) or not raw:
        return
    try:
        date.fromisoformat(raw)
    except ValueError:
        report.add_error(code="INVALID_DATE_FORMAT", message="Invalid date format", field_path=path)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
