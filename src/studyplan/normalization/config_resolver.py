"""Resolve effective scheduler configuration from defaults and request overrides."""

from __future__ import annotations

from typing import Any

from studyplan.validation.errors import ValidationReport

DEFAULT_CONFIG: dict[str, Any] = {
    "day_start": "08:00",
    "day_end": "20:00",
    "min_slot_minutes": 30,
    "max_slot_minutes": 120,
    "buffer_minutes": 15,
    "save_max_attempts": 3,
    "save_retry_delay_seconds": 1.0,
    "save_backoff_factor": 1.0,
}

_NON_NEGATIVE_KEYS = ("buffer_minutes", "save_retry_delay_seconds")


def resolve_effective_config(source: Any, validation_report: ValidationReport) -> dict[str, Any]:
    """Merge request overrides over ``DEFAULT_CONFIG``.

    Unknown keys are reported as errors and ignored; negative buffer and
    delay values are clamped to zero with an info entry.
    """
    config = dict(DEFAULT_CONFIG)
    if not isinstance(source, dict):
        return config

    for key, value in source.items():
        if key not in DEFAULT_CONFIG:
            validation_report.add_error(
                code="INVALID_CONFIG_KEY",
                message=f"Config key {key!r} is not allowed",
                field_path=f"$.config.{key}",
                suggested_fix=f"Use one of: {', '.join(sorted(DEFAULT_CONFIG))}",
            )
            continue
        config[key] = value

    for key in _NON_NEGATIVE_KEYS:
        value = config[key]
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
            config[key] = 0
            validation_report.add_info(
                code="INFO_CLAMP_NON_NEGATIVE_APPLIED",
                message=f"{key} was clamped to 0",
                field_path=f"$.config.{key}",
                extra={"applied_value": 0},
            )

    return config
