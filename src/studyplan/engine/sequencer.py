"""Sequential multi-subject generation with persistence hand-off.

Each selected subject runs PLANNING -> PACKING -> SAVING -> DONE | ABORTED.
An abort stops the whole run; subjects already DONE stay persisted.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from studyplan.clock import parse_date
from studyplan.errors import NoAvailabilityError
from studyplan.models import Subject, UnavailableInterval
from studyplan.normalization import (
    extract_subjects,
    extract_unavailable_intervals,
    normalize_request,
    resolve_effective_config,
)
from studyplan.persistence.gateway import OutcomeKind, SaveRequest, ScheduleGateway
from studyplan.persistence.retry import RetryPolicy, Sleep, save_with_retry
from studyplan.validation import ValidationReport, validate_domain_inputs, validate_generation_request

from .runner import SubjectPlan, pack_subject_days, plan_day_allocation

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."


class SubjectState(str, Enum):
    PLANNING = "planning"
    PACKING = "packing"
    SAVING = "saving"
    DONE = "done"
    ABORTED = "aborted"
    SKIPPED = "skipped"


@dataclass(slots=True)
class SubjectRun:
    name: str
    state: SubjectState = SubjectState.PLANNING
    transitions: list[SubjectState] = field(default_factory=list)
    attempts: int = 0
    message: str = ""

    def move(self, state: SubjectState) -> None:
        self.state = state
        self.transitions.append(state)

    def as_dict(self) -> dict[str, Any]:
        return {
            "subject": self.name,
            "state": self.state.value,
            "transitions": [item.value for item in self.transitions],
            "attempts": self.attempts,
            "message": self.message,
        }


@dataclass(slots=True)
class GenerationResult:
    """Outcome of a whole run; ``message`` is the single caller-facing text."""

    code: str = "ok"
    message: str = ""
    runs: list[SubjectRun] = field(default_factory=list)
    plans: dict[str, SubjectPlan] = field(default_factory=dict)
    unavailable: list[UnavailableInterval] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)
    validation_report: ValidationReport = field(default_factory=ValidationReport)

    @property
    def ok(self) -> bool:
        return self.code == "ok"

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": "ok" if self.ok else "error",
            "code": self.code,
            "message": self.message,
            "subjects": [run.as_dict() for run in self.runs],
            "schedules": {
                name: [day.as_dict() for day in plan.days] for name, plan in self.plans.items()
            },
            "unavailableTimes": [interval.as_dict() for interval in self.unavailable],
            "effective_config": self.config,
            "validation_report": self.validation_report.as_dict(),
        }


def _prepare(payload: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any], ValidationReport]:
    normalized = normalize_request(payload)
    report = ValidationReport()
    report.add_request_errors(validate_generation_request(normalized))
    config = resolve_effective_config(normalized.get("config"), report)
    report.extend(validate_domain_inputs(normalized, config))
    return normalized, config, report


async def generate_schedules(
    payload: dict[str, Any],
    gateway: ScheduleGateway,
    *,
    sleep: Sleep = asyncio.sleep,
) -> GenerationResult:
    """Plan, pack and save every selected subject in caller order."""
    normalized, config, report = _prepare(payload)
    result = GenerationResult(config=config, validation_report=report)
    if report.errors:
        result.code = "validation_error"
        result.message = report.first_message() or "Invalid request"
        logger.info("Generation rejected: %s", result.message)
        return result

    start_date = parse_date(normalized["startDate"])
    end_date = parse_date(normalized["endDate"])
    subjects: dict[str, Subject] = {}
    for subject in extract_subjects(normalized):
        subjects.setdefault(subject.name, subject)
    unavailable = extract_unavailable_intervals(normalized)
    result.unavailable = unavailable
    policy = RetryPolicy.from_config(config)

    for name in normalized["selectedSubjects"]:
        run = SubjectRun(name=str(name))
        result.runs.append(run)

        subject = subjects.get(run.name)
        if subject is None:
            run.move(SubjectState.SKIPPED)
            run.message = "Subject not found"
            logger.info("Skipping %s: subject not found", run.name)
            continue
        if subject.remaining_hours <= 0:
            run.move(SubjectState.SKIPPED)
            run.message = "No remaining hours to schedule"
            logger.info("Skipping %s: no remaining hours", run.name)
            continue

        run.move(SubjectState.PLANNING)
        logger.info("Planning %s: remaining_hours=%s", subject.name, subject.remaining_hours)
        try:
            allocation = plan_day_allocation(
                subject,
                start_date=start_date,
                end_date=end_date,
                unavailable=unavailable,
                config=config,
            )
        except NoAvailabilityError as exc:
            run.move(SubjectState.ABORTED)
            run.message = str(exc)
            result.code = "no_availability"
            result.message = str(exc)
            logger.info("Aborting run at %s: %s", subject.name, exc)
            return result

        run.move(SubjectState.PACKING)
        days, state = pack_subject_days(subject, allocation, config=config)
        plan = SubjectPlan(
            subject=subject,
            days=days,
            state=state,
            total_available_minutes=allocation.total_available_minutes,
        )
        result.plans[subject.name] = plan

        run.move(SubjectState.SAVING)
        request = SaveRequest(
            subject=subject.name,
            start_date=start_date,
            end_date=end_date,
            schedule=plan.days,
            unavailable=tuple(unavailable),
        )
        saved = await save_with_retry(gateway, request, policy, sleep=sleep)
        run.attempts = saved.attempts

        if saved.outcome.ok:
            run.move(SubjectState.DONE)
            logger.info(
                "Saved %s: %d minute(s) in %d attempt(s)",
                subject.name,
                plan.scheduled_minutes,
                saved.attempts,
            )
            continue

        run.move(SubjectState.ABORTED)
        if saved.outcome.kind is OutcomeKind.AUTH:
            result.code = "auth_expired"
            result.message = SESSION_EXPIRED_MESSAGE
        else:
            result.code = "save_failed"
            result.message = f"Failed to save schedule for {subject.name}: {saved.outcome.error}"
        run.message = result.message
        logger.error("Aborting run at %s: %s", subject.name, result.message)
        return result

    logger.info("All selected subjects scheduled successfully")
    return result
