"""Plan one subject: availability -> day budgets -> packed slots."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from studyplan.clock import time_to_minutes
from studyplan.errors import NoAvailabilityError
from studyplan.models import AllocationState, DayAvailability, ScheduleDay, Subject, UnavailableInterval
from studyplan.normalization.config_resolver import DEFAULT_CONFIG

from .allocation import plan_day_budgets
from .availability import build_daily_availability
from .packer import pack_day

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DayAllocation:
    """Planning phase output for one subject."""

    days: tuple[DayAvailability, ...]
    budgets: dict[date, int]
    total_available_minutes: int


@dataclass(frozen=True, slots=True)
class SubjectPlan:
    subject: Subject
    days: tuple[ScheduleDay, ...]
    state: AllocationState
    total_available_minutes: int

    @property
    def scheduled_minutes(self) -> int:
        return sum(day.scheduled_minutes for day in self.days)


def _config_value(config: dict[str, Any], key: str) -> Any:
    return config.get(key, DEFAULT_CONFIG[key])


def plan_day_allocation(
    subject: Subject,
    *,
    start_date: str | date,
    end_date: str | date,
    unavailable: list[UnavailableInterval],
    config: dict[str, Any] | None = None,
) -> DayAllocation:
    """Resolve availability over the range and split the subject's hours into day budgets.

    Raises ``NoAvailabilityError`` when the range has no free minute at all.
    Availability only accounts for the caller-supplied unavailable intervals.
    """
    config = config or {}
    days, total_available = build_daily_availability(
        start_date=start_date,
        end_date=end_date,
        day_start=time_to_minutes(str(_config_value(config, "day_start"))),
        day_end=time_to_minutes(str(_config_value(config, "day_end"))),
        unavailable=unavailable,
    )
    if total_available == 0:
        raise NoAvailabilityError(subject.name)

    budgets = plan_day_budgets(
        days,
        total_available_minutes=total_available,
        remaining_hours=subject.remaining_hours,
    )
    return DayAllocation(days=tuple(days), budgets=budgets, total_available_minutes=total_available)


def pack_subject_days(
    subject: Subject,
    allocation: DayAllocation,
    *,
    config: dict[str, Any] | None = None,
) -> tuple[tuple[ScheduleDay, ...], AllocationState]:
    """Pack every day of an allocation, threading the allocation state through.

    Every date is present in the result; days without budget get no slots.
    """
    config = config or {}
    min_slot = int(_config_value(config, "min_slot_minutes"))
    max_slot = int(_config_value(config, "max_slot_minutes"))
    buffer = int(_config_value(config, "buffer_minutes"))

    # Floor keeps the total within remaining_hours * 60 for fractional hours.
    state = AllocationState(total_minutes_needed=math.floor(subject.remaining_hours * 60 + 1e-9))
    schedule: list[ScheduleDay] = []
    for day in allocation.days:
        budget = allocation.budgets[day.date]
        if budget <= 0:
            schedule.append(ScheduleDay(date=day.date))
            continue
        slots, state = pack_day(
            free_intervals=list(day.intervals),
            day_budget=budget,
            state=state,
            min_slot_minutes=min_slot,
            max_slot_minutes=max_slot,
            buffer_minutes=buffer,
        )
        logger.debug(
            "%s %s: budget=%d scheduled=%d in %d slot(s)",
            subject.name,
            day.date.isoformat(),
            budget,
            sum(slot.minutes for slot in slots),
            len(slots),
        )
        schedule.append(ScheduleDay(date=day.date, slots=tuple(slots)))

    return tuple(schedule), state


def plan_subject_schedule(
    subject: Subject,
    *,
    start_date: str | date,
    end_date: str | date,
    unavailable: list[UnavailableInterval],
    config: dict[str, Any] | None = None,
) -> SubjectPlan:
    """Build the day-by-day schedule for one subject."""
    allocation = plan_day_allocation(
        subject,
        start_date=start_date,
        end_date=end_date,
        unavailable=unavailable,
        config=config,
    )
    days, state = pack_subject_days(subject, allocation, config=config)
    return SubjectPlan(
        subject=subject,
        days=days,
        state=state,
        total_available_minutes=allocation.total_available_minutes,
    )
