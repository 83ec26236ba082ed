"""Scheduling engine."""

from .allocation import compute_day_budget, plan_day_budgets, round_half_up
from .availability import build_daily_availability, resolve_free_intervals
from .packer import pack_day
from .runner import DayAllocation, SubjectPlan, pack_subject_days, plan_day_allocation, plan_subject_schedule
from .sequencer import GenerationResult, SubjectRun, SubjectState, generate_schedules

__all__ = [
    "DayAllocation",
    "GenerationResult",
    "SubjectPlan",
    "SubjectRun",
    "SubjectState",
    "build_daily_availability",
    "compute_day_budget",
    "generate_schedules",
    "pack_day",
    "pack_subject_days",
    "plan_day_allocation",
    "plan_day_budgets",
    "plan_subject_schedule",
    "resolve_free_intervals",
    "round_half_up",
]
