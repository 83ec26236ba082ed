"""Plan summary metrics for a generation run."""

from __future__ import annotations

from typing import Any

from studyplan.engine.runner import SubjectPlan


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def summarize_plan(plan: SubjectPlan) -> dict[str, Any]:
    """Requested vs scheduled minutes for one subject.

    The shortfall comes from per-day rounding and from free segments too
    short for a minimum slot.
    """
    requested = plan.state.total_minutes_needed
    scheduled = plan.scheduled_minutes
    slot_minutes = [slot.minutes for day in plan.days for slot in day.slots]
    return {
        "requested_minutes": requested,
        "scheduled_minutes": scheduled,
        "shortfall_minutes": max(0, requested - scheduled),
        "coverage": _clamp01(scheduled / requested) if requested > 0 else 1.0,
        "days_in_range": len(plan.days),
        "days_used": sum(1 for day in plan.days if day.slots),
        "slot_count": len(slot_minutes),
        "longest_slot_minutes": max(slot_minutes, default=0),
        "available_minutes": plan.total_available_minutes,
    }


def collect_metrics(plans: dict[str, SubjectPlan]) -> dict[str, Any]:
    """Per-subject summaries plus run totals."""
    by_subject = {name: summarize_plan(plan) for name, plan in plans.items()}
    requested = sum(item["requested_minutes"] for item in by_subject.values())
    scheduled = sum(item["scheduled_minutes"] for item in by_subject.values())
    return {
        "by_subject": by_subject,
        "subjects_planned": len(by_subject),
        "total_requested_minutes": requested,
        "total_scheduled_minutes": scheduled,
        "coverage": _clamp01(scheduled / requested) if requested > 0 else 1.0,
    }
