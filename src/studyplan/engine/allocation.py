"""Spread a subject's remaining hours over days by their share of free time."""

from __future__ import annotations

import math
from datetime import date

from studyplan.models import DayAvailability


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going up (``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


def compute_day_budget(
    *,
    available_minutes: int,
    total_available_minutes: int,
    remaining_hours: float,
) -> int:
    """Minutes allotted to one day.

    Formula:
    - day_budget = round((available / total_available) * remaining_hours * 60)
    """
    if total_available_minutes <= 0:
        return 0
    share = available_minutes / total_available_minutes
    return round_half_up(share * remaining_hours * 60)


def plan_day_budgets(
    days: list[DayAvailability],
    *,
    total_available_minutes: int,
    remaining_hours: float,
) -> dict[date, int]:
    """Return per-date budgets, one entry per day (zero or negative when the day is skipped).

    Rounding is independent per day, so the sum can drift from
    ``remaining_hours * 60`` by at most one minute per day.
    """
    return {
        day.date: compute_day_budget(
            available_minutes=day.available_minutes,
            total_available_minutes=total_available_minutes,
            remaining_hours=remaining_hours,
        )
        for day in days
    }
