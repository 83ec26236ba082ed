from __future__ import annotations

from datetime import date

from studyplan.engine.allocation import compute_day_budget, plan_day_budgets, round_half_up
from studyplan.models import DayAvailability, FreeInterval


def _day(day: int, *intervals: tuple[int, int]) -> DayAvailability:
    return DayAvailability(
        date=date(2026, 3, day),
        intervals=tuple(FreeInterval(start, end) for start, end in intervals),
    )


def test_round_half_up_rounds_ties_upward() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1
    assert round_half_up(119.6) == 120


def test_day_budget_is_proportional_to_free_share() -> None:
    assert compute_day_budget(available_minutes=720, total_available_minutes=1440, remaining_hours=4) == 120
    assert compute_day_budget(available_minutes=660, total_available_minutes=1380, remaining_hours=10) == 287
    assert compute_day_budget(available_minutes=0, total_available_minutes=1440, remaining_hours=4) == 0


def test_day_budget_without_total_availability_is_zero() -> None:
    assert compute_day_budget(available_minutes=0, total_available_minutes=0, remaining_hours=4) == 0


def test_plan_day_budgets_keeps_every_day() -> None:
    days = [_day(2, (480, 1200)), _day(3), _day(4, (480, 1200))]

    budgets = plan_day_budgets(days, total_available_minutes=1440, remaining_hours=3)

    assert budgets == {date(2026, 3, 2): 90, date(2026, 3, 3): 0, date(2026, 3, 4): 90}


def test_plan_day_budgets_rounding_error_is_bounded_by_day_count() -> None:
    days = [_day(2, (480, 1200)), _day(3, (480, 900)), _day(4, (600, 610))]
    total = sum(day.available_minutes for day in days)

    budgets = plan_day_budgets(days, total_available_minutes=total, remaining_hours=7.3)

    assert abs(sum(budgets.values()) - 7.3 * 60) <= len(days)
