"""Free-time resolution for the daily study window.

Two steps:
- per date, subtract blocked intervals from the daily window,
- across the requested range, collect per-day availability and its total.
"""

from __future__ import annotations

import logging
from datetime import date

from studyplan.clock import iter_days, parse_date
from studyplan.models import DayAvailability, FreeInterval, UnavailableInterval

logger = logging.getLogger(__name__)


def _subtract(free: FreeInterval, blocked: UnavailableInterval) -> list[FreeInterval]:
    if blocked.end_minute <= free.start or blocked.start_minute >= free.end:
        return [free]
    remainder: list[FreeInterval] = []
    if blocked.start_minute > free.start:
        remainder.append(FreeInterval(start=free.start, end=blocked.start_minute))
    if blocked.end_minute < free.end:
        remainder.append(FreeInterval(start=blocked.end_minute, end=free.end))
    return remainder


def resolve_free_intervals(
    *,
    day_start: int,
    day_end: int,
    unavailable: list[UnavailableInterval],
) -> list[FreeInterval]:
    """Subtract blocked intervals from ``[day_start, day_end)``.

    Blocks are applied in input order, each one against the already trimmed
    set. The result is disjoint but not sorted; callers sort before packing.
    """
    free = [FreeInterval(start=day_start, end=day_end)]
    for blocked in unavailable:
        free = [piece for interval in free for piece in _subtract(interval, blocked)]
    return free


def build_daily_availability(
    *,
    start_date: str | date,
    end_date: str | date,
    day_start: int,
    day_end: int,
    unavailable: list[UnavailableInterval],
) -> tuple[list[DayAvailability], int]:
    """Resolve free time for each date in range.

    Returns the per-day availability in ascending date order and the total
    available minutes across the range.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start > end:
        raise ValueError(f"start_date {start.isoformat()} is after end_date {end.isoformat()}")

    by_date: dict[date, list[UnavailableInterval]] = {}
    for blocked in unavailable:
        by_date.setdefault(blocked.date, []).append(blocked)

    days: list[DayAvailability] = []
    total_available = 0
    for day in iter_days(start, end):
        intervals = resolve_free_intervals(
            day_start=day_start,
            day_end=day_end,
            unavailable=by_date.get(day, []),
        )
        availability = DayAvailability(date=day, intervals=tuple(intervals))
        total_available += availability.available_minutes
        days.append(availability)

    logger.debug(
        "Resolved availability for %d day(s) from %s to %s: %d free minutes",
        len(days),
        start.isoformat(),
        end.isoformat(),
        total_available,
    )
    return days, total_available
