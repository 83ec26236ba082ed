"""Minute-of-day and calendar date helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str) -> int:
    """Convert an ``HH:MM`` string into minutes since midnight.

    Raises ``ValueError`` for anything that is not a valid wall-clock time.
    ``24:00`` is accepted as the end of day.
    """
    if not isinstance(value, str):
        raise ValueError(f"Time must be a string: {value!r}")
    hours_raw, sep, minutes_raw = value.strip().partition(":")
    if not sep or not hours_raw.isdigit() or not minutes_raw.isdigit():
        raise ValueError(f"Invalid time format (expected HH:MM): {value!r}")
    hours = int(hours_raw)
    minutes = int(minutes_raw)
    if minutes >= 60 or hours * 60 + minutes > MINUTES_PER_DAY:
        raise ValueError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded ``HH:MM``."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def parse_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def iter_days(start: date, end: date) -> list[date]:
    """Return every date from ``start`` to ``end`` inclusive."""
    days: list[date] = []
    cursor = start
    while cursor <= end:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days
