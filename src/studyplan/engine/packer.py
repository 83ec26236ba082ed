"""Pack a day's budget into bounded study slots."""

from __future__ import annotations

from studyplan.models import AllocationState, FreeInterval, Slot

DEFAULT_MIN_SLOT_MINUTES = 30
DEFAULT_MAX_SLOT_MINUTES = 120
DEFAULT_BUFFER_MINUTES = 15


def pack_day(
    *,
    free_intervals: list[FreeInterval],
    day_budget: int,
    state: AllocationState,
    min_slot_minutes: int = DEFAULT_MIN_SLOT_MINUTES,
    max_slot_minutes: int = DEFAULT_MAX_SLOT_MINUTES,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> tuple[list[Slot], AllocationState]:
    """Emit slots for one day and return them with the updated allocation state.

    Deterministic behaviour:
    - intervals are walked in ascending start order,
    - a slot shorter than ``min_slot_minutes`` is never emitted; the rest of
      that interval is abandoned and the budget carries to the next one,
    - a buffer follows each slot when budget and interval room remain; it
      consumes interval time only.
    """
    slots: list[Slot] = []
    remaining_day = day_budget

    for interval in sorted(free_intervals, key=lambda item: (item.start, item.end)):
        if remaining_day <= 0 or state.is_complete:
            break
        cursor = interval.start
        while cursor < interval.end and remaining_day > 0 and not state.is_complete:
            slot_minutes = min(
                max_slot_minutes,
                interval.end - cursor,
                state.remaining_minutes,
                remaining_day,
            )
            if slot_minutes < min_slot_minutes:
                break

            slots.append(Slot(start_minute=cursor, end_minute=cursor + slot_minutes))
            cursor += slot_minutes
            remaining_day -= slot_minutes
            state = state.advance(slot_minutes)

            if cursor < interval.end and remaining_day > 0:
                cursor += buffer_minutes

    return slots, state
