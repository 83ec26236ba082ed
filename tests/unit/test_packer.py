from __future__ import annotations

from studyplan.engine.packer import pack_day
from studyplan.models import AllocationState, FreeInterval, Slot


def test_single_interval_two_hour_budget_yields_one_morning_slot() -> None:
    slots, state = pack_day(
        free_intervals=[FreeInterval(480, 1200)],
        day_budget=120,
        state=AllocationState(total_minutes_needed=120),
    )

    assert slots == [Slot(480, 600)]
    assert state.minutes_scheduled == 120
    assert state.is_complete


def test_too_short_interval_is_skipped_and_budget_carries_over() -> None:
    slots, state = pack_day(
        free_intervals=[FreeInterval(480, 505), FreeInterval(600, 720)],
        day_budget=60,
        state=AllocationState(total_minutes_needed=600),
    )

    assert slots == [Slot(600, 660)]
    assert state.minutes_scheduled == 60


def test_buffer_separates_consecutive_slots() -> None:
    slots, _ = pack_day(
        free_intervals=[FreeInterval(480, 1200)],
        day_budget=240,
        state=AllocationState(total_minutes_needed=1000),
    )

    assert slots == [Slot(480, 600), Slot(615, 735)]


def test_final_slot_takes_remaining_day_budget() -> None:
    slots, state = pack_day(
        free_intervals=[FreeInterval(480, 1200)],
        day_budget=150,
        state=AllocationState(total_minutes_needed=1000),
    )

    assert slots == [Slot(480, 600), Slot(615, 645)]
    assert state.minutes_scheduled == 150


def test_leftover_after_buffer_shorter_than_minimum_is_discarded() -> None:
    slots, _ = pack_day(
        free_intervals=[FreeInterval(480, 640)],
        day_budget=240,
        state=AllocationState(total_minutes_needed=1000),
    )

    assert slots == [Slot(480, 600)]


def test_leftover_after_buffer_long_enough_gets_a_slot() -> None:
    slots, _ = pack_day(
        free_intervals=[FreeInterval(480, 650)],
        day_budget=240,
        state=AllocationState(total_minutes_needed=1000),
    )

    assert slots == [Slot(480, 600), Slot(615, 650)]


def test_packing_stops_when_subject_need_is_met() -> None:
    slots, state = pack_day(
        free_intervals=[FreeInterval(480, 1200)],
        day_budget=300,
        state=AllocationState(total_minutes_needed=200, minutes_scheduled=140),
    )

    assert slots == [Slot(480, 540)]
    assert state.remaining_minutes == 0


def test_intervals_are_packed_in_ascending_start_order() -> None:
    slots, _ = pack_day(
        free_intervals=[FreeInterval(780, 1200), FreeInterval(480, 720)],
        day_budget=60,
        state=AllocationState(total_minutes_needed=60),
    )

    assert slots == [Slot(480, 540)]


def test_input_state_is_not_mutated() -> None:
    initial = AllocationState(total_minutes_needed=300)

    _, after = pack_day(free_intervals=[FreeInterval(480, 1200)], day_budget=120, state=initial)

    assert initial.minutes_scheduled == 0
    assert after.minutes_scheduled == 120


def test_zero_budget_or_no_intervals_emit_nothing() -> None:
    state = AllocationState(total_minutes_needed=120)

    assert pack_day(free_intervals=[FreeInterval(480, 1200)], day_budget=0, state=state) == ([], state)
    assert pack_day(free_intervals=[], day_budget=120, state=state) == ([], state)


def test_custom_slot_bounds_and_buffer() -> None:
    slots, _ = pack_day(
        free_intervals=[FreeInterval(540, 720)],
        day_budget=180,
        state=AllocationState(total_minutes_needed=180),
        min_slot_minutes=20,
        max_slot_minutes=50,
        buffer_minutes=10,
    )

    assert slots == [Slot(540, 590), Slot(600, 650), Slot(660, 710)]
