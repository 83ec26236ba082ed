"""Scheduling exceptions."""

from __future__ import annotations


class SchedulingError(Exception):
    """Base class for failures raised while planning a subject."""


class NoAvailabilityError(SchedulingError):
    """The requested date range has no free minutes at all."""

    def __init__(self, subject_name: str) -> None:
        self.subject_name = subject_name
        super().__init__(f"No available time slots in the selected date range for {subject_name}.")
