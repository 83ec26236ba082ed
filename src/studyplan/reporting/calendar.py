"""Combine stored subject schedules into one calendar view."""

from __future__ import annotations

from collections import defaultdict
from typing import Any


def combine_schedules(subject_schedules: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten stored schedules into ``{date, slots: [{subject, startTime, endTime}]}``.

    Days without slots are dropped. Dates are ascending; within a day slots
    are ordered by start time, then subject name.
    """
    by_day: dict[str, list[dict[str, str]]] = defaultdict(list)
    for record in subject_schedules:
        if not isinstance(record, dict):
            continue
        subject = str(record.get("subject", ""))
        for day in record.get("schedule", []) or []:
            if not isinstance(day, dict):
                continue
            for slot in day.get("slots", []) or []:
                by_day[str(day.get("date", ""))].append(
                    {
                        "subject": subject,
                        "startTime": str(slot.get("startTime", "")),
                        "endTime": str(slot.get("endTime", "")),
                    }
                )

    return [
        {
            "date": day,
            "slots": sorted(slots, key=lambda item: (item["startTime"], item["subject"])),
        }
        for day, slots in sorted(by_day.items())
        if slots
    ]
