"""Reporting utilities."""

from .calendar import combine_schedules
from .reports import build_error_report, build_generation_report

__all__ = [
    "build_error_report",
    "build_generation_report",
    "combine_schedules",
]
