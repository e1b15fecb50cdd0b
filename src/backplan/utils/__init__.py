"""Utility helpers for the planner."""

from .datetime_utils import format_calendar_date, parse_calendar_date, to_calendar_date
from .filenames import build_plan_filename, slugify_filename

__all__ = [
    "build_plan_filename",
    "slugify_filename",
    "format_calendar_date",
    "parse_calendar_date",
    "to_calendar_date",
]
