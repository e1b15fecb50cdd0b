"""Services that feed the planner or persist its output."""

from .holidays import (
    build_holiday_set,
    fetch_holiday_feed,
    load_holiday_file,
    load_holidays,
    parse_holiday_feed,
)
from .plan_store import PlanNotFoundError, PlanStore

__all__ = [
    "build_holiday_set",
    "fetch_holiday_feed",
    "load_holiday_file",
    "load_holidays",
    "parse_holiday_feed",
    "PlanNotFoundError",
    "PlanStore",
]
