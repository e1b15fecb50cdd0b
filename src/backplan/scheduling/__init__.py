"""Scheduling domain package: working-day policy and backward scheduler."""

from .calendar_policy import (
    count_working_days,
    is_working_day,
    iter_working_days_backward,
    last_working_day_on_or_before,
)
from .errors import InvalidInputError, PlannerError, UnschedulableConfigurationError
from .models import Holiday, ScheduleConfig, Task
from .scheduler import project_start, recompute, schedule_all

__all__ = [
    "Holiday",
    "Task",
    "ScheduleConfig",
    "PlannerError",
    "InvalidInputError",
    "UnschedulableConfigurationError",
    "is_working_day",
    "last_working_day_on_or_before",
    "iter_working_days_backward",
    "count_working_days",
    "schedule_all",
    "recompute",
    "project_start",
]
