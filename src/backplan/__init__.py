"""Backward working-day planner: schedule sequential tasks from a deadline."""

from .app import configure_logging, create_plan_store, create_session, open_session
from .scheduling import (
    Holiday,
    InvalidInputError,
    PlannerError,
    ScheduleConfig,
    Task,
    UnschedulableConfigurationError,
    is_working_day,
    last_working_day_on_or_before,
    recompute,
    schedule_all,
)
from .schemas import PlanDocument, PlanFormatError, PlanTask
from .session import PlannerSession, PlanRow, SessionState

__all__ = [
    "configure_logging",
    "create_plan_store",
    "create_session",
    "open_session",
    "Holiday",
    "Task",
    "ScheduleConfig",
    "PlannerError",
    "InvalidInputError",
    "UnschedulableConfigurationError",
    "is_working_day",
    "last_working_day_on_or_before",
    "schedule_all",
    "recompute",
    "PlanDocument",
    "PlanTask",
    "PlanFormatError",
    "PlannerSession",
    "PlanRow",
    "SessionState",
]
