"""Caller-owned planning session.

A :class:`PlannerSession` holds the schedule configuration, the ordered task
list and the display format. Every mutation runs a full scheduling pass; a
mutation whose pass fails is rolled back so the session never exposes dates
computed from a different state than the one it reports.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

from .scheduling.errors import InvalidInputError
from .scheduling.models import Holiday, ScheduleConfig, Task
from .scheduling.scheduler import project_start, recompute
from .schemas.plan import PlanDocument, PlanTask
from .services.holidays import build_holiday_set
from .utils.datetime_utils import (
    DateLike,
    format_calendar_date,
    normalize_date_format,
    to_calendar_date,
)

logger = logging.getLogger(__name__)

NO_DEADLINE_MESSAGE = "Please set a deadline first."
NO_TASKS_MESSAGE = "No tasks added yet."

HolidayLoader = Callable[[], Awaitable[Iterable[Holiday]]]


class SessionState(str, Enum):
    NO_DEADLINE = "no_deadline"
    SCHEDULED = "scheduled"


@dataclass(frozen=True, slots=True)
class PlanRow:
    """A task ready for display, dates already formatted."""

    name: str
    start: str
    end: str
    duration: int


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError("Task name must be a non-empty string")
    return name.strip()


def _validate_duration(duration: Any) -> int:
    if isinstance(duration, bool):
        raise InvalidInputError(f"Invalid task duration: {duration!r}")
    if isinstance(duration, str):
        try:
            duration = int(duration.strip(), 10)
        except ValueError:
            raise InvalidInputError(f"Invalid task duration: {duration!r}") from None
    if not isinstance(duration, int):
        raise InvalidInputError(f"Invalid task duration: {duration!r}")
    if duration < 1:
        raise InvalidInputError(f"Task duration must be at least 1, got {duration}")
    return duration


class PlannerSession:
    """Own the planning state and keep task dates in sync with it."""

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        tasks: Sequence[Task] = (),
        *,
        date_format: Optional[str] = None,
    ) -> None:
        self._config = config or ScheduleConfig()
        self._tasks: list[Task] = []
        self._holiday_labels: dict[datetime.date, str] = {}
        self._date_format = normalize_date_format(date_format)
        self._apply(tasks=[replace(task) for task in tasks])

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _apply(
        self,
        *,
        config: Optional[ScheduleConfig] = None,
        tasks: Optional[list[Task]] = None,
    ) -> None:
        next_config = config if config is not None else self._config
        next_tasks = tasks if tasks is not None else self._tasks
        scheduled = recompute(next_config, next_tasks)
        self._config = next_config
        self._tasks = scheduled

    def recompute(self) -> tuple[Task, ...]:
        """Run a full scheduling pass over the current state."""

        self._apply()
        return self.tasks

    @property
    def config(self) -> ScheduleConfig:
        return self._config

    @property
    def deadline(self) -> Optional[datetime.date]:
        return self._config.deadline

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(replace(task) for task in self._tasks)

    @property
    def date_format(self) -> str:
        return self._date_format

    @property
    def state(self) -> SessionState:
        if self._config.deadline is None:
            return SessionState.NO_DEADLINE
        return SessionState.SCHEDULED

    @property
    def project_start(self) -> Optional[datetime.date]:
        return project_start(self._tasks)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_deadline(self, value: DateLike) -> None:
        try:
            deadline = to_calendar_date(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Invalid deadline: {value!r}") from exc
        self._apply(config=replace(self._config, deadline=deadline))
        logger.info(f"Deadline set to {deadline.isoformat()}")

    def clear_deadline(self) -> None:
        self._apply(config=replace(self._config, deadline=None))

    def add_task(self, name: Any, duration: Any) -> Task:
        """Validate and append a task, then reschedule every task."""

        task = Task(name=_validate_name(name), duration=_validate_duration(duration))
        self._apply(tasks=[*self._tasks, task])
        logger.debug(f"Added task {task.name!r} ({task.duration} working day(s))")
        return replace(self._tasks[-1])

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        """Swap in a new task list; any dates it carries are recomputed."""

        validated = [
            Task(name=_validate_name(task.name), duration=_validate_duration(task.duration))
            for task in tasks
        ]
        self._apply(tasks=validated)

    def set_exclude_holidays(self, enabled: bool) -> None:
        self._apply(config=replace(self._config, exclude_holidays=bool(enabled)))

    def load_holidays(self, holidays: Iterable[Holiday]) -> None:
        """Replace the excluded holiday set."""

        holidays = list(holidays)
        self._apply(config=replace(self._config, holiday_set=build_holiday_set(holidays)))
        self._holiday_labels = {holiday.date: holiday.label for holiday in holidays}
        logger.info(f"Holiday set now holds {len(self._config.holiday_set)} date(s)")

    async def refresh_holidays(self, loader: HolidayLoader) -> None:
        """Await ``loader`` and apply its holidays.

        Until this completes the session schedules with whatever holiday set it
        already had, an empty one for a fresh session.
        """

        self.load_holidays(await loader())

    def holiday_label(self, day: DateLike) -> Optional[str]:
        try:
            key = to_calendar_date(day)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Invalid date: {day!r}") from exc
        return self._holiday_labels.get(key)

    def set_date_format(self, fmt: str) -> None:
        self._date_format = normalize_date_format(fmt)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def format_date(self, day: Optional[datetime.date]) -> str:
        return format_calendar_date(day, self._date_format)

    def deadline_display(self) -> Optional[str]:
        if self._config.deadline is None:
            return None
        return f"Deadline: {self.format_date(self._config.deadline)}"

    def status_message(self) -> Optional[str]:
        """Return the placeholder text shown instead of the plan table, if any."""

        if self._config.deadline is None:
            return NO_DEADLINE_MESSAGE
        if not self._tasks:
            return NO_TASKS_MESSAGE
        return None

    def rows(self) -> list[PlanRow]:
        if self.status_message() is not None:
            return []
        return [
            PlanRow(
                name=task.name,
                start=self.format_date(task.start_date),
                end=self.format_date(task.end_date),
                duration=task.duration,
            )
            for task in self._tasks
        ]

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def export_plan(self) -> PlanDocument:
        return PlanDocument(
            deadline=self._config.deadline,
            tasks=[
                PlanTask(
                    name=task.name,
                    duration=task.duration,
                    start_date=task.start_date,
                    end_date=task.end_date,
                )
                for task in self._tasks
            ],
            date_format=self._date_format,
            exclude_holidays=self._config.exclude_holidays,
        )

    def import_plan(self, document: PlanDocument) -> None:
        """Load a plan document, recomputing dates instead of trusting it."""

        tasks = [Task(name=entry.name, duration=entry.duration) for entry in document.tasks]
        config = replace(
            self._config,
            deadline=document.deadline,
            exclude_holidays=document.exclude_holidays,
        )
        self._apply(config=config, tasks=tasks)
        self._date_format = normalize_date_format(document.date_format)
        logger.info(f"Imported plan with {len(tasks)} task(s)")


__all__ = [
    "NO_DEADLINE_MESSAGE",
    "NO_TASKS_MESSAGE",
    "PlanRow",
    "PlannerSession",
    "SessionState",
]
