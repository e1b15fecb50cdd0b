"""Backward scheduling of sequential tasks from a deadline."""

from __future__ import annotations

import datetime
import logging
from dataclasses import replace
from itertools import islice
from typing import Optional, Sequence

from .calendar_policy import (
    day_before,
    iter_working_days_backward,
    last_working_day_on_or_before,
)
from .errors import InvalidInputError
from .models import ScheduleConfig, Task

logger = logging.getLogger(__name__)


def _validate_durations(tasks: Sequence[Task]) -> None:
    for index, task in enumerate(tasks):
        duration = task.duration
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise InvalidInputError(
                f"Task {index} ({task.name!r}) has a non-integer duration: {duration!r}"
            )
        if duration < 1:
            raise InvalidInputError(
                f"Task {index} ({task.name!r}) must last at least one working day, got {duration}"
            )


def _start_for(end_date: datetime.date, duration: int, config: ScheduleConfig) -> datetime.date:
    """Return the earliest of the ``duration`` working days ending at ``end_date``."""

    days = islice(iter_working_days_backward(end_date, config), duration - 1, None)
    return next(days)


def schedule_all(
    deadline: Optional[datetime.date],
    tasks: Sequence[Task],
    config: ScheduleConfig,
) -> list[Task]:
    """Compute start and end dates for ``tasks`` walking backward from ``deadline``.

    The last task finishes on the last working day on or before the deadline and
    each earlier task finishes on the last working day strictly before its
    successor starts. Inputs are left untouched; new ``Task`` values are returned.

    Without a deadline every returned task has its dates cleared.

    Raises:
        InvalidInputError: a duration is not an integer of at least one.
        UnschedulableConfigurationError: the calendar leaves no reachable working day.
    """

    if deadline is None:
        logger.debug(f"No deadline set; clearing dates on {len(tasks)} task(s)")
        return [replace(task, start_date=None, end_date=None) for task in tasks]
    if not tasks:
        return []

    _validate_durations(tasks)
    if isinstance(deadline, datetime.datetime):
        deadline = deadline.date()

    scheduled: list[Task] = [replace(task) for task in tasks]
    cursor = last_working_day_on_or_before(deadline, config)
    if cursor != deadline:
        logger.debug(f"Deadline {deadline} snapped to working day {cursor}")

    for index in range(len(scheduled) - 1, -1, -1):
        task = scheduled[index]
        task.end_date = cursor
        task.start_date = _start_for(cursor, task.duration, config)
        if index > 0:
            cursor = last_working_day_on_or_before(
                day_before(task.start_date), config
            )

    logger.debug(
        f"Scheduled {len(scheduled)} task(s) between {scheduled[0].start_date} and {scheduled[-1].end_date}"
    )
    return scheduled


def recompute(config: ScheduleConfig, tasks: Sequence[Task]) -> list[Task]:
    """Run a full scheduling pass using the deadline stored on ``config``."""

    return schedule_all(config.deadline, tasks, config)


def project_start(tasks: Sequence[Task]) -> Optional[datetime.date]:
    """Return the start date of the first task, when one has been computed."""

    if not tasks:
        return None
    return tasks[0].start_date


__all__ = ["schedule_all", "recompute", "project_start"]
