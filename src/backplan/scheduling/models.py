"""Domain models for deadline-driven task planning."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Iterable, Optional

DEFAULT_MAX_LOOKBACK_DAYS = 3650


@dataclass(frozen=True, slots=True)
class Holiday:
    """A single excluded calendar day sourced from a holiday feed."""

    date: datetime.date
    label: str = ""


@dataclass(slots=True)
class Task:
    """A sequential unit of work measured in whole working days."""

    name: str
    duration: int
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None

    @property
    def is_scheduled(self) -> bool:
        """Return True when both boundary dates have been computed."""

        return self.start_date is not None and self.end_date is not None


def _freeze_dates(values: Iterable[datetime.date]) -> frozenset[datetime.date]:
    # datetime is a subclass of date, so truncate explicitly before hashing
    frozen: set[datetime.date] = set()
    for value in values:
        if isinstance(value, datetime.datetime):
            value = value.date()
        frozen.add(value)
    return frozenset(frozen)


@dataclass(frozen=True, slots=True)
class ScheduleConfig:
    """Inputs that decide which days count as working days."""

    deadline: Optional[datetime.date] = None
    skip_weekends: bool = True
    exclude_holidays: bool = False
    holiday_set: frozenset[datetime.date] = field(default_factory=frozenset)
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS

    def __post_init__(self) -> None:
        if isinstance(self.deadline, datetime.datetime):
            object.__setattr__(self, "deadline", self.deadline.date())
        object.__setattr__(self, "holiday_set", _freeze_dates(self.holiday_set))
        if self.max_lookback_days < 1:
            raise ValueError("max_lookback_days must be positive")


__all__ = ["DEFAULT_MAX_LOOKBACK_DAYS", "Holiday", "Task", "ScheduleConfig"]
