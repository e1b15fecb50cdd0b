"""Working-day predicate and backward calendar walks."""

from __future__ import annotations

import datetime
from typing import Iterator

from .errors import UnschedulableConfigurationError
from .models import ScheduleConfig

_ONE_DAY = datetime.timedelta(days=1)
_WEEKEND = frozenset({5, 6})  # Sat, Sun


def _as_date(day: datetime.date) -> datetime.date:
    if isinstance(day, datetime.datetime):
        return day.date()
    return day


def day_before(day: datetime.date) -> datetime.date:
    """Return the calendar day before ``day``."""

    try:
        return day - _ONE_DAY
    except OverflowError as exc:
        raise UnschedulableConfigurationError(
            f"No working day on or before {day.isoformat()}: reached the earliest representable date"
        ) from exc


def is_working_day(day: datetime.date, config: ScheduleConfig) -> bool:
    """Return True when ``day`` is neither a weekend day nor an excluded holiday."""

    day = _as_date(day)
    if config.skip_weekends and day.weekday() in _WEEKEND:
        return False
    if config.exclude_holidays and day in config.holiday_set:
        return False
    return True


def last_working_day_on_or_before(
    day: datetime.date, config: ScheduleConfig
) -> datetime.date:
    """Snap ``day`` back to the closest working day, ``day`` itself included.

    Raises:
        UnschedulableConfigurationError: when no working day exists within
            ``config.max_lookback_days`` days before ``day``.
    """

    start = candidate = _as_date(day)
    for _ in range(config.max_lookback_days + 1):
        if is_working_day(candidate, config):
            return candidate
        candidate = day_before(candidate)

    raise UnschedulableConfigurationError(
        f"No working day within {config.max_lookback_days} days before "
        f"{start.isoformat()}; check the holiday configuration"
    )


def iter_working_days_backward(
    day: datetime.date, config: ScheduleConfig
) -> Iterator[datetime.date]:
    """Yield working days on or before ``day``, newest first.

    The generator is infinite in principle; every step snaps to the next working
    day through :func:`last_working_day_on_or_before`, so a gap longer than the
    lookback window raises instead of spinning.
    """

    current = last_working_day_on_or_before(day, config)
    while True:
        yield current
        current = last_working_day_on_or_before(day_before(current), config)


def count_working_days(
    start: datetime.date, end: datetime.date, config: ScheduleConfig
) -> int:
    """Count working days in the inclusive range ``[start, end]``."""

    start, end = _as_date(start), _as_date(end)
    if start > end:
        return 0

    span = (end - start).days + 1
    return sum(
        1
        for offset in range(span)
        if is_working_day(start + datetime.timedelta(days=offset), config)
    )


__all__ = [
    "day_before",
    "is_working_day",
    "last_working_day_on_or_before",
    "iter_working_days_backward",
    "count_working_days",
]
