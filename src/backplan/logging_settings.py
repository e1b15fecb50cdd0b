"""Reader for ``logging_settings.conf``, the operator-facing logging switches.

Each non-comment line is ``key = value`` (keys are case-insensitive):

``terminal`` / ``file``
    Minimum level for the console and for the date-stamped log file. One of
    debug, info, warning, error or off.
``retention_hours``
    Age after which old log files are removed at startup; 0 keeps them all.
``file_prefix``
    Leading part of each log file name, ``backplan`` unless set.

A mistake in the file never stops the planner from starting. The key keeps its
previous value and the mistake is recorded on ``LoggingSettings.problems`` so
``configure_logging`` can report it once handlers are in place.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

LEVELS: dict[str, int | None] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": None,
}

_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class SettingValueError(ValueError):
    """A value in the logging settings file cannot be used."""


@dataclass(frozen=True)
class LoggingSettings:
    terminal_level: int | None = logging.INFO
    file_level: int | None = logging.INFO
    retention_hours: int = 48
    file_prefix: str = "backplan"
    problems: tuple[str, ...] = ()

    def report(self, logger: logging.Logger) -> None:
        for problem in self.problems:
            logger.warning(problem)


def _level(value: str) -> int | None:
    try:
        return LEVELS[value.lower()]
    except KeyError:
        choices = ", ".join(LEVELS)
        raise SettingValueError(
            f"unknown level {value!r} (expected one of {choices})"
        ) from None


def _retention(value: str) -> int:
    try:
        hours = int(value)
    except ValueError:
        raise SettingValueError(
            f"retention_hours must be a whole number, got {value!r}"
        ) from None
    return max(0, hours)


def _file_prefix(value: str) -> str:
    if not _PREFIX_PATTERN.match(value):
        raise SettingValueError(
            f"file_prefix may only contain letters, digits, '-' and '_', got {value!r}"
        )
    return value


# key -> (LoggingSettings attribute, converter)
_KEYS: dict[str, tuple[str, Callable[[str], object]]] = {
    "terminal": ("terminal_level", _level),
    "file": ("file_level", _level),
    "retention_hours": ("retention_hours", _retention),
    "file_prefix": ("file_prefix", _file_prefix),
}


def parse_logging_settings(path: Path) -> LoggingSettings:
    """Read ``path`` into a ``LoggingSettings``; a missing file gives the defaults."""

    if not path.exists():
        return LoggingSettings()

    values: dict[str, object] = {}
    problems: list[str] = []
    for number, raw_line in enumerate(
        path.read_text(encoding="utf-8").splitlines(), start=1
    ):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        where = f"{path.name}:{number}"
        key, sep, value = line.partition("=")
        if not sep:
            problems.append(f"{where}: expected 'key = value', got {line!r}")
            continue
        entry = _KEYS.get(key.strip().lower())
        if entry is None:
            problems.append(f"{where}: unknown key {key.strip()!r} ignored")
            continue
        attribute, convert = entry
        try:
            values[attribute] = convert(value.strip())
        except SettingValueError as exc:
            problems.append(f"{where}: {exc}; value ignored")

    return replace(LoggingSettings(), problems=tuple(problems), **values)


__all__ = ["LEVELS", "LoggingSettings", "SettingValueError", "parse_logging_settings"]
