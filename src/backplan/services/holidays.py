"""Holiday feed loading for working-day exclusion.

Feeds are iCalendar documents where each ``VEVENT`` carries a ``DTSTART`` whose
value starts with a compact ``YYYYMMDD`` token and a ``SUMMARY`` label, e.g.::

    BEGIN:VEVENT
    DTSTART;VALUE=DATE:20250101
    SUMMARY:New Year's Day
    END:VEVENT

Loading never raises: a missing, unreachable or malformed feed yields an empty
list so scheduling proceeds without holiday exclusion.
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import httpx

from ..scheduling.models import Holiday
from ..utils.datetime_utils import parse_compact_date

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

_ESCAPES = {"n": "\n", "N": "\n", ",": ",", ";": ";", "\\": "\\"}


def _unfold(text: str) -> list[str]:
    """Join RFC 5545 folded lines (continuations start with a space or tab)."""

    lines: list[str] = []
    for raw_line in text.splitlines():
        if raw_line[:1] in (" ", "\t") and lines:
            lines[-1] += raw_line[1:]
        else:
            lines.append(raw_line)
    return lines


def _unescape(value: str) -> str:
    result: list[str] = []
    chars = iter(value)
    for char in chars:
        if char == "\\":
            following = next(chars, "")
            result.append(_ESCAPES.get(following, following))
        else:
            result.append(char)
    return "".join(result)


def _split_property(line: str) -> tuple[str, str]:
    """Return the upper-cased property name (parameters dropped) and its value."""

    name_part, _, value = line.partition(":")
    name = name_part.split(";", 1)[0].strip().upper()
    return name, value


def parse_holiday_feed(text: str) -> list[Holiday]:
    """Parse iCalendar text into holidays sorted by date.

    Events with a missing or malformed ``DTSTART`` are skipped. Events sharing
    both date and label are collapsed.
    """

    holidays: set[Holiday] = set()
    in_event = False
    start: Optional[datetime.date] = None
    raw_start: Optional[str] = None
    label = ""

    for line in _unfold(text):
        name, value = _split_property(line)
        if name == "BEGIN" and value.strip().upper() == "VEVENT":
            in_event, start, raw_start, label = True, None, None, ""
        elif name == "END" and value.strip().upper() == "VEVENT":
            if in_event and start is not None:
                holidays.add(Holiday(date=start, label=label))
            elif in_event:
                logger.debug(f"Skipping holiday event {label!r} with bad start {raw_start!r}")
            in_event = False
        elif in_event and name == "DTSTART":
            raw_start = value
            start = parse_compact_date(value)
        elif in_event and name == "SUMMARY":
            label = _unescape(value.strip())

    return sorted(holidays, key=lambda holiday: (holiday.date, holiday.label))


def build_holiday_set(holidays: Iterable[Holiday]) -> frozenset[datetime.date]:
    """Return the normalized set of excluded calendar dates."""

    return frozenset(holiday.date for holiday in holidays)


async def fetch_holiday_feed(
    url: str,
    *,
    timeout: float = 10.0,
    client: Optional[httpx.AsyncClient] = None,
) -> list[Holiday]:
    """Download and parse a holiday feed; failures degrade to an empty list."""

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
                response = await owned.get(url)
        else:
            response = await client.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning(f"Holiday feed unavailable at {url}: {exc}")
        return []

    holidays = parse_holiday_feed(response.text)
    if not holidays:
        logger.warning(f"Holiday feed at {url} contained no usable events")
    else:
        logger.info(f"Loaded {len(holidays)} holiday(s) from {url}")
    return holidays


def load_holiday_file(path: Path) -> list[Holiday]:
    """Read a holiday feed from disk; failures degrade to an empty list."""

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Holiday file {path} unreadable: {exc}")
        return []

    holidays = parse_holiday_feed(text)
    logger.info(f"Loaded {len(holidays)} holiday(s) from {path}")
    return holidays


async def load_holidays(
    settings: "Settings",
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> list[Holiday]:
    """Load holidays from the configured feed URL, else the configured file."""

    if settings.holiday_feed_url is not None:
        return await fetch_holiday_feed(
            str(settings.holiday_feed_url),
            timeout=settings.holiday_feed_timeout,
            client=client,
        )
    if settings.holiday_feed_path is not None:
        return load_holiday_file(settings.holiday_feed_path)

    logger.debug("No holiday feed configured")
    return []


__all__ = [
    "parse_holiday_feed",
    "build_holiday_set",
    "fetch_holiday_feed",
    "load_holiday_file",
    "load_holidays",
]
