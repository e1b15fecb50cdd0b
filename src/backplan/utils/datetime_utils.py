"""Calendar-day parsing, normalization and display formatting.

Every date that enters the planner goes through :func:`to_calendar_date` so that
equality and set membership always compare plain ``datetime.date`` values with
no time-of-day or timezone component.
"""

from __future__ import annotations

import datetime
import re
from typing import Optional, Union

from dateutil import parser as _dateutil_parser

DateLike = Union[datetime.date, datetime.datetime, str]

ISO_DATE_FORMAT = "yyyy-MM-dd"
US_DATE_FORMAT = "MM/dd/yyyy"
LONG_DATE_FORMAT = "dd MMM yyyy"
DATE_FORMATS: tuple[str, ...] = (ISO_DATE_FORMAT, US_DATE_FORMAT, LONG_DATE_FORMAT)

_COMPACT_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def parse_compact_date(token: Optional[str]) -> Optional[datetime.date]:
    """Parse a ``YYYYMMDD`` token as used by iCalendar ``DTSTART`` values.

    Args:
        token: Compact date token; only the leading eight characters are read so
            ``20250101T000000Z`` is accepted as well.

    Returns:
        The calendar date, or None if the token is missing or invalid
    """
    if not token:
        return None

    match = _COMPACT_DATE.match(token.strip()[:8])
    if match is None:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def parse_calendar_date(value: Optional[str]) -> Optional[datetime.date]:
    """Best-effort conversion of a date or datetime string to a calendar day.

    Handles ISO dates (``2025-06-20``), compact tokens (``20250620``) and any
    datetime string python-dateutil understands. Datetimes keep the calendar
    day of their own offset; no conversion to UTC happens first.

    Returns:
        The calendar date, or None if parsing fails
    """
    if not value:
        return None

    text = value.strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass

    compact = parse_compact_date(text) if len(text) == 8 else None
    if compact is not None:
        return compact

    try:
        parsed = _dateutil_parser.isoparse(text)
    except ValueError:
        try:
            parsed = _dateutil_parser.parse(text)
        except (ValueError, OverflowError):
            return None
    return parsed.date()


def to_calendar_date(value: DateLike) -> datetime.date:
    """Truncate ``value`` to year/month/day.

    Raises:
        ValueError: if ``value`` is a string that cannot be parsed
        TypeError: if ``value`` is not a date, datetime or string
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        parsed = parse_calendar_date(value)
        if parsed is None:
            raise ValueError(f"Unrecognized date: {value!r}")
        return parsed
    raise TypeError(f"Expected a date, datetime or string, got {type(value).__name__}")


def normalize_date_format(fmt: Optional[str]) -> str:
    """Return ``fmt`` when supported, otherwise the ISO display format."""

    if fmt in DATE_FORMATS:
        return fmt  # type: ignore[return-value]
    return ISO_DATE_FORMAT


def format_calendar_date(day: Optional[datetime.date], fmt: Optional[str] = None) -> str:
    """Render ``day`` using one of the supported display formats.

    Supported formats:
    - yyyy-MM-dd (default, also used for unknown formats)
    - MM/dd/yyyy
    - dd MMM yyyy (abbreviated month name)

    An unset date renders as an empty string.
    """
    if day is None:
        return ""

    fmt = normalize_date_format(fmt)
    if fmt == US_DATE_FORMAT:
        return day.strftime("%m/%d/%Y")
    if fmt == LONG_DATE_FORMAT:
        return day.strftime("%d %b %Y")
    return day.isoformat()


__all__ = [
    "DateLike",
    "DATE_FORMATS",
    "ISO_DATE_FORMAT",
    "US_DATE_FORMAT",
    "LONG_DATE_FORMAT",
    "parse_compact_date",
    "parse_calendar_date",
    "to_calendar_date",
    "normalize_date_format",
    "format_calendar_date",
]
