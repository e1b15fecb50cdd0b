"""Plan document schema used for export and import.

Documents are exchanged as JSON with camelCase keys::

    {
      "deadline": "2025-06-20",
      "tasks": [{"name": "Design", "duration": 3,
                 "startDate": "2025-06-18", "endDate": "2025-06-20"}],
      "dateFormat": "yyyy-MM-dd",
      "excludeHolidays": false
    }

Stored ``startDate``/``endDate`` values are informational; importing a plan
always recomputes them from the deadline and durations.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..scheduling.errors import PlannerError
from ..utils.datetime_utils import ISO_DATE_FORMAT, parse_calendar_date


class PlanFormatError(PlannerError, ValueError):
    """Raised when a plan document cannot be validated."""


def _coerce_date(value: Any) -> Any:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, str):
        if not value.strip():
            return None
        parsed = parse_calendar_date(value)
        if parsed is None:
            raise ValueError(f"Unrecognized date: {value!r}")
        return parsed
    return value


class PlanTask(BaseModel):
    """A task entry within a plan document."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Task name")
    duration: int = Field(..., ge=1, description="Length in working days")
    start_date: Optional[datetime.date] = Field(default=None, alias="startDate")
    end_date: Optional[datetime.date] = Field(default=None, alias="endDate")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _truncate_dates(cls, value: Any) -> Any:
        return _coerce_date(value)


class PlanDocument(BaseModel):
    """Serializable snapshot of a planning session."""

    model_config = ConfigDict(populate_by_name=True)

    deadline: Optional[datetime.date] = None
    tasks: list[PlanTask] = Field(default_factory=list)
    date_format: str = Field(
        default=ISO_DATE_FORMAT,
        alias="dateFormat",
        description="Presentation-only display format",
    )
    exclude_holidays: bool = Field(default=False, alias="excludeHolidays")

    @field_validator("deadline", mode="before")
    @classmethod
    def _truncate_deadline(cls, value: Any) -> Any:
        return _coerce_date(value)

    @classmethod
    def from_json(cls, text: str | bytes) -> "PlanDocument":
        """Validate a JSON plan document."""

        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise PlanFormatError(f"Invalid plan document: {exc}") from exc

    @classmethod
    def from_data(cls, data: Any) -> "PlanDocument":
        """Validate an already-decoded plan document."""

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise PlanFormatError(f"Invalid plan document: {exc}") from exc

    def to_data(self) -> dict[str, Any]:
        """Return the JSON-compatible mapping with camelCase keys."""

        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


__all__ = ["PlanDocument", "PlanTask", "PlanFormatError"]
