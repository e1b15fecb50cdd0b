"""Application configuration using environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .scheduling.models import DEFAULT_MAX_LOOKBACK_DAYS
from .utils.datetime_utils import DATE_FORMATS, ISO_DATE_FORMAT

# Resolve the project root once so that `.env` is discovered regardless of CWD
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Load configuration from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scheduling
    max_lookback_days: int = Field(
        default=DEFAULT_MAX_LOOKBACK_DAYS,
        ge=1,
        validation_alias=AliasChoices(
            "BACKPLAN_MAX_LOOKBACK_DAYS", "max_lookback_days"
        ),
        description="Longest run of non-working days tolerated before giving up.",
    )
    exclude_holidays: bool = Field(
        default=False,
        validation_alias=AliasChoices("BACKPLAN_EXCLUDE_HOLIDAYS", "exclude_holidays"),
    )
    date_format: str = Field(
        default=ISO_DATE_FORMAT,
        validation_alias=AliasChoices("BACKPLAN_DATE_FORMAT", "date_format"),
    )

    # Holiday feed (iCalendar); the URL wins over the file when both are set
    holiday_feed_url: Optional[AnyHttpUrl] = Field(
        default=None,
        validation_alias=AliasChoices("BACKPLAN_HOLIDAY_FEED_URL", "holiday_feed_url"),
    )
    holiday_feed_path: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices(
            "BACKPLAN_HOLIDAY_FEED_PATH", "holiday_feed_path"
        ),
    )
    holiday_feed_timeout: float = Field(
        default=10.0,
        ge=1,
        validation_alias=AliasChoices(
            "BACKPLAN_HOLIDAY_FEED_TIMEOUT", "holiday_feed_timeout"
        ),
    )

    # Storage
    plans_dir: Path = Field(
        default_factory=lambda: Path("data/plans"),
        validation_alias=AliasChoices("BACKPLAN_PLANS_DIR", "plans_dir"),
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    log_dir: Path = Field(
        default_factory=lambda: Path("logs/app"),
        validation_alias=AliasChoices("BACKPLAN_LOG_DIR", "log_dir"),
    )
    logging_settings_path: Path = Field(
        default_factory=lambda: PROJECT_ROOT / "logging_settings.conf",
        validation_alias=AliasChoices(
            "BACKPLAN_LOGGING_SETTINGS", "logging_settings_path"
        ),
    )

    @field_validator("date_format")
    @classmethod
    def _check_date_format(cls, value: str) -> str:
        if value not in DATE_FORMATS:
            raise ValueError(
                f"Unsupported date format {value!r}; expected one of {', '.join(DATE_FORMATS)}"
            )
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()  # pyright: ignore[reportCallIssue]


__all__ = ["Settings", "get_settings"]
