"""Session factory wiring settings, logging and the holiday feed together."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import Settings, get_settings
from .logging_handlers import DateStampedFileHandler, cleanup_old_logs
from .logging_settings import parse_logging_settings
from .scheduling.models import ScheduleConfig
from .services.holidays import load_holidays
from .services.plan_store import PlanStore
from .session import PlannerSession

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure logging from LOG_LEVEL and the logging settings file."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    file_settings = parse_logging_settings(settings.logging_settings_path)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = []

    if file_settings.terminal_level is not None:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(max(log_level, file_settings.terminal_level))
        handlers.append(console_handler)

    if file_settings.file_level is not None:
        file_handler = DateStampedFileHandler(
            settings.log_dir, prefix=file_settings.file_prefix
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(max(log_level, file_settings.file_level))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )
    logging.getLogger("backplan").setLevel(log_level)

    # Quiet down httpx/httpcore unless debugging the holiday feed
    if log_level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging_logger = logging.getLogger("backplan.logging")
    file_settings.report(logging_logger)
    cleanup_old_logs(
        settings.log_dir,
        file_settings.retention_hours,
        logger=logging_logger,
    )


def create_session(settings: Optional[Settings] = None) -> PlannerSession:
    """Build an empty session configured from ``settings``."""
    settings = settings or get_settings()
    config = ScheduleConfig(
        exclude_holidays=settings.exclude_holidays,
        max_lookback_days=settings.max_lookback_days,
    )
    return PlannerSession(config, date_format=settings.date_format)


def create_plan_store(settings: Optional[Settings] = None) -> PlanStore:
    """Build the plan store rooted at the configured plans directory."""
    settings = settings or get_settings()
    return PlanStore(settings.plans_dir)


async def open_session(
    settings: Optional[Settings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> PlannerSession:
    """Build a session and await the configured holiday feed before returning it."""
    settings = settings or get_settings()
    session = create_session(settings)
    await session.refresh_holidays(lambda: load_holidays(settings, client=client))
    return session


__all__ = [
    "configure_logging",
    "create_plan_store",
    "create_session",
    "open_session",
]
