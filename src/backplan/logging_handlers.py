"""Date-stamped planner log files and their retention."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path


class DateStampedFileHandler(logging.FileHandler):
    """File handler writing to ``<directory>/<YYYY-MM-DD>/<prefix>_<time>_<tz>.log``.

    Folder and file names use the local time of the machine running the planner.
    """

    def __init__(
        self,
        directory: str | Path = "logs/app",
        *,
        prefix: str = "backplan",
        encoding: str | None = "utf-8",
        delay: bool = False,
        current_time: datetime | None = None,
    ) -> None:
        local_time = (current_time or datetime.now(timezone.utc)).astimezone()
        tz_abbr = (local_time.tzname() or "local").replace(" ", "")
        date_folder = local_time.strftime("%Y-%m-%d")
        file_name = f"{prefix}_{local_time.strftime('%Y-%m-%d_%H-%M-%S')}_{tz_abbr}.log"

        log_path = (Path(directory) / date_folder / file_name).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_path = log_path
        super().__init__(log_path, mode="a", encoding=encoding, delay=delay)


def cleanup_old_logs(
    log_directory: str | Path,
    retention_hours: int,
    logger: logging.Logger | None = None,
) -> tuple[int, int]:
    """
    Delete ``.log`` files older than the retention period, then empty date folders.

    Args:
        log_directory: Root folder holding the date-stamped subfolders
        retention_hours: Files older than this many hours are deleted (0 = disabled)
        logger: Optional logger for reporting cleanup activity

    Returns:
        Tuple of (files_deleted, errors_encountered)
    """
    if retention_hours <= 0:
        return (0, 0)

    dir_path = Path(log_directory).resolve()
    if not dir_path.exists():
        return (0, 0)

    cutoff_time = datetime.now(timezone.utc) - timedelta(hours=retention_hours)
    files_deleted = 0
    errors = 0

    for log_file in dir_path.rglob("*.log"):
        try:
            mtime = datetime.fromtimestamp(log_file.stat().st_mtime, tz=timezone.utc)
            if mtime < cutoff_time:
                log_file.unlink()
                files_deleted += 1
                if logger:
                    logger.debug(f"Deleted old log file: {log_file}")
        except OSError as e:
            errors += 1
            if logger:
                logger.warning(f"Failed to delete {log_file}: {e}")

    for date_dir in dir_path.iterdir():
        if date_dir.is_dir() and not any(date_dir.iterdir()):
            try:
                date_dir.rmdir()
            except OSError as e:
                errors += 1
                if logger:
                    logger.warning(f"Failed to remove {date_dir}: {e}")

    if logger and files_deleted > 0:
        logger.info(
            f"Log cleanup complete: {files_deleted} file(s) deleted, "
            f"{errors} error(s) encountered"
        )

    return (files_deleted, errors)


__all__ = ["DateStampedFileHandler", "cleanup_old_logs"]
