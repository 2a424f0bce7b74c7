"""Loguru-based logging setup."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LOG_FILENAME = "save-backup.log"


def setup_logger(log_dir: Path | None = None, level: str = "INFO", verbose: bool = False) -> None:
    """Send short messages to stderr and full records to a rotating log file."""
    logger.remove()

    console_level = "DEBUG" if verbose else level.upper()
    logger.add(
        sys.stderr,
        level=console_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}",
        colorize=sys.stderr.isatty(),
    )

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_dir / LOG_FILENAME),
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {name}:{function}:{line} | {message}",
        rotation="5 MB",
        retention="7 days",
        encoding="utf-8",
    )
    logger.debug(f"Logging to {log_dir / LOG_FILENAME}")
