"""Loguru sink setup shared by the API and the CLI."""
from __future__ import annotations

import sys

from loguru import logger

from studyflow.config import Settings, get_settings

CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"


def configure_logging(settings: Settings | None = None, level: str | None = None) -> None:
    """
    Replace loguru's default sink with the service sinks.

    Args:
        settings: Settings to read log_level/log_file from (cached settings if None)
        level: Override for the console level (e.g. WARNING for quiet CLI output)
    """
    settings = settings or get_settings()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level or settings.log_level,
        format=CONSOLE_FORMAT,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )
