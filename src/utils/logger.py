"""Loguru sink configuration."""

import sys

from loguru import logger

from ..model.setting import Settings, get_settings


LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: Settings | None = None) -> None:
    """Replace loguru's sinks with a stderr sink and, if configured, a file sink.

    Args:
        settings: Settings to read the level and file from. Uses the global settings when None.
    """
    settings = settings or get_settings()

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level, format=LOG_FORMAT)
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level, encoding="utf-8")
    logger.debug(f"Logging configured at level {settings.log_level}")
