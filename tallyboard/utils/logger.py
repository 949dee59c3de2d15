"""Logging configuration for Tally Board."""

import sys
from typing import Optional

from loguru import logger
from tallyboard.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS ZZ} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Configure the shared loguru logger.

    Args:
        level: Minimum level. Defaults to LOG_LEVEL
        log_file: Rotating log file path. Defaults to LOG_FILE; empty disables it
    """
    level = (level or settings.log_level).upper()
    log_file = settings.log_file if log_file is None else log_file

    logger.remove()
    logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        # Writes come from request handlers, the watcher task and UI sessions
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            enqueue=True,
        )

    return logger


logger = setup_logger()
