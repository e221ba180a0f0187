"""
Loguru-based logging configuration
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: Optional[str] = None,
    retention: Optional[str] = None,
) -> None:
    """
    Configure loguru sinks for the CLI

    Suppressed failures are logged as multi-line messages, so the console
    sink keeps a short prefix and leaves the message body untouched.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging to file
        rotation: File rotation rule, defaults to settings LOG_ROTATION
        retention: File retention rule, defaults to settings LOG_RETENTION
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=log_level,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )

    if log_file:
        from core.config import get_settings

        settings = get_settings()
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level,
            rotation=rotation or settings.LOG_ROTATION,
            retention=retention or settings.LOG_RETENTION,
            encoding=settings.FILE_ENCODING,
        )

    logger.debug(f"Logger initialized with level: {log_level}")
