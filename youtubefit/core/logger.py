"""Loguru setup shared by the API process and the CLI."""

import sys
from pathlib import Path

from loguru import logger

from youtubefit.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    diagnose: bool = False,
) -> None:
    """Replace all loguru sinks with a coloured stderr sink and an optional file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of the rotating, zip-compressed log file. None logs to stderr only.
        rotation: When to rotate the file (e.g., "10 MB", "1 day")
        retention: How long rotated files are kept (e.g., "7 days", "1 month")
        diagnose: Include variable values in file-sink tracebacks
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=diagnose,
        )
        logger.info(f"Logger initialized with level={level}, file={log_path} (rotation={rotation}, retention={retention})")
    else:
        logger.info(f"Logger initialized with level={level}")


def setup_logger_from_settings(level: str | None = None) -> None:
    """Configure logging from LOG_* settings; level overrides LOG_LEVEL."""
    setup_logger(
        level=level or settings.log_level,
        log_file=settings.log_file or None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        diagnose=settings.log_diagnose,
    )
