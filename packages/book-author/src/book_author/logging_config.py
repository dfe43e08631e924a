"""Centralized logging configuration for the application."""

import sys
from pathlib import Path

from loguru import logger


def setup_logging(
    log_name: str = "book_author", level: str = "INFO", log_dir: Path = Path("logs"), console: bool = True
) -> logger:
    """
    Configure logging for the application.

    Args:
        log_name: Base name for the log file
        level: Minimum level for both sinks
        log_dir: Directory that receives the rotating log file
        console: Also echo records to stdout. Commands whose stdout is their
            output pass False so only the log file receives records.

    Returns:
        logger: Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any existing handlers
    logger.remove()

    logger.add(
        sink=log_dir / f"{log_name}.log",
        rotation="10 MB",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )

    if console:
        logger.add(
            sink=sys.stdout,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>",
        )

    return logger
