"""Loguru setup for the converter and its CLI."""

import sys
from pathlib import Path

from loguru import logger

from .config import LOG_LEVEL


def setup_logger(level=LOG_LEVEL, log_file=None, rotation="10 MB", retention="7 days"):
    """Configure loguru with a console sink and an optional rotating file sink.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: optional path; console only when None
        rotation: size or interval before the file rolls over
        retention: how long rolled files are kept
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level.upper(),
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level.upper(),
            rotation=rotation,
            retention=retention,
        )

    logger.debug(f"Logger initialized with level={level}")
