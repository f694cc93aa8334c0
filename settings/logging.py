"""Logging configuration."""

import sys
from pathlib import Path

from loguru import logger

from settings import LOG_DIR


def setup_logging(level: str = "INFO", to_file: bool = True, log_dir: Path | None = None):
    """Configure console logging and, optionally, a daily rotated sync log.

    Records bound with ``domain=...`` (see ``logger.bind``) carry the cache
    domain into the file sink; everything else is logged under ``-``.
    """
    logger.remove()
    logger.configure(extra={"domain": "-"})

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{extra[domain]}</cyan> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if to_file:
        target = log_dir or LOG_DIR
        target.mkdir(parents=True, exist_ok=True)
        logger.add(
            target / "attendance_sync_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {extra[domain]} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="10 days",
            compression="gz",
        )
        logger.info("Logging to {}", target)

    return logger
