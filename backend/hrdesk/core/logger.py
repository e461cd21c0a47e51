"""
Logger module

Centralized logging for the service: console output plus an optional
log file taken from settings.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from hrdesk.config import settings

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger with console and (optionally) file handlers.

    Args:
        name: Logger name, usually the module name ("hrdesk.breaks")
        log_file: Optional log file path. Falls back to settings.LOG_FILE

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    target = log_file or settings.LOG_FILE
    if target:
        log_path = Path(target)
        try:
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except (OSError, PermissionError) as e:
            # If file logging fails, just log to console
            logger.warning(f"Cannot open log file {log_path}: {e}")

    return logger
