"""
Logging configuration for range-set.

All modules log through a single package logger so that applications
embedding the library can silence or redirect it in one place.

Usage:
    from .logging_config import get_logger
    logger = get_logger(__name__)
    logger.debug("Message")
"""

import logging
import sys
from typing import Union


PACKAGE_LOGGER_NAME = "range_set"


def setup_logging(level: Union[int, str] = logging.INFO, force: bool = False) -> None:
    """
    Configure logging for the range-set package.

    Args:
        level: Logging level, either a number or a name such as "DEBUG" (default: INFO)
        force: If True, reconfigure even if already configured
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    if package_logger.handlers and not force:
        return

    if force:
        package_logger.handlers.clear()

    if isinstance(level, str):
        level_name = level
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level_name}")

    package_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger.addHandler(console_handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    setup_logging()

    if name.startswith(PACKAGE_LOGGER_NAME):
        return logging.getLogger(name)
    else:
        return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")
