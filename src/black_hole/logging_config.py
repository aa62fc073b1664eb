"""Logging configuration for the black-hole server."""

import logging

from .config import LogSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(log_settings: LogSettings) -> logging.Logger:
    """Set up console logging for the ``black_hole`` logger tree.

    Args:
        log_settings: ``[log]`` section of the configuration

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("black_hole")

    # Remove any existing handlers
    logger.handlers.clear()

    if not log_settings.enabled:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return logger

    level = LEVELS.get(log_settings.level, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
