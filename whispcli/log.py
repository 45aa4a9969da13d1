import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "whispcli"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

LOG_LEVELS = {
    "silent": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def build_logger(level: str = "info", stream: Optional[TextIO] = None) -> logging.Logger:
    """Build the one logger a command run passes to every component."""
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level: {level}")
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(LOG_LEVELS[level])
    logger.propagate = False
    return logger


def quiet_level(level: str) -> str:
    """Level to use when stdout carries transcript text only."""
    if LOG_LEVELS[level] < logging.ERROR:
        return "error"
    return level
