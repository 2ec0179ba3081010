"""Logging configuration and utilities."""

from typing import Union
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s'


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure the root logger for the example programs.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number.
               Default: INFO
    """
    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), None)
    else:
        numeric_level = level
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str, debug: bool = False) -> logging.Logger:
    """
    Get a logger instance for a module or a single node.

    Args:
        name: Logger name (typically __name__, or __name__ plus a port)
        debug: Pin this logger to DEBUG so its inspection lines are emitted
               whatever the root level is

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if debug:
        logger.setLevel(logging.DEBUG)
    return logger
