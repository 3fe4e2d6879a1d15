"""Logging setup for the xmt CLI."""

import sys

from loguru import logger

PRETTY_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"


def configure_logging(level: str, log_format: str = "pretty") -> None:
    """Send loguru records, including xmt's own, to stderr.

    Args:
        level: Minimum level (TRACE, DEBUG, INFO, WARNING, ERROR)
        log_format: 'pretty' for colored output, 'json' for structured
    """
    logger.enable("xmt")
    logger.remove()
    if log_format == "json":
        logger.add(sys.stderr, format="{message}", serialize=True, level=level)
    else:
        logger.add(sys.stderr, format=PRETTY_FORMAT, level=level, colorize=True)
