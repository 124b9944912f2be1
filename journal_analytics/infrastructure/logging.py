"""Logging configuration.

Call setup_logging() once at startup; modules obtain loggers via
get_logger(__name__).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "journal_analytics"


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the package logger once."""
    logger = logging.getLogger(ROOT_LOGGER)

    # Avoid duplicate handlers on repeated calls
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(level)

    logging.getLogger("polars").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under the package root."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
