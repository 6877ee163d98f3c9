"""
Logging utilities for margviz.

Every margviz module logs through ``logging.getLogger(__name__)``, so all of
them sit below the ``"margviz"`` logger configured here.
"""

import logging
import os
import sys
from typing import Iterable, Optional, Union

LOGGER_NAME = "margviz"

# Plotting libraries that are chatty at DEBUG level (font lookups, PNG chunks)
NOISY_LOGGERS = ("matplotlib", "PIL")


def _parse_level(log_level: Union[int, str, None]) -> int:
    if log_level is None:
        log_level = os.environ.get("MARGVIZ_LOG_LEVEL", logging.INFO)
    if isinstance(log_level, str):
        if log_level.isdigit():
            return int(log_level)
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level!r}")
        return level
    return int(log_level)


def setup_logging(
    log_level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    propagate: bool = False,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS
) -> logging.Logger:
    """
    Configure the margviz logger for script or notebook usage.

    Args:
        log_level: Level name or number; defaults to ``MARGVIZ_LOG_LEVEL`` or INFO
        log_file: Also write to this file (its directory is created)
        log_format: Format for log messages
        propagate: Whether records also reach the root logger
        quiet_loggers: Third-party loggers held at WARNING while margviz logs at DEBUG

    Returns:
        The configured ``"margviz"`` logger
    """
    level = _parse_level(log_level)
    formatter = logging.Formatter(log_format)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = propagate
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if level <= logging.DEBUG:
        for name in quiet_loggers:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger
