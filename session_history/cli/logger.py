"""
CLI logging setup.

Library modules log through standard `logging` module loggers; the CLI
routes them to stderr as `[LEVEL] message` lines.
"""

from __future__ import annotations

import logging
import sys

from session_history.config import settings

PACKAGE_LOGGER = 'session_history'


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Args:
        verbose: If True, show debug messages. Otherwise use the configured LOG_LEVEL.

    Returns:
        The package logger
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else settings.LOG_LEVEL)
    return logger
