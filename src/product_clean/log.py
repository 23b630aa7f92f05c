"""Logging configuration for the ``product_clean`` package."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "product_clean"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a console handler to the package logger.

    Calling it twice replaces the previous handlers instead of stacking them.
    """

    logger.handlers = []
    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
