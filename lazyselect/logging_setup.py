"""Logging configuration for the CLI.

The interactive playground owns the terminal, so console logging is only
attached for non-interactive runs. A log file captures everything.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "lazyselect"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    *,
    console: bool = False,
) -> logging.Logger:
    """Configure the package logger and return it.

    Args:
        level: Threshold name from ``LOG_LEVELS``.
        log_file: Optional file receiving timestamped records.
        console: Also write records to stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level: {level!r}")
    logger.setLevel(numeric)

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(file_handler)

    return logger
