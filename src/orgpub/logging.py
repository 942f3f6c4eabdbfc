"""Logger hierarchy and handler setup for the orgpub CLI"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = "orgpub"

CONSOLE_FORMAT = "[orgpub] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `orgpub.<name>`, or the package root logger when name is empty."""
    return logging.getLogger(f"{ROOT}.{name}" if name else ROOT)


def _attach(logger: logging.Logger, handler: logging.Handler, fmt: str) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send orgpub records to stderr, and to log_file when given.

    stdout stays reserved for rendered HTML and JSON. Calling this again
    replaces the handlers from the previous call.
    """
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stderr), CONSOLE_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger"]
