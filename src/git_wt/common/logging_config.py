"""Logging configuration for git-wt."""

from __future__ import annotations

import logging
import sys


class ColoredFormatter(logging.Formatter):
    """Formatter that colours level names when stderr is a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if sys.stderr.isatty() and levelname in self.COLORS:
            # Other handlers share the record; colour a copy
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = (
                f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
            )
        return super().format(record)


def setup_logging(*, debug: bool = False, verbose: bool = False) -> None:
    """Configure the ``git_wt`` logger.

    Args:
        debug: Show DEBUG messages (every external command is logged)
        verbose: Show INFO messages
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("git_wt")
    logger.setLevel(level)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        formatter = ColoredFormatter(fmt="[%(levelname)s] %(name)s: %(message)s")
    else:
        formatter = ColoredFormatter(fmt="%(levelname)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``git_wt`` namespace.

    Args:
        name: Name of the module (typically __name__)
    """
    if not name.startswith("git_wt"):
        name = f"git_wt.{name}"
    return logging.getLogger(name)
