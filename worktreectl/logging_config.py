"""Logging configuration for worktreectl.

Logging carries diagnostics only. The Info/Warn/Error lines a user is
meant to read go through the Reporter; log records show up with
--verbose or --debug, always on stderr.
"""
import logging
import sys
from typing import IO, Optional

LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
RESET = "\033[0m"

DEBUG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEBUG_DATEFMT = "%H:%M:%S"
DEFAULT_FORMAT = "[%(name)s] %(message)s"

# Stripped from logger names, outermost first
NAME_PREFIXES = ("worktreectl.", "services.")


class LevelColorFormatter(logging.Formatter):
    """Colors the level name when the handler's stream is a terminal.

    Only the formatted text is colored; the record itself is not modified.
    """

    def __init__(self, fmt: str, stream: IO[str], datefmt: Optional[str] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        isatty = getattr(stream, "isatty", None)
        self.use_color = bool(isatty and isatty())

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno)
        if not self.use_color or color is None:
            return super().formatMessage(record)
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{RESET}"
        return super().formatMessage(colored)


def setup_logging(verbose: bool = False, debug: bool = False, stream: Optional[IO[str]] = None) -> None:
    """
    Configure diagnostic logging for the application.

    Args:
        verbose: Show INFO records
        debug: Show DEBUG records with timestamps, including GitPython's
            own command log
        stream: Where records go (default: stderr)
    """
    stream = stream or sys.stderr
    if debug:
        level = logging.DEBUG
        formatter = LevelColorFormatter(DEBUG_FORMAT, stream, datefmt=DEBUG_DATEFMT)
    else:
        level = logging.INFO if verbose else logging.WARNING
        formatter = LevelColorFormatter(DEFAULT_FORMAT, stream)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # GitPython logs every command it runs
    logging.getLogger("git").setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix."""
    for prefix in NAME_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
