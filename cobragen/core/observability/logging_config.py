"""
Logging configuration for the cobragen CLI.

``main.py`` calls ``setup_logging`` once per invocation; every module
logs through ``logging.getLogger(__name__)``.

Console level, first match wins:
    --debug > --verbose > --quiet > COBRAGEN_LOG_LEVEL > WARNING

COBRAGEN_LOG_FILE adds a file handler, at COBRAGEN_LOG_FILE_LEVEL or
the console level.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "COBRAGEN_LOG_LEVEL"
FILE_ENV = "COBRAGEN_LOG_FILE"
FILE_LEVEL_ENV = "COBRAGEN_LOG_FILE_LEVEL"

# (threshold, format, datefmt): first row whose threshold >= level
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Template engine chatter stays out of -v output
_THIRD_PARTY = ("jinja2",)


def level_from_flags(verbose: bool = False, quiet: bool = False, debug: bool = False) -> str:
    """Console level name for the global CLI flags."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers with a stderr handler.

    Args:
        level: Console level name.
        log_file: Optional log file path (defaults to $COBRAGEN_LOG_FILE).
        log_file_level: File level name (defaults to $COBRAGEN_LOG_FILE_LEVEL,
            then ``level``).
        quiet_third_party: Pin third-party loggers to WARNING unless
            the console is at DEBUG.
    """
    console_level = _parse_level(level)
    log_file = log_file or os.environ.get(FILE_ENV)
    log_file_level = log_file_level or os.environ.get(FILE_LEVEL_ENV)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root.addHandler(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _THIRD_PARTY:
            logging.getLogger(name).setLevel(logging.WARNING)


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next((f, d) for threshold, f, d in _CONSOLE_FORMATS if level <= threshold)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
