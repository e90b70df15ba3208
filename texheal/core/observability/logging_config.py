"""
Logging configuration — set up once by the CLI before the first build.

Every module logs through ``logging.getLogger(__name__)``; records go to
stderr so they never mix with the heartbeat and installer output that
click writes to stdout.

The CLI takes no flags of its own, so everything comes from the
environment:

    TEXHEAL_LOG_LEVEL        console level (default WARNING)
    TEXHEAL_LOG_FILE         optional log file
    TEXHEAL_LOG_FILE_LEVEL   level for the file (default: console level)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV_VAR = "TEXHEAL_LOG_LEVEL"
FILE_ENV_VAR = "TEXHEAL_LOG_FILE"
FILE_LEVEL_ENV_VAR = "TEXHEAL_LOG_FILE_LEVEL"

# Console: just the message at WARNING, since a failed build already
# prints its own error; more context the lower the level goes.
_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_MINIMAL = "%(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for a texheal run.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ...).
        log_file: Optional path of a log file, appended to.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def setup_logging_from_env(environ: Mapping[str, str] | None = None) -> None:
    """``setup_logging`` driven by the TEXHEAL_LOG_* variables."""
    env = os.environ if environ is None else environ
    setup_logging(
        level=env.get(LEVEL_ENV_VAR, "WARNING"),
        log_file=env.get(FILE_ENV_VAR) or None,
        log_file_level=env.get(FILE_LEVEL_ENV_VAR) or None,
    )


def _console_formatter(level: int) -> logging.Formatter:
    for threshold in (logging.DEBUG, logging.INFO):
        if level <= threshold:
            fmt, datefmt = _CONSOLE_FORMATS[threshold]
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_FMT_MINIMAL)


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
