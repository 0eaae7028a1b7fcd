"""Logging setup shared by the psk subcommands.

Verbosity flags control the sketch tool's own loggers separately from the
root logger: a single ``-v`` shows per-step timings from the pipeline
without turning on DEBUG output from every other library; ``-vv`` (or
``--log-level debug``) lowers the root logger as well.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_LEVEL_CHOICES: Iterable[str] = tuple(LOG_LEVELS.keys())

# Loggers owned by this project; they follow the requested level exactly.
APP_LOGGERS = ("sketch", "photo", "jobs", "cli", "psk", "__main__")

# Libraries that log chunk-level chatter at DEBUG.
NOISY_LOGGERS = ("PIL",)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help="Set log verbosity for everything (debug, info, warning, error, critical)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="-v shows per-step sketch timings, -vv also debug output from libraries",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Reduce log verbosity (use -qq for errors only)",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Resolve the level for the project's own loggers."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    offset = verbose - quiet
    if offset >= 1:
        return logging.DEBUG
    if offset == 0:
        return logging.INFO
    if offset == -1:
        return logging.WARNING
    return logging.ERROR


def resolve_root_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Resolve the root logger level; a single -v stops at INFO."""
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    if not log_level and verbose - quiet == 1:
        return logging.INFO
    return level


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure project, library and root loggers; return the project level."""
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    root_level = resolve_root_level(log_level=log_level, verbose=verbose, quiet=quiet)

    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.INFO))

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(root_level)
        # handlers pass project DEBUG records through; logger levels filter
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return level

    logging.basicConfig(level=root_level, format=LOG_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr)
    return level
