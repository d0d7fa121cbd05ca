"""Logging setup for the DEPTREE command line.

Two handlers hang off the root logger:

* a Rich console handler on stderr whose threshold follows ``-v``/``-q``;
* an optional flight recorder, a memory buffer of DEBUG records that is
  written to a file once a WARNING arrives (or on exit when force-flushed).

The root logger itself is opened to DEBUG so that each handler decides what
it keeps. Records from loggers outside ``deptree`` are tagged on the console
with the top-level package name, e.g. ``[sqlalchemy]``.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import Mapping

# pylint: disable=too-few-public-methods

PROJECT_LOGGER = "deptree"
LEVEL_STEP = 10

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d] %(levelname)s %(name)s:%(lineno)d: %(message)s"
)


def verbosity_level(verbose: int = 0, quiet: int = 0) -> int:
    """Shift WARNING one level per ``-v`` (down) or ``-q`` (up), clamped."""
    level = logging.WARNING + LEVEL_STEP * (quiet - verbose)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class LoggingSettings:
    """What the command line asked for.

    ``log_path=None`` turns the flight recorder off.
    """

    console_level: int = logging.WARNING
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    recorder_capacity: int = 2000
    force_flush: bool = False
    logger_levels: Mapping[str, int] = field(default_factory=dict)

    @property
    def flight_recorder(self) -> bool:
        return self.log_path is not None


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[package]`` for records from other packages."""

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.split(".", 1)[0]
        record.prefix = "" if top == PROJECT_LOGGER else f"[{top}]"
        return True


def console_handler(settings: LoggingSettings) -> RichHandler:
    """Build the stderr handler. Debug mode shows everything, with sources."""
    debug = settings.debug
    handler = RichHandler(
        level=logging.DEBUG if debug else settings.console_level,
        console=Console(stderr=True, color_system="auto" if settings.color else None),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug,
        enable_link_path=debug,
    )
    handler.setFormatter(
        logging.Formatter(DEBUG_CONSOLE_FORMAT if debug else CONSOLE_FORMAT)
    )
    if not debug:
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def flight_recorder(settings: LoggingSettings) -> MemoryHandler | None:
    """Build the flight recorder, or return None when it is switched off.

    The target file is opened lazily and truncated, so a run that never
    flushes leaves no file behind.
    """
    if settings.log_path is None:
        return None

    target = logging.FileHandler(
        settings.log_path, mode="w", encoding="utf-8", delay=True
    )
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=settings.recorder_capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=settings.force_flush,
    )


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install the handlers on the root logger and apply per-logger levels.

    Returns:
        The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [console_handler(settings)]
    if (recorder := flight_recorder(settings)) is not None:
        handlers.append(recorder)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: logging.Logger,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
    app_version: str,
) -> None:
    """Log a one-line summary at INFO, then runtime diagnostics at DEBUG."""
    logger.info(
        "DEPTREE %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.console_level),
        "ON" if settings.flight_recorder else "OFF",
    )

    diagnostics = {
        "Python": sys.version.split()[0],
        "Platform": f"{platform.system()} {platform.release()}",
        "PID": os.getpid(),
        "CWD": Path.cwd(),
        "SQLAlchemy": sqlalchemy.__version__,
        "Alembic": alembic.__version__,
        "Handlers": [type(h).__name__ for h in handlers],
    }
    if settings.flight_recorder:
        diagnostics["Flight recorder path"] = settings.log_path
    diagnostics["Per-logger overrides"] = {
        name: logging.getLevelName(level)
        for name, level in settings.logger_levels.items()
    }
    for label, value in diagnostics.items():
        logger.debug("%s: %s", label, value)
