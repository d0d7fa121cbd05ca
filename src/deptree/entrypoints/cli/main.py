"""DEPTREE CLI entry point.

Defines the top-level ``deptree`` command (via Click-Extra) and registers
the department commands and the ``db`` group.

Examples
    $ deptree db upgrade
    $ deptree create Engineering
    $ deptree create Backend --parent 1
    $ deptree list
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from deptree import __version__
from deptree.logging import (
    LoggingSettings,
    configure_logging,
    log_startup,
    verbosity_level,
)

from .db import db as db_group
from .departments import DEPARTMENT_COMMANDS
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """DEPTREE command-line interface.

    DEPTREE keeps an organization's departments as an ordered tree. Create,
    move and delete departments, and exchange the whole directory with other
    systems as an XML file.

    The database is selected with the DEPTREE_DB_URL environment variable.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Show one more level of log detail per repetition (default WARNING).",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Show one level less log detail per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Log everything to the console with timestamps and source locations.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("deptree", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="DEPTREE_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="DEPTREE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of records the flight recorder keeps in memory.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Buffer recent DEBUG records and write them to --log-path once a "
        "warning is logged. Does not affect the console."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder buffer when the command ends.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Minimum level for one logger as NAME=LEVEL, for both the console "
        "and the flight recorder. Repeatable, e.g. -L sqlalchemy=INFO."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def deptree(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """DEPTREE command-line interface."""
    settings = LoggingSettings(
        console_level=verbosity_level(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, settings, handlers, app_version=__version__)

    # closing the flight recorder flushes it when force-flush is on
    ctx.call_on_close(logging.shutdown)


deptree.add_command(db_group)
for _command in DEPARTMENT_COMMANDS:
    deptree.add_command(_command)
