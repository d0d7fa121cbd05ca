"""``deptree db``: bring the schema up to date and report on it.

Only forward migrations are exposed; there is no downgrade or stamp here.
Alembic writes its own output to stdout, our notices go to stderr.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, OperationalError

from deptree import config
from deptree.adapters.db.engine import make_engine

from .helpers import error, sanitize_url, success, warn

MISSING_DB_URL_MSG = (
    "DEPTREE_DB_URL is not set.\n\n"
    "Point it at the directory database, e.g.:\n"
    "  export DEPTREE_DB_URL='sqlite:///deptree.db'\n"
    "  or in PowerShell:\n"
    "  $env:DEPTREE_DB_URL='sqlite:///deptree.db'"
)

INVALID_URL_FORMAT_MSG = "DEPTREE_DB_URL is not a valid SQLAlchemy database URL."

CANNOT_CONNECT_MSG = (
    "Could not connect to the database in DEPTREE_DB_URL.\n"
    "Check that the server is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "The directory schema will be migrated to the latest revision.\n"
    "Back up the database first if it holds data you care about."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'deptree db upgrade' to create or update the schema."


def _checked_url() -> str:
    """Return ``DEPTREE_DB_URL`` once a trivial query has gone through."""
    try:
        url = config.get_db_url()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e

    try:
        engine = make_engine(url)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        engine.dispose()
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    return url


@dataclass(frozen=True)
class SchemaState:
    """Revision the database is at versus the newest packaged revision."""

    current: str | None
    head: str | None

    @classmethod
    def read(cls, url: str) -> SchemaState:
        engine = make_engine(url)
        try:
            with engine.connect() as conn:
                current = MigrationContext.configure(conn).get_current_revision()
        finally:
            engine.dispose()
        script = ScriptDirectory.from_config(config.build_alembic_config(url))
        return cls(current=current, head=script.get_current_head())

    @property
    def up_to_date(self) -> bool:
        return self.current == self.head

    def describe(self) -> str:
        if self.current is None:
            return "uninitialized"
        return f"{self.current} ({'up to date' if self.up_to_date else 'out of date'})"


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database management commands."""


@db.command()
@click.option("--verbose", "-v", is_flag=True, help="Show Alembic's detailed output.")
def current(verbose: bool) -> None:
    """Show the revision the database is at."""
    cfg = config.build_alembic_config(db_url=_checked_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@click.option("--sql", is_flag=True, help="Print the migration SQL instead of running it.")
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Migrate the database to the latest revision."""
    url = _checked_url()
    if not (force or sql):
        warn(UPGRADE_SCHEMA_WARNING)
        click.echo(f"db: {click.style(sanitize_url(url), underline=True)}")
        click.confirm("Continue?", abort=True)

    command.upgrade(
        config.build_alembic_config(db_url=url, stdout=sys.stdout), "head", sql=sql
    )
    if not sql:
        success("Upgrade complete!")


@db.command()
def status() -> None:
    """Check the connection and whether the schema needs upgrading."""
    try:
        url = _checked_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.format_message())
        sys.exit(1)

    state = SchemaState.read(url)
    success("Database reachable")
    click.echo(f"Backend : {make_engine(url).dialect.name}")
    click.echo(f"URL     : {sanitize_url(url)}")
    click.echo(f"Schema  : {state.describe()}")
    if not state.up_to_date:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
