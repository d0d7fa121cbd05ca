"""Configuration utilities for DEPTREE.

This module centralizes small helpers and constants related to application
configuration: where the database lives and how Alembic finds the
packaged migrations.
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "DEPTREE_DB_URL"

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """Raised when the DEPTREE_DB_URL environment variable is not set."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `DEPTREE_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `DEPTREE_DB_URL` is unset or empty.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR)):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for DEPTREE's migrations.

    Args:
        db_url: SQLAlchemy database URL (e.g., `sqlite:///deptree.db`). May be
            `None` only where Alembic will not connect (e.g., `heads`).
        stdout: Text stream Alembic writes status lines to.

    Returns:
        An `alembic.config.Config` pointing to the packaged migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("deptree.adapters.db.alembic")),
    )
    return cfg
