"""Engine factory.

Every engine DEPTREE uses comes from :func:`make_engine`. SQLite only enforces
foreign keys when asked to on each new connection; without that the RESTRICT
rule on ``departments.parent_id`` would silently not apply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event

if TYPE_CHECKING:
    from sqlalchemy.engine import URL, Engine

logger = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys=ON",
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


def _apply_sqlite_pragmas(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create an engine for `url`.

    SQLite connections get :data:`SQLITE_PRAGMAS` applied as they are opened.
    """
    engine = create_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":  # pylint: disable=magic-value-comparison
        logger.debug("SQLite engine for %s; enabling foreign keys", engine.url.database)
        event.listen(engine, "connect", _apply_sqlite_pragmas)
    return engine
