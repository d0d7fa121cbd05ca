"""Database backends DEPTREE knows how to talk to."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised for a backend other than SQLite or PostgreSQL."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported database backend: {name!r}")
        self.name = name


class DialectName(str, Enum):
    """Backend names as SQLAlchemy reports them (``dialect.name``)."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_sqlalchemy(cls, bind: Engine | Connection) -> DialectName:
        """Return the backend of an engine or connection.

        Raises:
            UnsupportedDialect: for any other backend.
        """
        name = bind.dialect.name
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedDialect(name) from None
