"""SQLAlchemy-backed Unit of Work for DEPTREE.

Provides a context-managed UnitOfWork using a SQLAlchemy Connection and the
SqlAlchemyDirectoryStore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from deptree.adapters.directory_store import SqlAlchemyDirectoryStore
from deptree.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    Each `with uow:` block runs on a fresh connection; writes become visible
    only after `commit()`, anything else is rolled back on exit.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.departments = SqlAlchemyDirectoryStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()
