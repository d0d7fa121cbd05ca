"""Pytest fixtures for DirectoryStore contract tests.

Provided fixtures
-----------------
- **store**: Parametrized factory that returns a **fresh** `DirectoryStore`
  per test. Supports `"memory"` (the in-memory implementation),
  `"sql_memory"` (SQLAlchemy on an in-memory SQLite database built from the
  metadata) and `"sql_file"` (SQLAlchemy on a SQLite file migrated with
  Alembic). SQL stores run inside a connection that is rolled back at
  teardown.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

from deptree.adapters.directory_store import (
    InMemoryDirectoryData,
    InMemoryDirectoryStore,
    SqlAlchemyDirectoryStore,
)

if TYPE_CHECKING:
    from deptree.interfaces.directory_store import DirectoryStore


@pytest.fixture(params=["memory", "sql_memory", "sql_file"])
def store(request: pytest.FixtureRequest) -> Iterator[DirectoryStore]:
    """Return a fresh directory store for the requested backend."""

    match request.param:
        case "memory":
            yield InMemoryDirectoryStore(data=InMemoryDirectoryData())
        case "sql_memory" | "sql_file":
            fixture_name = (
                "sqlite_engine_memory"
                if request.param == "sql_memory"
                else "sqlite_engine_file"
            )
            engine = request.getfixturevalue(fixture_name)
            with engine.connect() as connection:
                yield SqlAlchemyDirectoryStore(connection)
                connection.rollback()
        case _:
            raise ValueError(f"unknown store type: {request.param}")
