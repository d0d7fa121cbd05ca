"""In-memory Unit of Work for DEPTREE.

Backs the directory with `InMemoryDirectoryData`. Commit publishes the
working copy; rollback discards it, so a failing handler leaves the shared
data untouched just like a database transaction would.
"""

from __future__ import annotations

import copy

from deptree.adapters.directory_store import InMemoryDirectoryData, InMemoryDirectoryStore
from deptree.interfaces.unit_of_work import AbstractUnitOfWork


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of work over a shared in-memory directory."""

    def __init__(self, data: InMemoryDirectoryData | None = None):
        self.data = data if data is not None else InMemoryDirectoryData()
        self._working: InMemoryDirectoryData
        self.committed = False

    def __enter__(self):
        self._working = copy.deepcopy(self.data)
        self.departments = InMemoryDirectoryStore(self._working)
        return super().__enter__()

    def commit(self):
        self.data.departments = self._working.departments
        self.data.next_id = self._working.next_id
        self._working = copy.deepcopy(self.data)
        self.departments = InMemoryDirectoryStore(self._working)
        self.committed = True

    def rollback(self):
        self._working = copy.deepcopy(self.data)
        self.departments = InMemoryDirectoryStore(self._working)
