"""In-memory DirectoryStore adapter implementation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from deptree.domain.department import Department, parents_first, sibling_sort_key
from deptree.interfaces.directory_store import DirectoryStore
from deptree.interfaces.errors import (
    DepartmentHasChildrenError,
    DepartmentNotFoundError,
    DuplicateDepartmentError,
    ParentNotFoundError,
)

# pylint: disable=consider-using-assignment-expr


@dataclass(slots=True)
class InMemoryDirectoryData:
    """Backing store shared by in-memory directory adapters.

    Departments are keyed by id. `next_id` mimics an auto-increment column:
    it always stays above the largest id ever stored.
    """

    departments: dict[int, Department] = field(default_factory=dict)
    next_id: int = 1


class InMemoryDirectoryStore(DirectoryStore):
    """In-memory implementation of the DirectoryStore interface.

    Note: This implementation is not thread-safe and is intended for
    single-threaded tests and local experiments.
    """

    def __init__(self, data: InMemoryDirectoryData | None = None) -> None:
        self._data = data if data is not None else InMemoryDirectoryData()

    @property
    def _rows(self) -> dict[int, Department]:
        return self._data.departments

    # --- reads ---

    def get(self, department_id: int) -> Department | None:
        return self._rows.get(department_id)

    def list_all(self) -> list[Department]:
        return [self._rows[key] for key in sorted(self._rows)]

    def children_of(self, parent_id: int | None) -> list[Department]:
        children = [d for d in self._rows.values() if d.parent_id == parent_id]
        return sorted(children, key=sibling_sort_key)

    def max_order_number(self, parent_id: int | None) -> int | None:
        numbers = [d.order_number for d in self._rows.values() if d.parent_id == parent_id]
        return max(numbers, default=None)

    # --- writes ---

    def add(self, department: Department) -> Department:
        self._check_parent(department.parent_id)
        if department.id is None:
            department = replace(department, id=self._data.next_id)
        elif department.id in self._rows:
            raise DuplicateDepartmentError([department.id])
        self._store(department)
        return department

    def add_many(self, batch: Sequence[Department]) -> None:
        if any(d.id is None for d in batch):
            raise ValueError("add_many needs departments with explicit ids")
        ids = [d.id for d in batch]
        duplicates = {i for i in ids if ids.count(i) > 1 or i in self._rows}
        if duplicates:
            raise DuplicateDepartmentError(duplicates)

        batch_ids = set(ids)
        for department in batch:
            if department.parent_id not in batch_ids:
                self._check_parent(department.parent_id)

        for department in parents_first(batch):
            self._store(department)

    def update(self, department: Department) -> None:
        if department.id is None or department.id not in self._rows:
            raise DepartmentNotFoundError(department.id)  # type: ignore[arg-type]
        self._check_parent(department.parent_id)
        self._rows[department.id] = department

    def remove(self, department_id: int) -> None:
        if department_id not in self._rows:
            raise DepartmentNotFoundError(department_id)
        if child_count := len(self.children_of(department_id)):
            raise DepartmentHasChildrenError(department_id, child_count)
        del self._rows[department_id]

    # --- helpers ---

    def _check_parent(self, parent_id: int | None) -> None:
        if parent_id is not None and parent_id not in self._rows:
            raise ParentNotFoundError(parent_id)

    def _store(self, department: Department) -> None:
        if department.id is None:
            raise ValueError("cannot store a department without an id")
        self._rows[department.id] = department
        self._data.next_id = max(self._data.next_id, department.id + 1)
