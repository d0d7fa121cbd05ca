"""Interface for the Directory Store."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import TYPE_CHECKING

from deptree.domain.department import build_forest

if TYPE_CHECKING:
    from deptree.domain.department import Department, DepartmentNode


class DirectoryStore(abc.ABC):
    """Durable storage of department records and their tree relationships.

    The store owns all records. Parent/child is a relation expressed through
    `parent_id`; children are never stored, only derived.
    """

    @abc.abstractmethod
    def get(self, department_id: int) -> Department | None:
        """Get a department by id.

        Args:
            department_id: The department identifier.

        Returns:
            The department if found, otherwise None.
        """

    @abc.abstractmethod
    def list_all(self) -> list[Department]:
        """Return every department, flat, ordered by id."""

    @abc.abstractmethod
    def children_of(self, parent_id: int | None) -> list[Department]:
        """Return the direct children of `parent_id` in sibling order.

        `remove` relies on it for the RESTRICT rule.

        Args:
            parent_id: Parent identifier; None selects the roots.
        """

    @abc.abstractmethod
    def max_order_number(self, parent_id: int | None) -> int | None:
        """Return the highest order number among departments sharing `parent_id`.

        Args:
            parent_id: Parent identifier; None selects the roots.

        Returns:
            The highest order number, or None when the sibling group is empty.
        """

    @abc.abstractmethod
    def add(self, department: Department) -> Department:
        """Persist a new department.

        The store assigns the id when `department.id` is None.

        Returns:
            The stored department, carrying its id.

        Raises:
            ParentNotFoundError: If `parent_id` references no department.
            DuplicateDepartmentError: If an explicit id is already used.
        """

    @abc.abstractmethod
    def add_many(self, batch: Sequence[Department]) -> None:
        """Persist a batch of departments with explicit ids, all or nothing.

        Parents are written before their children whatever the batch order.

        Raises:
            DuplicateDepartmentError: If an id repeats within the batch or
                already exists in the store.
            ParentNotFoundError: If a parent is neither in the batch nor stored.
            ImportCycleError: If parent links inside the batch form a cycle.
            ValueError: If a department in the batch has no id.
        """

    @abc.abstractmethod
    def update(self, department: Department) -> None:
        """Persist changes to an existing department, matched by id.

        Raises:
            DepartmentNotFoundError: If the id is unknown.
            ParentNotFoundError: If `parent_id` references no department.
        """

    @abc.abstractmethod
    def remove(self, department_id: int) -> None:
        """Delete a department. Deletion is restricted, never cascading.

        Raises:
            DepartmentNotFoundError: If the id is unknown.
            DepartmentHasChildrenError: If any department lists it as parent.
        """

    def list_roots(self) -> list[DepartmentNode]:
        """Return the root departments, each populated with its subtree."""
        return build_forest(self.list_all())
