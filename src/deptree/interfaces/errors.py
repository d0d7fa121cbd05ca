"""Errors raised by directory store implementations."""

from __future__ import annotations

from collections.abc import Iterable


class DirectoryError(Exception):
    """Base class for directory store errors."""


class DepartmentNotFoundError(DirectoryError):
    """Raised when a department id is not present in the store."""

    def __init__(self, department_id: int) -> None:
        super().__init__(f"Department ({department_id}) not found in directory")
        self.department_id = department_id


class ParentNotFoundError(DirectoryError):
    """Raised when a department references a parent that does not exist."""

    def __init__(self, parent_id: int) -> None:
        super().__init__(f"Parent department ({parent_id}) does not exist")
        self.parent_id = parent_id


class DepartmentHasChildrenError(DirectoryError):
    """Raised when deleting a department that still has children."""

    def __init__(self, department_id: int, child_count: int) -> None:
        super().__init__(
            f"Department ({department_id}) has {child_count} child department(s); "
            "move or delete them first"
        )
        self.department_id = department_id
        self.child_count = child_count


class DuplicateDepartmentError(DirectoryError):
    """Raised when inserting departments whose ids are already taken."""

    def __init__(self, department_ids: Iterable[int]) -> None:
        self.department_ids = sorted(set(department_ids))
        super().__init__(
            f"Department id(s) {self.department_ids} already exist in directory"
        )


class DirectoryIntegrityError(DirectoryError):
    """Raised when the storage engine rejects a write on integrity grounds."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Directory integrity violation: {reason}")
        self.reason = reason
