"""Module defining Commands."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class CreateDepartment(Command):
    """Command to create a department at the end of its sibling group."""

    name: str | None
    parent_id: int | None = None


@dataclass(frozen=True)
class DeleteDepartment(Command):
    """Command to delete a department that has no children."""

    department_id: int


@dataclass(frozen=True)
class MoveDepartment(Command):
    """Command to re-parent a department (None moves it to the root level)."""

    department_id: int
    new_parent_id: int | None = None


@dataclass(frozen=True)
class ImportDepartments(Command):
    """Command to bulk-insert departments from an XML interchange payload."""

    payload: bytes

    def __repr__(self) -> str:
        return f"ImportDepartments(payload=<{len(self.payload)} bytes>)"
