"""Domain-layer error definitions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class ValidationError(DomainError):
    """Raised when a department fails required-field validation.

    Attributes:
        field_errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, field_errors: Mapping[str, str]) -> None:
        details = "; ".join(f"{name}: {msg}" for name, msg in field_errors.items())
        super().__init__(f"Invalid department: {details}")
        self.field_errors = dict(field_errors)


# ============================================================================
#                           Tree shape errors
# ============================================================================


class TreeCycleError(DomainError):
    """Raised when an operation would break the forest invariant."""


class MoveWouldCreateCycleError(TreeCycleError):
    """Raised when a department would become its own ancestor."""

    def __init__(self, department_id: int, new_parent_id: int) -> None:
        super().__init__(
            f"Moving department {department_id} under {new_parent_id} "
            "would create a cycle."
        )
        self.department_id = department_id
        self.new_parent_id = new_parent_id


class ImportCycleError(TreeCycleError):
    """Raised when imported parent links form a cycle."""

    def __init__(self, department_ids: Iterable[int]) -> None:
        self.department_ids = sorted(department_ids)
        super().__init__(
            f"Imported departments {self.department_ids} form a parent cycle."
        )
