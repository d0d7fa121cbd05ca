"""Domain model for DEPTREE.

Holds the `Department` entity, the tree read model and the small pure
policies (sibling ordering, ancestor walks) that the service layer applies.

Dependency rule: this package must not import any other `deptree.*` module.
"""

from .department import Department, DepartmentNode, build_forest, next_order_number
from .errors import (
    DomainError,
    ImportCycleError,
    MoveWouldCreateCycleError,
    TreeCycleError,
    ValidationError,
)

__all__ = [
    "Department",
    "DepartmentNode",
    "DomainError",
    "ImportCycleError",
    "MoveWouldCreateCycleError",
    "TreeCycleError",
    "ValidationError",
    "build_forest",
    "next_order_number",
]
