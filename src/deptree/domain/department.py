"""The Department entity and the tree policies built around it.

The directory is stored flat: each department carries an optional reference
to its parent, and children are derived on demand. Nothing here performs
I/O; callers hand in the records (or a parent lookup) they already hold.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from .errors import ImportCycleError

# pylint: disable=consider-using-assignment-expr

NAME_MAX_LENGTH = 200

# XML 1.0 Char production minus TAB, LF and CR
_NAME_CHAR_RANGES = ((0x20, 0xD7FF), (0xE000, 0xFFFD), (0x10000, 0x10FFFF))


@dataclass(frozen=True, slots=True)
class Department:
    """A node of the organizational directory.

    Conventions:
      - `id` is assigned by the store on creation (None until persisted).
      - `parent_id` of None marks a root.
      - `order_number` is unique among siblings only; gaps are expected.
    """

    name: str
    parent_id: int | None = None
    order_number: int = 0
    id: int | None = None

    @property
    def is_root(self) -> bool:
        """True if the department has no parent."""
        return self.parent_id is None


@dataclass(slots=True)
class DepartmentNode:
    """Tree read model: a department together with its ordered children."""

    department: Department
    children: list[DepartmentNode] = field(default_factory=list)

    @property
    def id(self) -> int | None:
        """Identifier of the wrapped department."""
        return self.department.id

    @property
    def name(self) -> str:
        """Name of the wrapped department."""
        return self.department.name

    def walk(self) -> Iterable[tuple[int, DepartmentNode]]:
        """Yield `(depth, node)` pairs depth-first, starting with this node at 0."""
        stack: list[tuple[int, DepartmentNode]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))


def _is_name_char(ch: str) -> bool:
    code = ord(ch)
    return any(low <= code <= high for low, high in _NAME_CHAR_RANGES)


def name_problem(name: str) -> str | None:
    """Return why `name` cannot label a department, or None if it can.

    `name` is expected to be stripped and non-empty already. Control
    characters are refused because the interchange document cannot carry
    them unchanged.
    """
    if len(name) > NAME_MAX_LENGTH:
        return f"Name must be at most {NAME_MAX_LENGTH} characters."
    if not all(_is_name_char(ch) for ch in name):
        return "Name must not contain control characters."
    return None


def sibling_sort_key(department: Department) -> tuple[int, int]:
    """Display order among siblings: order number, then id as a tiebreaker."""
    return (department.order_number, department.id or 0)


def next_order_number(current_max: int | None) -> int:
    """Return the order number for a department appended to a sibling group.

    Args:
        current_max: Highest order number among the current siblings, or None
            when the group is empty.
    """
    return (current_max or 0) + 1


def build_forest(departments: Iterable[Department]) -> list[DepartmentNode]:
    """Assemble flat department records into ordered trees.

    Roots are departments without a parent. Records whose parent is not part
    of `departments` are not reachable and are left out.

    Args:
        departments: Flat department records.

    Returns:
        The root nodes, each populated recursively with its children; every
        sibling group is sorted by `sibling_sort_key`.
    """
    nodes: dict[int | None, DepartmentNode] = {}
    by_parent: dict[int | None, list[Department]] = defaultdict(list)
    for department in departments:
        nodes[department.id] = DepartmentNode(department)
        by_parent[department.parent_id].append(department)

    for parent_id, children in by_parent.items():
        if parent_id is None or parent_id not in nodes:
            continue
        nodes[parent_id].children = [
            nodes[child.id] for child in sorted(children, key=sibling_sort_key)
        ]

    return [nodes[root.id] for root in sorted(by_parent[None], key=sibling_sort_key)]


def creates_cycle(
    department_id: int,
    new_parent_id: int | None,
    parent_of: Callable[[int], int | None],
    max_depth: int,
) -> bool:
    """Check whether re-parenting `department_id` under `new_parent_id` closes a loop.

    Walks the ancestor chain upward from `new_parent_id`. The walk is bounded
    by `max_depth`; a chain longer than that already contains a cycle.

    Args:
        department_id: The department being moved.
        new_parent_id: The prospective parent (None means "make it a root").
        parent_of: Returns the parent id of a department id (None for roots
            and for unknown ids).
        max_depth: Upper bound on the chain length, usually the number of
            stored departments.

    Returns:
        True if `department_id` is `new_parent_id` or one of its ancestors.
    """
    current = new_parent_id
    for _ in range(max_depth + 1):
        if current is None:
            return False
        if current == department_id:
            return True
        current = parent_of(current)
    return True


def parents_first(departments: Sequence[Department]) -> list[Department]:
    """Order a batch so every department follows its parent when both are in it.

    Departments whose parent lies outside the batch (or who are roots) come
    first, keeping their relative input order.

    Raises:
        ImportCycleError: If parent links inside the batch form a cycle.
    """
    batch_ids = {d.id for d in departments}
    pending: dict[int | None, list[Department]] = defaultdict(list)
    ready: list[Department] = []
    for department in departments:
        if department.parent_id is not None and department.parent_id in batch_ids:
            pending[department.parent_id].append(department)
        else:
            ready.append(department)

    ordered: list[Department] = []
    while ready:
        department = ready.pop(0)
        ordered.append(department)
        ready.extend(pending.pop(department.id, []))

    if pending:
        stuck = {d.id for group in pending.values() for d in group if d.id is not None}
        raise ImportCycleError(stuck)
    return ordered
