"""Service layer handlers for the department directory."""

import logging
from collections.abc import Callable
from dataclasses import replace

from deptree.domain.department import (
    Department,
    creates_cycle,
    name_problem,
    next_order_number,
    parents_first,
)
from deptree.domain.errors import MoveWouldCreateCycleError, ValidationError
from deptree.interfaces.errors import ParentNotFoundError
from deptree.interfaces.unit_of_work import AbstractUnitOfWork

from . import commands
from .interchange import load_departments

# pylint: disable=consider-using-assignment-expr

logger = logging.getLogger(__name__)


def _validate_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": "Name is required."})
    if problem := name_problem(name):
        raise ValidationError({"name": problem})
    return name


# ============================================================================
#                           Directory Handlers
# ============================================================================


def create_department(
    cmd: commands.CreateDepartment, uow: AbstractUnitOfWork
) -> None:
    """Create a department as the last sibling under its parent."""

    name = _validate_name(cmd.name)

    with uow:
        order_number = next_order_number(uow.departments.max_order_number(cmd.parent_id))
        department = uow.departments.add(
            Department(name=name, parent_id=cmd.parent_id, order_number=order_number)
        )
        uow.commit()

    logger.info(
        "Created department %s %r (parent=%s, order=%s)",
        department.id,
        department.name,
        department.parent_id,
        department.order_number,
    )


def delete_department(
    cmd: commands.DeleteDepartment, uow: AbstractUnitOfWork
) -> None:
    """Delete a department; deleting an absent department is a no-op."""

    with uow:
        if uow.departments.get(cmd.department_id) is None:
            logger.debug("DeleteDepartment %s: not found; noop", cmd.department_id)
            return

        uow.departments.remove(cmd.department_id)
        uow.commit()

    logger.info("Deleted department %s", cmd.department_id)


def move_department(cmd: commands.MoveDepartment, uow: AbstractUnitOfWork) -> None:
    """Re-parent a department and append it to its new sibling group."""

    with uow:
        store = uow.departments
        department = store.get(cmd.department_id)
        if department is None:
            logger.debug("MoveDepartment %s: not found; noop", cmd.department_id)
            return

        if cmd.new_parent_id is not None:
            if store.get(cmd.new_parent_id) is None:
                raise ParentNotFoundError(cmd.new_parent_id)

            def parent_of(department_id: int) -> int | None:
                found = store.get(department_id)
                return found.parent_id if found is not None else None

            if creates_cycle(
                cmd.department_id,
                cmd.new_parent_id,
                parent_of=parent_of,
                max_depth=len(store.list_all()),
            ):
                raise MoveWouldCreateCycleError(cmd.department_id, cmd.new_parent_id)

        moved = replace(
            department,
            parent_id=cmd.new_parent_id,
            order_number=next_order_number(store.max_order_number(cmd.new_parent_id)),
        )
        store.update(moved)
        uow.commit()

    logger.info(
        "Moved department %s under %s (order=%s)",
        moved.id,
        moved.parent_id,
        moved.order_number,
    )


def import_departments(
    cmd: commands.ImportDepartments, uow: AbstractUnitOfWork
) -> None:
    """Bulk-insert departments from an XML payload in a single transaction."""

    if not cmd.payload.strip():
        logger.debug("ImportDepartments: empty payload; noop")
        return

    departments = parents_first(load_departments(cmd.payload))

    with uow:
        uow.departments.add_many(departments)
        uow.commit()

    logger.info("Imported %d departments", len(departments))


# ============================================================================
#                       Handler Registry
# ============================================================================


COMMAND_HANDLERS: dict[type, Callable[..., None]] = {
    commands.CreateDepartment: create_department,
    commands.DeleteDepartment: delete_department,
    commands.MoveDepartment: move_department,
    commands.ImportDepartments: import_departments,
}
