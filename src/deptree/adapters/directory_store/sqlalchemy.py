"""Implementation of DirectoryStore using SQLAlchemy Core."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select, text, update
from sqlalchemy.exc import IntegrityError

from deptree.adapters.db.dialects import DialectName
from deptree.domain.department import Department, parents_first
from deptree.interfaces.directory_store import DirectoryStore
from deptree.interfaces.errors import (
    DepartmentHasChildrenError,
    DepartmentNotFoundError,
    DirectoryIntegrityError,
    DuplicateDepartmentError,
    ParentNotFoundError,
)

from .schema import departments

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row

logger = logging.getLogger(__name__)

_COLUMNS = (
    departments.c.id,
    departments.c.name,
    departments.c.parent_id,
    departments.c.order_number,
)


def _to_department(row: Row) -> Department:
    return Department(
        id=row.id,
        name=row.name,
        parent_id=row.parent_id,
        order_number=row.order_number,
    )


def _to_values(department: Department) -> dict[str, object]:
    values: dict[str, object] = {
        "name": department.name,
        "parent_id": department.parent_id,
        "order_number": department.order_number,
    }
    if department.id is not None:
        values["id"] = department.id
    return values


def _parent_filter(parent_id: int | None):
    if parent_id is None:
        return departments.c.parent_id.is_(None)
    return departments.c.parent_id == parent_id


class SqlAlchemyDirectoryStore(DirectoryStore):
    """DirectoryStore backed by the ``departments`` table.

    The store runs on a connection owned by the caller (usually a unit of
    work); it never commits. Integrity rules are checked up front so callers
    get typed errors, and the table constraints back them up.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- reads ---

    def get(self, department_id: int) -> Department | None:
        stmt = select(*_COLUMNS).where(departments.c.id == department_id)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return _to_department(row)

    def list_all(self) -> list[Department]:
        stmt = select(*_COLUMNS).order_by(departments.c.id)
        return [_to_department(row) for row in self.connection.execute(stmt)]

    def children_of(self, parent_id: int | None) -> list[Department]:
        stmt = (
            select(*_COLUMNS)
            .where(_parent_filter(parent_id))
            .order_by(departments.c.order_number, departments.c.id)
        )
        return [_to_department(row) for row in self.connection.execute(stmt)]

    def max_order_number(self, parent_id: int | None) -> int | None:
        stmt = select(func.max(departments.c.order_number)).where(
            _parent_filter(parent_id)
        )
        return self.connection.execute(stmt).scalar_one_or_none()

    # --- writes ---

    def add(self, department: Department) -> Department:
        self._check_parent(department.parent_id)
        if department.id is not None and self._exists(department.id):
            raise DuplicateDepartmentError([department.id])

        result = self._execute(insert(departments).values(**_to_values(department)))
        department_id = result.inserted_primary_key[0]
        return Department(
            id=department_id,
            name=department.name,
            parent_id=department.parent_id,
            order_number=department.order_number,
        )

    def add_many(self, batch: Sequence[Department]) -> None:
        if not batch:
            return
        if any(d.id is None for d in batch):
            raise ValueError("add_many needs departments with explicit ids")

        ids = [d.id for d in batch]
        duplicates = {i for i in ids if ids.count(i) > 1}
        stmt = select(departments.c.id).where(departments.c.id.in_(ids))
        duplicates.update(self.connection.execute(stmt).scalars())
        if duplicates:
            raise DuplicateDepartmentError(duplicates)

        batch_ids = set(ids)
        for parent_id in {d.parent_id for d in batch} - batch_ids:
            self._check_parent(parent_id)

        rows = [_to_values(d) for d in parents_first(batch)]
        # executemany keeps row order, so parents are inserted first
        self._execute(insert(departments), rows)

        if self.dialect is DialectName.POSTGRES:
            self._sync_id_sequence()
        logger.debug("Inserted %d department rows", len(rows))

    def update(self, department: Department) -> None:
        if department.id is None or not self._exists(department.id):
            raise DepartmentNotFoundError(department.id)  # type: ignore[arg-type]
        self._check_parent(department.parent_id)
        values = _to_values(department)
        del values["id"]
        self._execute(
            update(departments)
            .where(departments.c.id == department.id)
            .values(**values)
        )

    def remove(self, department_id: int) -> None:
        if not self._exists(department_id):
            raise DepartmentNotFoundError(department_id)
        if child_count := len(self.children_of(department_id)):
            raise DepartmentHasChildrenError(department_id, child_count)
        self._execute(delete(departments).where(departments.c.id == department_id))

    # --- helpers ---

    def _exists(self, department_id: int) -> bool:
        stmt = select(departments.c.id).where(departments.c.id == department_id)
        return self.connection.execute(stmt).first() is not None

    def _check_parent(self, parent_id: int | None) -> None:
        if parent_id is not None and not self._exists(parent_id):
            raise ParentNotFoundError(parent_id)

    def _execute(self, stmt, params=None):
        try:
            return self.connection.execute(stmt, params)
        except IntegrityError as e:
            # pre-checks cover the expected cases; this catches races and
            # constraints the checks do not model
            logger.warning("Integrity error writing departments: %s", e.orig)
            raise DirectoryIntegrityError(str(e.orig)) from e

    def _sync_id_sequence(self) -> None:
        # explicit ids bypass the serial sequence on Postgres
        self.connection.execute(
            text(
                "SELECT setval(pg_get_serial_sequence('departments', 'id'), "
                "COALESCE((SELECT MAX(id) FROM departments), 1))"
            )
        )
