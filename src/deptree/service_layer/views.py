"""Read-side views: the directory listing and the XML export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .interchange import dump_departments

if TYPE_CHECKING:
    from deptree.domain.department import DepartmentNode
    from deptree.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "departments.xml"
EXPORT_CONTENT_TYPE = "application/xml"


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """A downloadable export: payload plus the name and type to serve it with."""

    content: bytes
    filename: str = EXPORT_FILENAME
    content_type: str = EXPORT_CONTENT_TYPE


def list_tree(uow: AbstractUnitOfWork) -> list[DepartmentNode]:
    """Return the root departments with their ordered subtrees."""
    with uow:
        return uow.departments.list_roots()


def export_departments(uow: AbstractUnitOfWork) -> ExportedFile:
    """Serialize every department into the XML interchange format."""
    with uow:
        departments = uow.departments.list_all()
    logger.info("Exporting %d departments", len(departments))
    return ExportedFile(content=dump_departments(departments))
