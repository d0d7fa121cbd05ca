"""Fixtures for generating test data."""

from collections.abc import Callable, Iterable

import pytest

from deptree.domain.department import Department
from deptree.service_layer.interchange import XSI_NS

# exports from other systems declare it; nothing uses the prefix
XSD_NS = "http://www.w3.org/2001/XMLSchema"

# pylint: disable=redefined-outer-name


def department_xml(
    department_id: int,
    name: str,
    parent_id: int | None = None,
    order_number: int = 1,
) -> str:
    """Return one ``<Department>`` record as it appears in an export."""
    parent = (
        '<ParentId xsi:nil="true" />'
        if parent_id is None
        else f"<ParentId>{parent_id}</ParentId>"
    )
    return (
        "<Department>"
        f"<Id>{department_id}</Id>"
        f"<Name>{name}</Name>"
        f"{parent}"
        f"<OrderNumber>{order_number}</OrderNumber>"
        "</Department>"
    )


def wrap_records(records: Iterable[str]) -> bytes:
    """Wrap record fragments in an ``<ArrayOfDepartment>`` document."""
    body = "".join(records)
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<ArrayOfDepartment xmlns:xsi="{XSI_NS}" xmlns:xsd="{XSD_NS}">'
        f"{body}"
        "</ArrayOfDepartment>"
    ).encode("utf-8")


@pytest.fixture
def make_department() -> Callable[..., Department]:
    """Factory for `Department` records with sensible defaults.

    Args (defaults):
        - name: str = "Engineering"
        - parent_id: int | None = None
        - order_number: int = 1
        - id: int | None = None

    Defaults can be overridden by keyword arguments.
    """

    def _make(
        name: str = "Engineering",
        *,
        parent_id: int | None = None,
        order_number: int = 1,
        id: int | None = None,  # pylint: disable=redefined-builtin
    ) -> Department:
        return Department(
            name=name, parent_id=parent_id, order_number=order_number, id=id
        )

    return _make


@pytest.fixture
def make_import_payload() -> Callable[..., bytes]:
    """Factory for XML import payloads.

    Takes `(id, name, parent_id, order_number)` tuples and returns the
    encoded document, records in the given order.
    """

    def _make(*rows: tuple[int, str, int | None, int]) -> bytes:
        return wrap_records(department_xml(*row) for row in rows)

    return _make


@pytest.fixture
def engineering_payload(make_import_payload) -> bytes:
    """Three-level sample directory, children listed before their parents.

    1 Engineering
      2 Backend
        3 Payments
      4 Frontend
    5 Sales
    """
    return make_import_payload(
        (3, "Payments", 2, 1),
        (2, "Backend", 1, 1),
        (1, "Engineering", None, 1),
        (4, "Frontend", 1, 2),
        (5, "Sales", None, 2),
    )
