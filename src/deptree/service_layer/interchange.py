"""XML interchange format for department import/export.

The document is a flat list of department records; the tree is rebuilt from
``ParentId`` alone, so record order carries no meaning::

    <?xml version='1.0' encoding='utf-8'?>
    <ArrayOfDepartment xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
      <Department>
        <Id>1</Id>
        <Name>Engineering</Name>
        <ParentId xsi:nil="true" />
        <OrderNumber>1</OrderNumber>
      </Department>
    </ArrayOfDepartment>

Derived data (children) is never written. On read, names are stripped and
checked with the same rules as on create, so every stored name survives a
round trip. Unknown child elements such as ``<Children />`` are ignored and a
root may be marked by an absent, empty, or ``xsi:nil`` ``ParentId``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable

from deptree.domain.department import Department, name_problem

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XSI_NIL = f"{{{XSI_NS}}}nil"

ROOT_TAG = "ArrayOfDepartment"
RECORD_TAG = "Department"

ET.register_namespace("xsi", XSI_NS)


class InterchangeFormatError(ValueError):
    """Raised when an import payload is not a valid department list."""

    def __init__(self, reason: str, index: int | None = None) -> None:
        where = f"record {index}: " if index is not None else ""
        super().__init__(f"Malformed department file: {where}{reason}")
        self.reason = reason
        self.index = index


# --- writing ---


def dump_departments(departments: Iterable[Department]) -> bytes:
    """Serialize departments to the XML interchange format (UTF-8 bytes)."""

    root = ET.Element(ROOT_TAG)
    for department in sorted(departments, key=lambda d: d.id or 0):
        record = ET.SubElement(root, RECORD_TAG)
        ET.SubElement(record, "Id").text = str(department.id)
        ET.SubElement(record, "Name").text = department.name
        parent = ET.SubElement(record, "ParentId")
        if department.is_root:
            parent.set(XSI_NIL, "true")
        else:
            parent.text = str(department.parent_id)
        ET.SubElement(record, "OrderNumber").text = str(department.order_number)

    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


# --- reading ---


def load_departments(payload: bytes) -> list[Department]:
    """Parse an XML interchange payload into department records.

    Args:
        payload: The raw document bytes.

    Returns:
        The records in document order, ids as given by the document.

    Raises:
        InterchangeFormatError: If the XML is ill-formed or a record is
            missing a field or carries a non-integer value.
    """

    try:
        root = ET.fromstring(payload)
    except ET.ParseError as e:
        raise InterchangeFormatError(f"not well-formed XML ({e})") from e

    if root.tag != ROOT_TAG:
        raise InterchangeFormatError(
            f"expected <{ROOT_TAG}> root element, found <{root.tag}>"
        )

    departments: list[Department] = []
    for index, record in enumerate(root):
        if record.tag != RECORD_TAG:
            raise InterchangeFormatError(
                f"unexpected element <{record.tag}>", index
            )
        departments.append(_read_record(record, index))
    return departments


def _read_record(record: ET.Element, index: int) -> Department:
    element = record.find("Name")
    name = (element.text or "").strip() if element is not None else ""
    if not name:
        raise InterchangeFormatError("missing <Name>", index)
    if problem := name_problem(name):
        raise InterchangeFormatError(f"invalid <Name>: {problem}", index)

    return Department(
        id=_read_int(record, "Id", index),
        name=name,
        parent_id=_read_parent(record, index),
        order_number=_read_int(record, "OrderNumber", index),
    )


def _read_int(record: ET.Element, tag: str, index: int) -> int:
    element = record.find(tag)
    if element is None or not (element.text or "").strip():
        raise InterchangeFormatError(f"missing <{tag}>", index)
    return _parse_int(element.text or "", tag, index)


def _read_parent(record: ET.Element, index: int) -> int | None:
    element = record.find("ParentId")
    if element is None or element.get(XSI_NIL) in {"true", "1"}:
        return None
    if not (text := (element.text or "").strip()):
        return None
    return _parse_int(text, "ParentId", index)


def _parse_int(text: str, tag: str, index: int) -> int:
    try:
        return int(text.strip())
    except ValueError as e:
        raise InterchangeFormatError(
            f"<{tag}> must be an integer, got {text.strip()!r}", index
        ) from e
