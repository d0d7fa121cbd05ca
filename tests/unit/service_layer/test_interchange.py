"""Unit tests for the XML interchange format."""

import xml.etree.ElementTree as ET

import pytest
from hypothesis import given
from hypothesis import strategies as st

from deptree.domain.department import NAME_MAX_LENGTH, Department
from deptree.service_layer.interchange import (
    XSI_NIL,
    InterchangeFormatError,
    dump_departments,
    load_departments,
)
from tests.fixtures.datagen import department_xml, wrap_records

# pylint: disable=magic-value-comparison


class TestDump:
    """Tests for writing the interchange document."""

    @staticmethod
    def test_empty_directory_is_an_empty_array():
        """No departments yields a root element without records."""
        root = ET.fromstring(dump_departments([]))
        assert root.tag == "ArrayOfDepartment"
        assert len(root) == 0

    @staticmethod
    def test_starts_with_utf8_declaration():
        """The payload is a UTF-8 XML document."""
        payload = dump_departments([Department(name="A", order_number=1, id=1)])
        assert payload.startswith(b"<?xml version='1.0' encoding='utf-8'?>")

    @staticmethod
    def test_only_the_xsi_namespace_is_declared():
        """The root element declares the one namespace its records use."""
        payload = dump_departments([Department(name="A", order_number=1, id=1)])
        assert b'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"' in payload
        assert b"xmlns:xsd" not in payload

    @staticmethod
    def test_root_parent_is_nil():
        """Roots are written with an xsi:nil ParentId."""
        root = ET.fromstring(
            dump_departments([Department(name="A", order_number=1, id=1)])
        )
        parent = root.find("Department/ParentId")
        assert parent is not None
        assert parent.get(XSI_NIL) == "true"
        assert not parent.text

    @staticmethod
    def test_records_are_sorted_by_id_and_carry_all_fields():
        """Each record holds Id, Name, ParentId and OrderNumber."""
        payload = dump_departments(
            [
                Department(name="Backend", parent_id=1, order_number=1, id=2),
                Department(name="Engineering", order_number=1, id=1),
            ]
        )
        records = ET.fromstring(payload).findall("Department")

        assert [r.findtext("Id") for r in records] == ["1", "2"]
        assert records[1].findtext("Name") == "Backend"
        assert records[1].findtext("ParentId") == "1"
        assert records[1].findtext("OrderNumber") == "1"

    @staticmethod
    def test_children_are_never_written():
        """Only the parent reference is serialized."""
        payload = dump_departments(
            [
                Department(name="A", order_number=1, id=1),
                Department(name="B", parent_id=1, order_number=1, id=2),
            ]
        )
        assert b"Children" not in payload

    @staticmethod
    def test_names_are_escaped():
        """Markup characters in names survive the round trip."""
        original = [Department(name="R&D <Labs>", order_number=1, id=1)]
        assert load_departments(dump_departments(original)) == original


class TestLoad:
    """Tests for reading the interchange document."""

    @staticmethod
    def test_reads_records_in_document_order():
        """Records keep the document order and their explicit ids."""
        payload = wrap_records(
            [department_xml(2, "Backend", 1, 1), department_xml(1, "Engineering")]
        )
        assert load_departments(payload) == [
            Department(name="Backend", parent_id=1, order_number=1, id=2),
            Department(name="Engineering", parent_id=None, order_number=1, id=1),
        ]

    @staticmethod
    @pytest.mark.parametrize(
        "parent_element",
        ["", "<ParentId />", "<ParentId></ParentId>", '<ParentId xsi:nil="1" />'],
    )
    def test_root_markers(parent_element):
        """Absent, empty and nil ParentId all mark a root."""
        payload = wrap_records(
            [
                "<Department><Id>1</Id><Name>A</Name>"
                f"{parent_element}<OrderNumber>1</OrderNumber></Department>"
            ]
        )
        (department,) = load_departments(payload)
        assert department.parent_id is None

    @staticmethod
    def test_unknown_elements_are_ignored():
        """Extra fields such as a Children list are skipped."""
        payload = wrap_records(
            [
                "<Department><Id>1</Id><Name>A</Name><Children />"
                "<OrderNumber>1</OrderNumber><Note>x</Note></Department>"
            ]
        )
        assert load_departments(payload)[0].name == "A"

    @staticmethod
    def test_empty_array():
        """A document without records loads as an empty list."""
        assert not load_departments(wrap_records([]))

    @staticmethod
    @pytest.mark.parametrize(
        "payload, fragment",
        [
            (b"<ArrayOfDepartment><Department>", "not well-formed XML"),
            (b"<Departments />", "expected <ArrayOfDepartment> root element"),
            (
                wrap_records(["<Team><Id>1</Id></Team>"]),
                "record 0: unexpected element <Team>",
            ),
            (
                wrap_records(
                    ["<Department><Id>1</Id><OrderNumber>1</OrderNumber></Department>"]
                ),
                "record 0: missing <Name>",
            ),
            (
                wrap_records(
                    ["<Department><Name>A</Name><OrderNumber>1</OrderNumber></Department>"]
                ),
                "record 0: missing <Id>",
            ),
            (
                wrap_records(["<Department><Id>1</Id><Name>A</Name></Department>"]),
                "record 0: missing <OrderNumber>",
            ),
            (
                wrap_records(
                    [
                        department_xml(1, "A"),
                        department_xml(2, "B", 1, 1).replace("<Id>2</Id>", "<Id>two</Id>"),
                    ]
                ),
                "record 1: <Id> must be an integer, got 'two'",
            ),
            (
                wrap_records(
                    [
                        department_xml(1, "A").replace(
                            '<ParentId xsi:nil="true" />', "<ParentId>x</ParentId>"
                        )
                    ]
                ),
                "record 0: <ParentId> must be an integer, got 'x'",
            ),
            (
                wrap_records([department_xml(1, "x" * (NAME_MAX_LENGTH + 1))]),
                f"record 0: invalid <Name>: Name must be at most {NAME_MAX_LENGTH}",
            ),
            (
                wrap_records([department_xml(1, "A"), department_xml(2, "R&amp;D&#13;Lab")]),
                "record 1: invalid <Name>: Name must not contain control characters",
            ),
            (
                wrap_records([department_xml(1, "Ops&#1;Team")]),
                "not well-formed XML",
            ),
        ],
    )
    def test_malformed_payloads(payload, fragment):
        """Malformed documents raise InterchangeFormatError naming the problem."""
        with pytest.raises(InterchangeFormatError) as exc_info:
            load_departments(payload)
        assert fragment in str(exc_info.value)
        assert str(exc_info.value).startswith("Malformed department file: ")

    @staticmethod
    def test_names_are_stripped():
        """Whitespace around a name, e.g. from pretty-printing, is dropped."""
        payload = wrap_records([department_xml(1, "\n    Engineering\n  ")])
        assert load_departments(payload)[0].name == "Engineering"


# names create accepts: stripped, non-empty, no control characters
names = (
    st.text(
        alphabet=st.characters(exclude_categories=("Cc", "Cs", "Cn")),
        min_size=1,
        max_size=NAME_MAX_LENGTH,
    )
    .map(str.strip)
    .filter(bool)
)


@st.composite
def directories(draw) -> list[Department]:
    """Departments with ids 1..n, each parented by a lower id or a root."""
    departments = []
    for department_id, name in enumerate(draw(st.lists(names, max_size=6)), start=1):
        parent_id = (
            draw(st.none() | st.integers(1, department_id - 1))
            if department_id > 1
            else None
        )
        departments.append(
            Department(
                id=department_id,
                name=name,
                parent_id=parent_id,
                order_number=draw(st.integers(-(2**31), 2**31 - 1)),
            )
        )
    return departments


@given(directories())
def test_load_reads_back_what_dump_writes(departments):
    """Every storable directory survives export and import unchanged."""
    assert load_departments(dump_departments(departments)) == departments
