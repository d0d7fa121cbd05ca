"""Directory schema.

Defines the ``departments`` table: one row per department, with the tree
expressed through a self-referencing ``parent_id``.

Constraints (enforced here):

| Constraint                              | Purpose                               |
|-----------------------------------------|---------------------------------------|
| PK(id), AUTOINCREMENT on SQLite         | ids are never reused after a delete   |
| FK(parent_id → id) ON DELETE RESTRICT   | no dangling parents, no cascades      |
| CHECK(parent_id <> id)                  | a department is not its own parent    |
| INDEX(parent_id, order_number)          | sibling lookups and max(order_number) |

Deeper cycles cannot be expressed as a constraint; the service layer
guards moves and imports against them.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
)

from deptree.adapters.db.metadata import metadata
from deptree.domain.department import NAME_MAX_LENGTH

__all__ = ["departments"]

departments = Table(
    "departments",
    metadata,
    Column(
        "id",
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier; preserved by import.",
    ),
    Column(
        "name",
        String(NAME_MAX_LENGTH),
        nullable=False,
        comment="Display label.",
    ),
    Column(
        "parent_id",
        Integer,
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=True,
        comment="Parent department; NULL for roots.",
    ),
    Column(
        "order_number",
        Integer,
        nullable=False,
        comment="Sibling ordering key, unique among siblings only.",
    ),
    CheckConstraint("parent_id IS NULL OR parent_id <> id", name="not_own_parent"),
    Index("ix_departments_parent_id_order_number", "parent_id", "order_number"),
    comment="Organizational directory. One row per department.",
    sqlite_autoincrement=True,
)
