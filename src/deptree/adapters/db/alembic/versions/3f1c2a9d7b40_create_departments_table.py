"""create departments table

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:41.508113

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "departments",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Store-assigned identifier; preserved by import.",
        ),
        sa.Column(
            "name",
            sa.String(length=200),
            nullable=False,
            comment="Display label.",
        ),
        sa.Column(
            "parent_id",
            sa.Integer(),
            nullable=True,
            comment="Parent department; NULL for roots.",
        ),
        sa.Column(
            "order_number",
            sa.Integer(),
            nullable=False,
            comment="Sibling ordering key, unique among siblings only.",
        ),
        sa.CheckConstraint(
            "parent_id IS NULL OR parent_id <> id",
            name=op.f("ck_departments_not_own_parent"),
        ),
        sa.ForeignKeyConstraint(
            ["parent_id"],
            ["departments.id"],
            name=op.f("fk_departments_parent_id_departments"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_departments")),
        comment="Organizational directory. One row per department.",
        sqlite_autoincrement=True,
    )
    op.create_index(
        op.f("ix_departments_parent_id_order_number"),
        "departments",
        ["parent_id", "order_number"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(
        op.f("ix_departments_parent_id_order_number"), table_name="departments"
    )
    op.drop_table("departments")
