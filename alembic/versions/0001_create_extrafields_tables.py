"""Create extra fields tables

Revision ID: 0001_extrafields
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_extrafields"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "extrafields_fields",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_extrafields_fields_id"), "extrafields_fields", ["id"], unique=False)
    op.create_index(op.f("ix_extrafields_fields_name"), "extrafields_fields", ["name"], unique=True)

    op.create_table(
        "extrafields_values",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("field_id", sa.Integer(), nullable=False),
        sa.Column("resource_id", sa.Integer(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["field_id"], ["extrafields_fields.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("field_id", "resource_id", name="uq_extrafields_values_field_resource"),
    )
    op.create_index(op.f("ix_extrafields_values_id"), "extrafields_values", ["id"], unique=False)
    op.create_index(op.f("ix_extrafields_values_field_id"), "extrafields_values", ["field_id"], unique=False)
    op.create_index(op.f("ix_extrafields_values_resource_id"), "extrafields_values", ["resource_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_extrafields_values_resource_id"), table_name="extrafields_values")
    op.drop_index(op.f("ix_extrafields_values_field_id"), table_name="extrafields_values")
    op.drop_index(op.f("ix_extrafields_values_id"), table_name="extrafields_values")
    op.drop_table("extrafields_values")

    op.drop_index(op.f("ix_extrafields_fields_name"), table_name="extrafields_fields")
    op.drop_index(op.f("ix_extrafields_fields_id"), table_name="extrafields_fields")
    op.drop_table("extrafields_fields")
