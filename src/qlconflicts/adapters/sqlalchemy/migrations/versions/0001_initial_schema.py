"""Initial schema: products, conflicts and resolution history.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-06-02 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "product",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("item_number", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("overall_reason", sa.Text(), nullable=True),
        sa.Column("overall_equal", sa.Boolean(), nullable=False),
        sa.Column("responsible_person_name", sa.String(), nullable=False),
        sa.Column("responsible_person_email", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_product"),
        sa.UniqueConstraint("item_number", name="uq_product_item_number"),
    )
    op.create_index(
        "ix_product_responsible_person_email", "product", ["responsible_person_email"]
    )

    op.create_table(
        "conflict",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("conflict_type", sa.String(length=64), nullable=False),
        sa.Column("quality_line_value", sa.Text(), nullable=True),
        sa.Column("attribute_value", sa.Text(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("is_equal", sa.Boolean(), nullable=False),
        sa.Column("resolved_value", sa.String(), nullable=True),
        sa.Column("resolution_comment", sa.Text(), nullable=True),
        sa.Column("resolved_by", sa.String(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["product_id"],
            ["product.id"],
            name="fk_conflict_product_id_product",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_conflict"),
    )
    op.create_index("ix_conflict_product_id", "conflict", ["product_id"])

    op.create_table(
        "resolution",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("conflict_id", sa.Uuid(), nullable=False),
        sa.Column("selected_value", sa.String(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("resolved_by", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["conflict_id"],
            ["conflict.id"],
            name="fk_resolution_conflict_id_conflict",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_resolution"),
    )
    op.create_index("ix_resolution_conflict_id", "resolution", ["conflict_id"])


def downgrade() -> None:
    op.drop_index("ix_resolution_conflict_id", table_name="resolution")
    op.drop_table("resolution")
    op.drop_index("ix_conflict_product_id", table_name="conflict")
    op.drop_table("conflict")
    op.drop_index("ix_product_responsible_person_email", table_name="product")
    op.drop_table("product")
