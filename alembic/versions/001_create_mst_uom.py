"""Create mst_uom — Unit of Measure master table.

Revision ID: 001_create_mst_uom
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_mst_uom"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mst_uom",
        sa.Column("uom_code", sa.String(20), primary_key=True,
                  comment="Unique code for UOM, e.g., KG, TON, M"),
        sa.Column("uom_name", sa.String(100), nullable=False),
        sa.Column("uom_category", sa.String(20), nullable=False,
                  comment="Category: WEIGHT, VOLUME, QUANTITY, LENGTH"),
        sa.Column("is_base_uom", sa.Boolean, nullable=False, server_default=sa.false(),
                  comment="True if this is the base UOM for its category"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_by", sa.String(100), nullable=True),
        sa.CheckConstraint(
            "uom_category IN ('WEIGHT', 'VOLUME', 'QUANTITY', 'LENGTH')",
            name="ck_mst_uom_category",
        ),
        comment="Master table for Unit of Measures",
    )
    op.create_index("idx_mst_uom_category", "mst_uom", ["uom_category"])


def downgrade() -> None:
    op.drop_index("idx_mst_uom_category", table_name="mst_uom")
    op.drop_table("mst_uom")
