"""Create mst_parameter — costing parameter master table.

Revision ID: 002_create_mst_parameter
Revises: 001_create_mst_uom
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "002_create_mst_parameter"
down_revision: Union[str, None] = "001_create_mst_uom"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mst_parameter",
        sa.Column("parameter_code", sa.String(50), primary_key=True),
        sa.Column("parameter_name", sa.String(200), nullable=False),
        sa.Column("parameter_category", sa.String(20), nullable=False,
                  comment="Category: MACHINE, MATERIAL, QUALITY, OUTPUT, PROCESS"),
        sa.Column("data_type", sa.String(20), nullable=False,
                  comment="Data type: NUMERIC, TEXT, BOOLEAN, DROPDOWN"),
        sa.Column("uom", sa.String(20), nullable=True),
        sa.Column("min_value", sa.Numeric(18, 6), nullable=True),
        sa.Column("max_value", sa.Numeric(18, 6), nullable=True),
        sa.Column("allowed_values", JSONB, nullable=False, server_default=sa.text("'[]'::jsonb"),
                  comment="JSON array of allowed values for DROPDOWN type"),
        sa.Column("is_mandatory", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_by", sa.String(100), nullable=True),
        sa.ForeignKeyConstraint(
            ["uom"], ["mst_uom.uom_code"],
            name="fk_mst_parameter_uom", ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "parameter_category IN ('MACHINE', 'MATERIAL', 'QUALITY', 'OUTPUT', 'PROCESS')",
            name="ck_mst_parameter_category",
        ),
        sa.CheckConstraint(
            "data_type IN ('NUMERIC', 'TEXT', 'BOOLEAN', 'DROPDOWN')",
            name="ck_mst_parameter_data_type",
        ),
        comment="Master table for costing parameters",
    )
    op.create_index("idx_mst_parameter_category", "mst_parameter", ["parameter_category"])
    op.create_index("idx_mst_parameter_active", "mst_parameter", ["is_active"])
    op.create_index("idx_mst_parameter_data_type", "mst_parameter", ["data_type"])


def downgrade() -> None:
    op.drop_index("idx_mst_parameter_data_type", table_name="mst_parameter")
    op.drop_index("idx_mst_parameter_active", table_name="mst_parameter")
    op.drop_index("idx_mst_parameter_category", table_name="mst_parameter")
    op.drop_table("mst_parameter")
