"""Parameter ORM — persists costing parameters (mst_parameter).

Invariants:
    - parameter_code is the primary key
    - uom references mst_uom.uom_code; deleting the UOM sets it to NULL
    - allowed_values stored as a JSON array (JSONB on PostgreSQL), never NULL
    - min_value / max_value NULL means "no bound"

Design Decisions:
    - Numeric(18, 6, asdecimal=False): fixed precision in the store, floats in the domain
"""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from costing_master.db.base import Base


class ParameterModel(Base):
    """Row in mst_parameter."""
    __tablename__ = "mst_parameter"
    __table_args__ = (
        CheckConstraint(
            "parameter_category IN ('MACHINE', 'MATERIAL', 'QUALITY', 'OUTPUT', 'PROCESS')",
            name="ck_mst_parameter_category",
        ),
        CheckConstraint(
            "data_type IN ('NUMERIC', 'TEXT', 'BOOLEAN', 'DROPDOWN')",
            name="ck_mst_parameter_data_type",
        ),
        Index("idx_mst_parameter_category", "parameter_category"),
        Index("idx_mst_parameter_active", "is_active"),
        Index("idx_mst_parameter_data_type", "data_type"),
    )

    parameter_code: Mapped[str] = mapped_column(String(50), primary_key=True)
    parameter_name: Mapped[str] = mapped_column(String(200), nullable=False)
    parameter_category: Mapped[str] = mapped_column(String(20), nullable=False)
    data_type: Mapped[str] = mapped_column(String(20), nullable=False)
    uom: Mapped[str | None] = mapped_column(
        String(20),
        ForeignKey("mst_uom.uom_code", ondelete="SET NULL"),
        nullable=True,
    )
    min_value: Mapped[float | None] = mapped_column(
        Numeric(18, 6, asdecimal=False), nullable=True,
    )
    max_value: Mapped[float | None] = mapped_column(
        Numeric(18, 6, asdecimal=False), nullable=True,
    )
    allowed_values: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list,
    )
    is_mandatory: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
