"""UOM ORM — persists the Unit of Measure master table (mst_uom).

Invariants:
    - uom_code is the primary key: the store's uniqueness check is the final
      authority for concurrent creates
    - uom_category restricted to WEIGHT, VOLUME, QUANTITY, LENGTH by a CHECK constraint
    - updated_at / updated_by are NULL until the first update
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from costing_master.db.base import Base


class UOMModel(Base):
    """Row in mst_uom."""
    __tablename__ = "mst_uom"
    __table_args__ = (
        CheckConstraint(
            "uom_category IN ('WEIGHT', 'VOLUME', 'QUANTITY', 'LENGTH')",
            name="ck_mst_uom_category",
        ),
        Index("idx_mst_uom_category", "uom_category"),
    )

    uom_code: Mapped[str] = mapped_column(String(20), primary_key=True)
    uom_name: Mapped[str] = mapped_column(String(100), nullable=False)
    uom_category: Mapped[str] = mapped_column(String(20), nullable=False)
    is_base_uom: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
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
