"""Unit of Measure — aggregate root for UOM master data.

Invariants:
    - name and created_by are non-empty after create()
    - created_at / created_by never change after construction
    - Every update() stamps updated_at strictly later than the last audit timestamp
    - A failed update() leaves the entity untouched (validate first, then assign)

Design Decisions:
    - create() validates, reconstitute() trusts storage: loading never re-runs invariants
    - is_base_uom is not enforced unique per category; nothing guarantees one base per category
"""

from datetime import datetime

from costing_master.core.audit import next_audit_timestamp, utc_now
from costing_master.core.errors import EmptyCreatedByError, EmptyNameError, EntityKind
from costing_master.core.value_objects import UOMCategory, UOMCode


class UnitOfMeasure:
    """UOM aggregate root. Fields are read-only; mutate through methods."""

    def __init__(
        self,
        code: UOMCode,
        name: str,
        category: UOMCategory,
        is_base_uom: bool,
        created_at: datetime,
        created_by: str,
        updated_at: datetime | None = None,
        updated_by: str | None = None,
    ):
        self._code = code
        self._name = name
        self._category = category
        self._is_base_uom = is_base_uom
        self._created_at = created_at
        self._created_by = created_by
        self._updated_at = updated_at
        self._updated_by = updated_by

    @classmethod
    def create(
        cls, code: UOMCode, name: str, category: UOMCategory, created_by: str,
    ) -> "UnitOfMeasure":
        """Validated constructor for a brand-new UOM."""
        if not name:
            raise EmptyNameError(EntityKind.UOM)
        if not created_by:
            raise EmptyCreatedByError(EntityKind.UOM)
        return cls(
            code=code,
            name=name,
            category=category,
            is_base_uom=False,
            created_at=utc_now(),
            created_by=created_by,
        )

    @classmethod
    def reconstitute(
        cls,
        code: UOMCode,
        name: str,
        category: UOMCategory,
        is_base_uom: bool,
        created_at: datetime,
        created_by: str,
        updated_at: datetime | None,
        updated_by: str | None,
    ) -> "UnitOfMeasure":
        """Rebuild from persistence without validation."""
        return cls(
            code, name, category, is_base_uom,
            created_at, created_by, updated_at, updated_by,
        )

    @property
    def code(self) -> UOMCode:
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> UOMCategory:
        return self._category

    @property
    def is_base_uom(self) -> bool:
        return self._is_base_uom

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def created_by(self) -> str:
        return self._created_by

    @property
    def updated_at(self) -> datetime | None:
        return self._updated_at

    @property
    def updated_by(self) -> str | None:
        return self._updated_by

    def set_as_base_uom(self) -> None:
        """Mark this UOM as the base unit for its category."""
        self._is_base_uom = True

    def update(
        self, name: str, category: UOMCategory, is_base_uom: bool, updated_by: str,
    ) -> None:
        if not name:
            raise EmptyNameError(EntityKind.UOM)
        if not updated_by:
            raise EmptyCreatedByError(EntityKind.UOM)

        self._name = name
        self._category = category
        self._is_base_uom = is_base_uom
        self._updated_at = next_audit_timestamp(self._updated_at or self._created_at)
        self._updated_by = updated_by

    def __repr__(self) -> str:
        return f"UnitOfMeasure(code={self._code.value!r}, category={self._category.value})"
