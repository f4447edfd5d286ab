"""Parameter — aggregate root for costing configuration parameters.

Invariants:
    - name and created_by are non-empty after create()
    - min_value <= max_value whenever both are present (None means absent, not 0.0)
    - DROPDOWN requires non-empty allowed_values, checked by set_allowed_values() only
    - is_active defaults to True, is_mandatory to False
    - Setters validate before assigning: a rejected call never partially mutates state

Design Decisions:
    - create() does not check the DROPDOWN/allowed_values pairing and update() does not
      re-check it; the handlers always call set_allowed_values() after either one
    - uom is a bare code string: existence is enforced by the storage foreign key
"""

from datetime import datetime

from costing_master.core.audit import next_audit_timestamp, utc_now
from costing_master.core.errors import (
    DropdownNoOptionsError, EmptyCreatedByError, EmptyNameError,
    EntityKind, MinGreaterThanMaxError,
)
from costing_master.core.value_objects import DataType, ParameterCategory, ParameterCode


class Parameter:
    """Parameter aggregate root. Fields are read-only; mutate through methods."""

    def __init__(
        self,
        code: ParameterCode,
        name: str,
        category: ParameterCategory,
        data_type: DataType,
        created_at: datetime,
        created_by: str,
        uom: str | None = None,
        min_value: float | None = None,
        max_value: float | None = None,
        allowed_values: list[str] | None = None,
        is_mandatory: bool = False,
        description: str | None = None,
        is_active: bool = True,
        updated_at: datetime | None = None,
        updated_by: str | None = None,
    ):
        self._code = code
        self._name = name
        self._category = category
        self._data_type = data_type
        self._uom = uom
        self._min_value = min_value
        self._max_value = max_value
        self._allowed_values = list(allowed_values or [])
        self._is_mandatory = is_mandatory
        self._description = description
        self._is_active = is_active
        self._created_at = created_at
        self._created_by = created_by
        self._updated_at = updated_at
        self._updated_by = updated_by

    @classmethod
    def create(
        cls,
        code: ParameterCode,
        name: str,
        category: ParameterCategory,
        data_type: DataType,
        created_by: str,
    ) -> "Parameter":
        """Validated constructor for a brand-new, active parameter."""
        if not name:
            raise EmptyNameError(EntityKind.PARAMETER)
        if not created_by:
            raise EmptyCreatedByError(EntityKind.PARAMETER)
        return cls(
            code=code,
            name=name,
            category=category,
            data_type=data_type,
            created_at=utc_now(),
            created_by=created_by,
        )

    @classmethod
    def reconstitute(
        cls,
        code: ParameterCode,
        name: str,
        category: ParameterCategory,
        data_type: DataType,
        uom: str | None,
        min_value: float | None,
        max_value: float | None,
        allowed_values: list[str],
        is_mandatory: bool,
        description: str | None,
        is_active: bool,
        created_at: datetime,
        created_by: str,
        updated_at: datetime | None,
        updated_by: str | None,
    ) -> "Parameter":
        """Rebuild from persistence without validation."""
        return cls(
            code=code,
            name=name,
            category=category,
            data_type=data_type,
            created_at=created_at,
            created_by=created_by,
            uom=uom,
            min_value=min_value,
            max_value=max_value,
            allowed_values=allowed_values,
            is_mandatory=is_mandatory,
            description=description,
            is_active=is_active,
            updated_at=updated_at,
            updated_by=updated_by,
        )

    # ─── Accessors ───────────────────────────────────────────────

    @property
    def code(self) -> ParameterCode:
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> ParameterCategory:
        return self._category

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def uom(self) -> str | None:
        return self._uom

    @property
    def min_value(self) -> float | None:
        return self._min_value

    @property
    def max_value(self) -> float | None:
        return self._max_value

    @property
    def allowed_values(self) -> list[str]:
        return list(self._allowed_values)

    @property
    def is_mandatory(self) -> bool:
        return self._is_mandatory

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def is_active(self) -> bool:
        return self._is_active

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

    # ─── Mutations ───────────────────────────────────────────────

    def set_numeric_constraints(
        self, min_value: float | None, max_value: float | None,
    ) -> None:
        """Set or clear numeric bounds. Ordering checked only when both present."""
        if min_value is not None and max_value is not None and min_value > max_value:
            raise MinGreaterThanMaxError()
        self._min_value = min_value
        self._max_value = max_value

    def set_allowed_values(self, values: list[str] | None) -> None:
        values = list(values or [])
        if self._data_type is DataType.DROPDOWN and not values:
            raise DropdownNoOptionsError()
        self._allowed_values = values

    def set_uom(self, uom: str | None) -> None:
        self._uom = uom

    def set_description(self, description: str | None) -> None:
        self._description = description

    def set_mandatory(self, mandatory: bool) -> None:
        self._is_mandatory = mandatory

    def activate(self) -> None:
        self._is_active = True

    def deactivate(self) -> None:
        self._is_active = False

    def update(
        self,
        name: str,
        category: ParameterCategory,
        data_type: DataType,
        updated_by: str,
    ) -> None:
        if not name:
            raise EmptyNameError(EntityKind.PARAMETER)
        if not updated_by:
            raise EmptyCreatedByError(EntityKind.PARAMETER)

        self._name = name
        self._category = category
        self._data_type = data_type
        self._updated_at = next_audit_timestamp(self._updated_at or self._created_at)
        self._updated_by = updated_by

    def __repr__(self) -> str:
        return (
            f"Parameter(code={self._code.value!r}, category={self._category.value}, "
            f"data_type={self._data_type.value})"
        )
