"""Value Objects — self-validating wrappers for codes, categories, and data types.

Invariants:
    - A UOMCode / ParameterCode instance always matches its pattern (validated on construction)
    - Matching is exact: no case folding, no trimming, no coercion of non-str input
    - Categories and data types are str Enums; parse() accepts only the literal value
    - Equality is value equality on the wrapped primitive

Design Decisions:
    - Frozen dataclass for codes: hashable, immutable, compared by value
    - str Enum for closed sets: serializes to JSON and to DB columns without converters
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from costing_master.core.errors import (
    EntityKind, InvalidCodeError, InvalidCategoryError, InvalidDataTypeError,
)


# ─── Codes ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class _Code:
    value: str

    PATTERN: ClassVar[re.Pattern[str]]
    ENTITY: ClassVar[EntityKind]

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.fullmatch(self.value):
            raise InvalidCodeError(self.ENTITY)

    @classmethod
    def parse(cls, raw: str):
        """Validated construction from an untrusted string."""
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UOMCode(_Code):
    """Unit of measure identifier, e.g. KG, TON, M3."""
    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[A-Z][A-Z0-9_]{0,19}")
    ENTITY: ClassVar[EntityKind] = EntityKind.UOM


@dataclass(frozen=True)
class ParameterCode(_Code):
    """Parameter identifier, e.g. RPM, MACHINE_SPEED."""
    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[A-Z][A-Z0-9_]{0,49}")
    ENTITY: ClassVar[EntityKind] = EntityKind.PARAMETER


# ─── Enums ───────────────────────────────────────────────────────

class UOMCategory(str, Enum):
    """Physical dimension a unit of measure belongs to."""
    WEIGHT = "WEIGHT"
    VOLUME = "VOLUME"
    QUANTITY = "QUANTITY"
    LENGTH = "LENGTH"

    @classmethod
    def parse(cls, raw: str) -> "UOMCategory":
        try:
            return cls(raw)
        except ValueError:
            raise InvalidCategoryError(EntityKind.UOM) from None


class ParameterCategory(str, Enum):
    """Costing area a parameter is configured for."""
    MACHINE = "MACHINE"
    MATERIAL = "MATERIAL"
    QUALITY = "QUALITY"
    OUTPUT = "OUTPUT"
    PROCESS = "PROCESS"

    @classmethod
    def parse(cls, raw: str) -> "ParameterCategory":
        try:
            return cls(raw)
        except ValueError:
            raise InvalidCategoryError(EntityKind.PARAMETER) from None


class DataType(str, Enum):
    """Kind of value a parameter holds."""
    NUMERIC = "NUMERIC"
    TEXT = "TEXT"
    BOOLEAN = "BOOLEAN"
    DROPDOWN = "DROPDOWN"

    @classmethod
    def parse(cls, raw: str) -> "DataType":
        try:
            return cls(raw)
        except ValueError:
            raise InvalidDataTypeError() from None
