"""Enum Mapping — bidirectional tables between wire enum names and domain strings.

Invariants:
    - Each table has exactly one entry per wire member, including *_UNSPECIFIED
    - *_UNSPECIFIED maps to "" and every other member to its domain value
    - Tables are bijective; an unknown domain string maps back to *_UNSPECIFIED
    - A table missing a wire member fails at import time, not silently at runtime

Design Decisions:
    - One EnumMapping per enum instead of paired switch functions: both directions
      are derived from the same dict, so they cannot drift apart
"""

from enum import Enum
from typing import Generic, TypeVar

from costing_master.core.value_objects import DataType, ParameterCategory, UOMCategory

W = TypeVar("W", bound=Enum)


class UOMCategoryWire(str, Enum):
    UNSPECIFIED = "UOM_CATEGORY_UNSPECIFIED"
    WEIGHT = "UOM_CATEGORY_WEIGHT"
    VOLUME = "UOM_CATEGORY_VOLUME"
    QUANTITY = "UOM_CATEGORY_QUANTITY"
    LENGTH = "UOM_CATEGORY_LENGTH"


class ParameterCategoryWire(str, Enum):
    UNSPECIFIED = "PARAMETER_CATEGORY_UNSPECIFIED"
    MACHINE = "PARAMETER_CATEGORY_MACHINE"
    MATERIAL = "PARAMETER_CATEGORY_MATERIAL"
    QUALITY = "PARAMETER_CATEGORY_QUALITY"
    OUTPUT = "PARAMETER_CATEGORY_OUTPUT"
    PROCESS = "PARAMETER_CATEGORY_PROCESS"


class DataTypeWire(str, Enum):
    UNSPECIFIED = "PARAMETER_DATA_TYPE_UNSPECIFIED"
    NUMERIC = "PARAMETER_DATA_TYPE_NUMERIC"
    TEXT = "PARAMETER_DATA_TYPE_TEXT"
    BOOLEAN = "PARAMETER_DATA_TYPE_BOOLEAN"
    DROPDOWN = "PARAMETER_DATA_TYPE_DROPDOWN"


class EnumMapping(Generic[W]):
    """Total, bijective mapping between a wire enum and domain strings."""

    def __init__(self, wire_type: type[W], table: dict[W, str]):
        missing = [m.name for m in wire_type if m not in table]
        if missing:
            raise ValueError(f"{wire_type.__name__} mapping missing: {missing}")
        reverse = {domain: wire for wire, domain in table.items()}
        if len(reverse) != len(table):
            raise ValueError(f"{wire_type.__name__} mapping is not one-to-one")
        if "" not in reverse:
            raise ValueError(f"{wire_type.__name__} mapping has no unspecified entry")
        self.wire_type = wire_type
        self._to_domain = dict(table)
        self._to_wire = reverse
        self._unspecified = reverse[""]

    def to_domain(self, wire: W) -> str:
        return self._to_domain[wire]

    def to_wire(self, domain: str) -> W:
        return self._to_wire.get(domain, self._unspecified)

    def domain_values(self) -> set[str]:
        return {v for v in self._to_domain.values() if v}


UOM_CATEGORY_MAPPING = EnumMapping(UOMCategoryWire, {
    UOMCategoryWire.UNSPECIFIED: "",
    UOMCategoryWire.WEIGHT: UOMCategory.WEIGHT.value,
    UOMCategoryWire.VOLUME: UOMCategory.VOLUME.value,
    UOMCategoryWire.QUANTITY: UOMCategory.QUANTITY.value,
    UOMCategoryWire.LENGTH: UOMCategory.LENGTH.value,
})

PARAMETER_CATEGORY_MAPPING = EnumMapping(ParameterCategoryWire, {
    ParameterCategoryWire.UNSPECIFIED: "",
    ParameterCategoryWire.MACHINE: ParameterCategory.MACHINE.value,
    ParameterCategoryWire.MATERIAL: ParameterCategory.MATERIAL.value,
    ParameterCategoryWire.QUALITY: ParameterCategory.QUALITY.value,
    ParameterCategoryWire.OUTPUT: ParameterCategory.OUTPUT.value,
    ParameterCategoryWire.PROCESS: ParameterCategory.PROCESS.value,
})

DATA_TYPE_MAPPING = EnumMapping(DataTypeWire, {
    DataTypeWire.UNSPECIFIED: "",
    DataTypeWire.NUMERIC: DataType.NUMERIC.value,
    DataTypeWire.TEXT: DataType.TEXT.value,
    DataTypeWire.BOOLEAN: DataType.BOOLEAN.value,
    DataTypeWire.DROPDOWN: DataType.DROPDOWN.value,
})
