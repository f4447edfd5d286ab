"""Request Schemas — field-level limits enforced before any handler runs."""

import pytest
from pydantic import ValidationError

from costing_master.schemas.enum_mapping import DataTypeWire, UOMCategoryWire
from costing_master.schemas.envelope import BaseResponse
from costing_master.schemas.parameter import CreateParameterRequest
from costing_master.schemas.uom import CreateUOMRequest


def test_create_uom_defaults():
    req = CreateUOMRequest(uom_code="KG", uom_name="Kilogram")
    assert req.uom_category is UOMCategoryWire.UNSPECIFIED
    assert req.is_base_uom is False


def test_create_uom_length_limits():
    with pytest.raises(ValidationError):
        CreateUOMRequest(uom_code="A" * 21, uom_name="x")
    with pytest.raises(ValidationError):
        CreateUOMRequest(uom_code="KG", uom_name="")


def test_lowercase_code_passes_schema():
    """Pattern checks belong to the domain, not the schema."""
    assert CreateUOMRequest(uom_code="kg", uom_name="Kilogram").uom_code == "kg"


def test_parameter_optionals_stay_absent():
    req = CreateParameterRequest(
        parameter_code="RPM", parameter_name="Rotations",
        data_type=DataTypeWire.NUMERIC,
    )
    assert req.min_value is None
    assert req.max_value is None
    assert req.uom is None
    assert req.allowed_values == []


def test_unknown_enum_name_rejected():
    with pytest.raises(ValidationError):
        CreateUOMRequest(uom_code="KG", uom_name="Kilogram", uom_category="WEIGHT")


def test_base_response_status_code_is_three_digits():
    with pytest.raises(ValidationError):
        BaseResponse(status_code="20", is_success=True, message="ok")
