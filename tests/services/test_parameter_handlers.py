"""Parameter Handlers — optional field application order and activation.

Tests:
    - Create applies uom, description, mandatory, bounds, options before persisting
    - min > max and DROPDOWN without options reject without persisting
    - Update toggles is_active and clears bounds passed as None
"""

import pytest

from costing_master.core.errors import (
    AlreadyExistsError, DropdownNoOptionsError, InvalidDataTypeError,
    MinGreaterThanMaxError, NotFoundError,
)
from costing_master.core.value_objects import ParameterCode
from costing_master.services.parameter_commands import (
    CreateParameterCommand, CreateParameterHandler, DeleteParameterCommand,
    DeleteParameterHandler, UpdateParameterCommand, UpdateParameterHandler,
)
from costing_master.services.parameter_queries import (
    GetParameterHandler, GetParameterQuery, ListParametersHandler,
    ListParametersQuery,
)


def _create(**overrides) -> CreateParameterCommand:
    fields = dict(
        parameter_code="RPM", parameter_name="Rotations", category="MACHINE",
        data_type="NUMERIC", created_by="system",
    )
    fields.update(overrides)
    return CreateParameterCommand(**fields)


def _update(**overrides) -> UpdateParameterCommand:
    fields = dict(
        parameter_code="RPM", parameter_name="Rotations", category="MACHINE",
        data_type="NUMERIC", updated_by="system",
    )
    fields.update(overrides)
    return UpdateParameterCommand(**fields)


async def test_create_applies_optional_fields(parameter_repo):
    p = await CreateParameterHandler(parameter_repo).handle(_create(
        uom="KG", description="Spindle", is_mandatory=True,
        min_value=0.0, max_value=100.0,
    ))
    assert (p.uom, p.description, p.is_mandatory) == ("KG", "Spindle", True)
    assert (p.min_value, p.max_value) == (0.0, 100.0)
    assert parameter_repo.calls == ["exists_by_code", "create"]


async def test_create_rejects_bad_bounds_without_persisting(parameter_repo):
    with pytest.raises(MinGreaterThanMaxError):
        await CreateParameterHandler(parameter_repo).handle(
            _create(min_value=100.0, max_value=10.0),
        )
    assert parameter_repo.rows == {}


async def test_dropdown_without_options_rejected(parameter_repo):
    with pytest.raises(DropdownNoOptionsError):
        await CreateParameterHandler(parameter_repo).handle(
            _create(data_type="DROPDOWN"),
        )
    assert "create" not in parameter_repo.calls


async def test_dropdown_with_options_keeps_order(parameter_repo):
    p = await CreateParameterHandler(parameter_repo).handle(
        _create(data_type="DROPDOWN", allowed_values=["HIGH", "LOW", "MID"]),
    )
    assert p.allowed_values == ["HIGH", "LOW", "MID"]


async def test_invalid_data_type_before_any_io(parameter_repo):
    with pytest.raises(InvalidDataTypeError):
        await CreateParameterHandler(parameter_repo).handle(_create(data_type=""))
    assert parameter_repo.calls == []


async def test_duplicate_create(parameter_repo):
    handler = CreateParameterHandler(parameter_repo)
    await handler.handle(_create())
    with pytest.raises(AlreadyExistsError) as exc_info:
        await handler.handle(_create())
    assert str(exc_info.value) == "parameter already exists"


async def test_update_deactivates_and_clears_bounds(parameter_repo):
    await CreateParameterHandler(parameter_repo).handle(
        _create(min_value=1.0, max_value=2.0),
    )
    p = await UpdateParameterHandler(parameter_repo).handle(
        _update(is_active=False, min_value=None, max_value=5.0),
    )
    assert p.is_active is False
    assert (p.min_value, p.max_value) == (None, 5.0)

    p = await UpdateParameterHandler(parameter_repo).handle(_update(is_active=True))
    assert p.is_active is True


async def test_update_to_dropdown_requires_options(parameter_repo):
    await CreateParameterHandler(parameter_repo).handle(_create())
    with pytest.raises(DropdownNoOptionsError):
        await UpdateParameterHandler(parameter_repo).handle(
            _update(data_type="DROPDOWN"),
        )
    assert parameter_repo.rows["RPM"]["data_type"] == "NUMERIC"


async def test_update_missing(parameter_repo):
    with pytest.raises(NotFoundError):
        await UpdateParameterHandler(parameter_repo).handle(_update())


async def test_get_and_delete(parameter_repo):
    await CreateParameterHandler(parameter_repo).handle(_create())
    p = await GetParameterHandler(parameter_repo).handle(
        GetParameterQuery(parameter_code="RPM"),
    )
    assert p.code == ParameterCode("RPM")
    await DeleteParameterHandler(parameter_repo).handle(
        DeleteParameterCommand(parameter_code="RPM"),
    )
    with pytest.raises(NotFoundError):
        await GetParameterHandler(parameter_repo).handle(
            GetParameterQuery(parameter_code="RPM"),
        )


async def test_list_filters_active(parameter_repo):
    create = CreateParameterHandler(parameter_repo)
    await create.handle(_create(parameter_code="A1"))
    await create.handle(_create(parameter_code="B1"))
    await UpdateParameterHandler(parameter_repo).handle(
        _update(parameter_code="B1", is_active=False),
    )

    result = await ListParametersHandler(parameter_repo).handle(
        ListParametersQuery(is_active=True),
    )
    assert [p.code.value for p in result.parameters] == ["A1"]
    assert result.total == 1

    result = await ListParametersHandler(parameter_repo).handle(ListParametersQuery())
    assert result.total == 2
