"""SQLAlchemy Parameter Repository — contract checks against SQLite.

Tests:
    - All optional fields round-trip, NULL bounds stay None, options keep order
    - list filters by category and is_active independently
    - Scenario: 15 rows, page 2 of size 10 returns the last 5 with total 15
"""

import pytest

from costing_master.core.errors import AlreadyExistsError, NotFoundError
from costing_master.core.list_filter import ParameterListFilter
from costing_master.core.parameter import Parameter
from costing_master.core.value_objects import DataType, ParameterCategory, ParameterCode
from costing_master.infrastructure.parameter_repository import (
    SqlAlchemyParameterRepository,
)


def _param(
    code: str,
    category: ParameterCategory = ParameterCategory.MACHINE,
    data_type: DataType = DataType.NUMERIC,
) -> Parameter:
    return Parameter.create(ParameterCode(code), f"Param {code}", category, data_type, "system")


async def test_round_trip_all_fields(test_db):
    repo = SqlAlchemyParameterRepository(test_db)
    p = _param("GRADE", data_type=DataType.DROPDOWN)
    p.set_uom(None)
    p.set_description("Quality grade")
    p.set_mandatory(True)
    p.set_numeric_constraints(None, 9.5)
    p.set_allowed_values(["C", "A", "B"])
    await repo.create(p)

    loaded = await repo.get_by_code(ParameterCode("GRADE"))
    assert loaded.data_type is DataType.DROPDOWN
    assert loaded.allowed_values == ["C", "A", "B"]
    assert loaded.min_value is None
    assert loaded.max_value == pytest.approx(9.5)
    assert loaded.description == "Quality grade"
    assert loaded.is_mandatory is True
    assert loaded.is_active is True
    assert loaded.uom is None


async def test_uom_reference_round_trips(test_db):
    from costing_master.core.uom import UnitOfMeasure
    from costing_master.core.value_objects import UOMCategory, UOMCode
    from costing_master.infrastructure.uom_repository import SqlAlchemyUOMRepository

    await SqlAlchemyUOMRepository(test_db).create(
        UnitOfMeasure.create(UOMCode("RPM_U"), "Rev/min", UOMCategory.QUANTITY, "system"),
    )
    repo = SqlAlchemyParameterRepository(test_db)
    p = _param("SPEED")
    p.set_uom("RPM_U")
    await repo.create(p)
    assert (await repo.get_by_code(ParameterCode("SPEED"))).uom == "RPM_U"


async def test_duplicate_and_missing(test_db):
    repo = SqlAlchemyParameterRepository(test_db)
    await repo.create(_param("RPM"))
    with pytest.raises(AlreadyExistsError):
        await repo.create(_param("RPM"))
    with pytest.raises(NotFoundError) as exc_info:
        await repo.get_by_code(ParameterCode("NOPE"))
    assert str(exc_info.value) == "parameter not found"
    with pytest.raises(NotFoundError):
        await repo.delete(ParameterCode("NOPE"))


async def test_update_persists_deactivation(test_db):
    repo = SqlAlchemyParameterRepository(test_db)
    await repo.create(_param("RPM"))
    p = await repo.get_by_code(ParameterCode("RPM"))
    p.update("Rotations", ParameterCategory.PROCESS, DataType.NUMERIC, "bob")
    p.deactivate()
    await repo.update(p)

    loaded = await repo.get_by_code(ParameterCode("RPM"))
    assert loaded.is_active is False
    assert loaded.category is ParameterCategory.PROCESS
    assert loaded.updated_by == "bob"


async def test_list_filters(test_db):
    repo = SqlAlchemyParameterRepository(test_db)
    await repo.create(_param("A1", ParameterCategory.MACHINE))
    await repo.create(_param("B1", ParameterCategory.MATERIAL))
    inactive = _param("C1", ParameterCategory.MACHINE)
    inactive.deactivate()
    await repo.create(inactive)

    machine, total = await repo.list(
        ParameterListFilter(category=ParameterCategory.MACHINE),
    )
    assert [p.code.value for p in machine] == ["A1", "C1"]
    assert total == 2

    active_machine, total = await repo.list(
        ParameterListFilter(category=ParameterCategory.MACHINE, is_active=True),
    )
    assert [p.code.value for p in active_machine] == ["A1"]
    assert total == 1

    inactive_all, total = await repo.list(ParameterListFilter(is_active=False))
    assert [p.code.value for p in inactive_all] == ["C1"]


async def test_second_page_of_fifteen(test_db):
    repo = SqlAlchemyParameterRepository(test_db)
    for i in range(15):
        await repo.create(_param(f"P{i:02d}"))

    page, total = await repo.list(ParameterListFilter(page=2, page_size=10))
    assert total == 15
    assert [p.code.value for p in page] == [f"P{i:02d}" for i in range(10, 15)]
