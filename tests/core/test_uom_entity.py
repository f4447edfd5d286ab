"""UnitOfMeasure — construction invariants and audit stamping.

Tests:
    - create() rejects empty name before empty created_by
    - create() defaults is_base_uom to False and stamps created audit fields
    - update() stamps updated_at strictly later, even when the clock has not moved
    - A rejected update() leaves every field untouched
"""

from datetime import datetime, timedelta, timezone

import pytest

from costing_master.core import audit
from costing_master.core.errors import EmptyCreatedByError, EmptyNameError
from costing_master.core.uom import UnitOfMeasure
from costing_master.core.value_objects import UOMCategory, UOMCode


def _kg() -> UnitOfMeasure:
    return UnitOfMeasure.create(UOMCode("KG"), "Kilogram", UOMCategory.WEIGHT, "system")


def test_create_sets_defaults_and_audit():
    uom = _kg()
    assert uom.code == UOMCode("KG")
    assert uom.name == "Kilogram"
    assert uom.category is UOMCategory.WEIGHT
    assert uom.is_base_uom is False
    assert uom.created_by == "system"
    assert uom.created_at.tzinfo is not None
    assert uom.updated_at is None
    assert uom.updated_by is None


def test_create_rejects_empty_name_first():
    with pytest.raises(EmptyNameError) as exc_info:
        UnitOfMeasure.create(UOMCode("KG"), "", UOMCategory.WEIGHT, "")
    assert str(exc_info.value) == "uom name cannot be empty"


def test_create_rejects_empty_created_by():
    with pytest.raises(EmptyCreatedByError):
        UnitOfMeasure.create(UOMCode("KG"), "Kilogram", UOMCategory.WEIGHT, "")


def test_set_as_base_uom():
    uom = _kg()
    uom.set_as_base_uom()
    assert uom.is_base_uom is True


def test_update_stamps_audit():
    uom = _kg()
    uom.update("Kilo", UOMCategory.WEIGHT, True, "alice")
    assert uom.name == "Kilo"
    assert uom.is_base_uom is True
    assert uom.updated_by == "alice"
    assert uom.updated_at > uom.created_at


def test_update_is_strictly_later_with_frozen_clock(monkeypatch):
    frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
    monkeypatch.setattr(audit, "utc_now", lambda: frozen)
    uom = UnitOfMeasure.reconstitute(
        UOMCode("KG"), "Kilogram", UOMCategory.WEIGHT, False,
        frozen, "system", None, None,
    )
    uom.update("Kilo", UOMCategory.WEIGHT, False, "system")
    first = uom.updated_at
    uom.update("Kilogram", UOMCategory.WEIGHT, False, "system")
    assert first > frozen
    assert uom.updated_at > first


def test_update_after_future_timestamp_still_advances():
    future = datetime.now(timezone.utc) + timedelta(hours=1)
    uom = UnitOfMeasure.reconstitute(
        UOMCode("KG"), "Kilogram", UOMCategory.WEIGHT, False,
        future, "system", future, "system",
    )
    uom.update("Kilo", UOMCategory.WEIGHT, False, "system")
    assert uom.updated_at > future


def test_rejected_update_leaves_entity_untouched():
    uom = _kg()
    with pytest.raises(EmptyNameError):
        uom.update("", UOMCategory.VOLUME, True, "alice")
    assert uom.name == "Kilogram"
    assert uom.category is UOMCategory.WEIGHT
    assert uom.is_base_uom is False
    assert uom.updated_at is None


def test_reconstitute_skips_validation():
    uom = UnitOfMeasure.reconstitute(
        UOMCode("KG"), "", UOMCategory.WEIGHT, True,
        datetime(2024, 1, 1, tzinfo=timezone.utc), "", None, None,
    )
    assert uom.name == ""
    assert uom.is_base_uom is True
