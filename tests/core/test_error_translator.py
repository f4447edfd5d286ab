"""Error Translator — totality and exact status mapping.

Tests:
    - Each domain condition maps to its status code with its own message
    - Infrastructure and unexpected errors map to "500" with the generic message
    - Every CostingError subclass is classified (no gaps)
"""

import pytest

from costing_master.core.error_translator import INTERNAL_ERROR_MESSAGE, classify
from costing_master.core import errors
from costing_master.core.errors import (
    AlreadyExistsError, CacheError, DatabaseError, DropdownNoOptionsError,
    EmptyCreatedByError, EmptyNameError, EntityKind, InvalidCategoryError,
    InvalidCodeError, InvalidDataTypeError, MinGreaterThanMaxError,
    NotFoundError, OperationTimeoutError, RateLimitedError,
)


@pytest.mark.parametrize(
    "error,status,message",
    [
        (NotFoundError(EntityKind.UOM), "404", "uom not found"),
        (NotFoundError(EntityKind.PARAMETER), "404", "parameter not found"),
        (AlreadyExistsError(EntityKind.UOM), "409", "uom already exists"),
        (InvalidCodeError(EntityKind.UOM), "400", "invalid uom code format"),
        (InvalidCategoryError(EntityKind.PARAMETER), "400", "invalid parameter category"),
        (InvalidDataTypeError(), "400", "invalid parameter data type"),
        (EmptyNameError(EntityKind.UOM), "400", "uom name cannot be empty"),
        (EmptyCreatedByError(EntityKind.UOM), "400", "created_by cannot be empty"),
        (MinGreaterThanMaxError(), "400", "min_value cannot be greater than max_value"),
        (DropdownNoOptionsError(), "400", "dropdown type requires allowed_values"),
        (RateLimitedError("10.0.0.1"), "429", "Rate limit exceeded"),
    ],
)
def test_domain_errors_keep_message(error, status, message):
    outcome = classify(error)
    assert outcome.status_code == status
    assert outcome.message == message


@pytest.mark.parametrize(
    "error",
    [
        DatabaseError("Connection or operational error", "select"),
        OperationTimeoutError("GetUOM", 0.5),
        CacheError("boom", "get"),
        RuntimeError("password=hunter2 in DSN"),
        ValueError("unexpected"),
    ],
)
def test_everything_else_is_internal(error):
    outcome = classify(error)
    assert outcome.status_code == "500"
    assert outcome.message == INTERNAL_ERROR_MESSAGE
    assert "hunter2" not in outcome.message


def test_every_costing_error_subclass_is_classified():
    def subclasses(cls):
        for sub in cls.__subclasses__():
            yield sub
            yield from subclasses(sub)

    seen = set(subclasses(errors.CostingError))
    assert seen
    for cls in seen:
        instance = cls.__new__(cls)
        outcome = classify(instance)
        assert outcome.status_code in {"400", "404", "409", "429", "500"}
