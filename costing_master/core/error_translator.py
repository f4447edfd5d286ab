"""Error Translator — maps any exception to an envelope status code and message.

Invariants:
    - Total: every exception maps to exactly one Classification
    - Unmatched exceptions (DatabaseError, OperationTimeoutError, anything unexpected)
      map to "500" with the generic INTERNAL_ERROR_MESSAGE, never the raw text
    - Domain errors keep their own message ("uom not found", ...)

Design Decisions:
    - Ordered rule table over if/elif chains: the table is the whole mapping and is
      directly testable for totality
"""

from dataclasses import dataclass

from costing_master.core.errors import (
    AlreadyExistsError, DropdownNoOptionsError, EmptyCreatedByError, EmptyNameError,
    InvalidCategoryError, InvalidCodeError, InvalidDataTypeError,
    MinGreaterThanMaxError, NotFoundError, RateLimitedError,
)

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class Classification:
    """Wire-level outcome of a failed operation."""
    status_code: str
    label: str
    message: str


@dataclass(frozen=True)
class _Rule:
    error_types: tuple[type[Exception], ...]
    status_code: str
    label: str


_RULES: tuple[_Rule, ...] = (
    _Rule((NotFoundError,), "404", "not found"),
    _Rule((AlreadyExistsError,), "409", "conflict"),
    _Rule(
        (
            InvalidCodeError, InvalidCategoryError, InvalidDataTypeError,
            EmptyNameError, EmptyCreatedByError,
            MinGreaterThanMaxError, DropdownNoOptionsError,
        ),
        "400", "bad request",
    ),
    _Rule((RateLimitedError,), "429", "rate limited"),
)

_INTERNAL = Classification("500", "internal error", INTERNAL_ERROR_MESSAGE)


def classify(error: BaseException) -> Classification:
    """Classify an exception. Falls through to internal error."""
    for rule in _RULES:
        if isinstance(error, rule.error_types):
            return Classification(rule.status_code, rule.label, str(error))
    return _INTERNAL
