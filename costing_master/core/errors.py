"""Error Hierarchy — typed, categorized exceptions for all master-data failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are scoped to an EntityKind and keep the exact message text of the
      condition ("uom not found", "invalid parameter code format", ...)
    - Infrastructure errors never carry raw driver text in `message`; details go to
      ErrorContext.debug_info for logging only

Design Decisions:
    - Single hierarchy with CostingError base: the boundary adapter and the FastAPI
      global handler both branch on isinstance, never on message text
    - One class per condition, parameterized by entity: UOM and Parameter share a
      structurally identical taxonomy without duplicated classes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    CACHE = "cache"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


class EntityKind(str, Enum):
    """Aggregate roots served by this service."""
    UOM = "uom"
    PARAMETER = "parameter"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    code: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class CostingError(Exception):
    """Base exception for all costing master errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status


class DomainError(CostingError):
    """Error raised by value objects, entities, or repositories for one entity kind."""

    def __init__(
        self,
        entity: EntityKind,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity.value
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, ctx, http_status,
        )
        self.entity = entity


# ─── Domain Errors (400/404/409) ────────────────────────────────

class NotFoundError(DomainError):
    """Referenced code does not exist."""
    def __init__(self, entity: EntityKind, context: ErrorContext | None = None):
        super().__init__(
            entity, f"{entity.value} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404, context,
        )


class AlreadyExistsError(DomainError):
    """Code collision on create."""
    def __init__(self, entity: EntityKind, context: ErrorContext | None = None):
        super().__init__(
            entity, f"{entity.value} already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT, 409, context,
        )


class EmptyNameError(DomainError):
    """Required display name is empty."""
    def __init__(self, entity: EntityKind, context: ErrorContext | None = None):
        super().__init__(
            entity, f"{entity.value} name cannot be empty",
            "EMPTY_NAME", ErrorCategory.VALIDATION, 400, context,
        )


class EmptyCreatedByError(DomainError):
    """Audit actor is empty on create or update."""
    def __init__(self, entity: EntityKind, context: ErrorContext | None = None):
        super().__init__(
            entity, "created_by cannot be empty",
            "EMPTY_CREATED_BY", ErrorCategory.VALIDATION, 400, context,
        )


class InvalidCodeError(DomainError):
    """Code does not match the entity's code pattern."""
    def __init__(self, entity: EntityKind, context: ErrorContext | None = None):
        super().__init__(
            entity, f"invalid {entity.value} code format",
            "INVALID_CODE", ErrorCategory.VALIDATION, 400, context,
        )


class InvalidCategoryError(DomainError):
    """Category is not one of the entity's enumerated values."""
    def __init__(self, entity: EntityKind, context: ErrorContext | None = None):
        super().__init__(
            entity, f"invalid {entity.value} category",
            "INVALID_CATEGORY", ErrorCategory.VALIDATION, 400, context,
        )


class InvalidDataTypeError(DomainError):
    """Parameter data type is not one of NUMERIC, TEXT, BOOLEAN, DROPDOWN."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            EntityKind.PARAMETER, "invalid parameter data type",
            "INVALID_DATA_TYPE", ErrorCategory.VALIDATION, 400, context,
        )


class MinGreaterThanMaxError(DomainError):
    """Both numeric bounds present and min > max."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            EntityKind.PARAMETER, "min_value cannot be greater than max_value",
            "MIN_GREATER_THAN_MAX", ErrorCategory.BUSINESS_RULE, 400, context,
        )


class DropdownNoOptionsError(DomainError):
    """DROPDOWN parameter given an empty allowed_values list."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            EntityKind.PARAMETER, "dropdown type requires allowed_values",
            "DROPDOWN_NO_OPTIONS", ErrorCategory.BUSINESS_RULE, 400, context,
        )


# ─── Infrastructure Errors (429/500-level) ──────────────────────

class DatabaseError(CostingError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class OperationTimeoutError(CostingError):
    """Deadline expired before the handler finished."""
    def __init__(
        self, operation: str, timeout_seconds: float,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"{operation} exceeded deadline of {timeout_seconds}s",
            "TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, ctx, 504,
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds


class RateLimitedError(CostingError):
    """Client exhausted its token bucket."""
    def __init__(self, client: str, context: ErrorContext | None = None):
        super().__init__(
            "Rate limit exceeded", "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 429,
        )
        self.client = client


class CacheError(CostingError):
    """Cache backend failed. Callers treat it as a miss."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Cache {operation} failed: {message}",
            "CACHE_ERROR", ErrorCategory.CACHE,
            ErrorSeverity.WARNING, ctx, 500,
        )
        self.operation = operation
