"""Envelope Schemas — the uniform outer response wrapper shared by every operation.

Invariants:
    - status_code is a 3-digit string ("200", "201", "400", "404", "409", "429", "500")
    - is_success is True only for 2xx status codes
    - validation_errors is always a list (empty for non-schema failures)
"""

from pydantic import BaseModel, Field


class ValidationErrorDetail(BaseModel):
    """One schema-level violation."""
    field: str
    message: str


class BaseResponse(BaseModel):
    """Status metadata carried by every response."""
    status_code: str = Field(pattern=r"^\d{3}$")
    is_success: bool
    message: str
    validation_errors: list[ValidationErrorDetail] = Field(default_factory=list)


class PaginationMeta(BaseModel):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int


class AuditInfo(BaseModel):
    """Audit projection; timestamps formatted RFC3339."""
    created_at: str
    created_by: str
    updated_at: str | None = None
    updated_by: str | None = None


class EmptyResponse(BaseModel):
    """Envelope-only response (delete, schema failures, rate limiting)."""
    base: BaseResponse
