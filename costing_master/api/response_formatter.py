"""Response Formatter — builds the uniform response envelope.

Invariants:
    - Stateless: safe to share across requests, passed explicitly to adapters
    - is_success is True only for 2xx status codes
    - Failures are classified by core.error_translator; internal errors always carry
      the generic message, the raw error only reaches the log
    - total_pages uses the effective page size, so it never divides by zero
"""

import logging
from datetime import datetime, timezone

from costing_master.core.error_translator import classify
from costing_master.core.list_filter import Pagination
from costing_master.schemas.envelope import (
    BaseResponse, PaginationMeta, ValidationErrorDetail,
)

logger = logging.getLogger(__name__)


def format_rfc3339(value: datetime | None) -> str | None:
    """UTC, second precision, 'Z' suffix (2024-01-31T08:15:00Z)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ResponseFormatter:
    """Envelope builder shared by every request handler."""

    def success(self, message: str) -> BaseResponse:
        return BaseResponse(status_code="200", is_success=True, message=message)

    def created(self, message: str) -> BaseResponse:
        return BaseResponse(status_code="201", is_success=True, message=message)

    def from_error(self, error: BaseException, operation: str) -> BaseResponse:
        """Classify error and build the failure envelope (logging it on the way)."""
        outcome = classify(error)
        code = getattr(error, "code", type(error).__name__)
        if outcome.status_code == "500":
            logger.error(
                f"{operation} failed: {error}",
                exc_info=error,
                extra={"error_code": code, "status_code": outcome.status_code},
            )
        else:
            logger.warning(
                f"{operation} rejected: {outcome.message}",
                extra={"error_code": code, "status_code": outcome.status_code},
            )
        return BaseResponse(
            status_code=outcome.status_code,
            is_success=False,
            message=outcome.message,
        )

    def validation_failed(
        self, errors: list[ValidationErrorDetail],
    ) -> BaseResponse:
        return BaseResponse(
            status_code="400",
            is_success=False,
            message="Validation failed",
            validation_errors=errors,
        )

    def rate_limited(self, message: str = "Rate limit exceeded") -> BaseResponse:
        return BaseResponse(status_code="429", is_success=False, message=message)

    def internal_error(self, message: str) -> BaseResponse:
        return BaseResponse(status_code="500", is_success=False, message=message)

    def pagination(self, page: Pagination, total: int) -> PaginationMeta:
        return PaginationMeta(
            current_page=page.effective_page,
            page_size=page.limit,
            total_items=total,
            total_pages=page.total_pages(total),
        )
