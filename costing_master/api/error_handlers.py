"""Error Handlers — global exception handlers for the Costing Master API.

Invariants:
    - RequestValidationError → HTTP 400 envelope with one {field, message} per violation
    - CostingError escaping a route → envelope classified by core.error_translator;
      the HTTP status always equals base.status_code
    - Exception (catch-all) → HTTP 500 envelope, never leaks internal details

Design Decisions:
    - Three-layer handler: validation (Pydantic), domain/infrastructure (CostingError),
      catch-all (Exception)
    - Extracted from main.py to keep the entry point's import fan-out small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from costing_master.api.response_formatter import ResponseFormatter
from costing_master.core.error_translator import INTERNAL_ERROR_MESSAGE
from costing_master.core.errors import CostingError
from costing_master.schemas.envelope import EmptyResponse, ValidationErrorDetail

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, formatter: ResponseFormatter) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_costing_error_handler(app, formatter)
    _register_validation_error_handler(app, formatter)
    _register_generic_error_handler(app, formatter)


def _register_costing_error_handler(
    app: FastAPI, formatter: ResponseFormatter,
) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(CostingError)
    async def costing_error_handler(request: Request, exc: CostingError):
        """Handle CostingError raised outside the request handlers."""
        base = formatter.from_error(exc, f"{request.method} {request.url.path}")
        return JSONResponse(
            status_code=int(base.status_code),
            content=EmptyResponse(base=base).model_dump(),
        )


def _register_validation_error_handler(
    app: FastAPI, formatter: ResponseFormatter,
) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc, formatter),
        )


def _register_generic_error_handler(
    app: FastAPI, formatter: ResponseFormatter,
) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=EmptyResponse(
                base=formatter.internal_error(INTERNAL_ERROR_MESSAGE),
            ).model_dump(),
        )


def _field_path(loc: tuple) -> str:
    """Drop the 'body' / 'query' / 'path' prefix from a pydantic error location."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts)


def _build_validation_error_response(
    exc: RequestValidationError, formatter: ResponseFormatter,
) -> dict:
    """Build structured validation error envelope."""
    details = [
        ValidationErrorDetail(field=_field_path(e["loc"]), message=e["msg"])
        for e in exc.errors()
    ]
    return EmptyResponse(base=formatter.validation_failed(details)).model_dump()
