"""HTTP Middleware — request logging and per-client rate limiting.

Invariants:
    - Every request is logged once with method, path, status, and duration_ms
    - Throttled requests never reach a route: HTTP 429 with a "429" envelope
    - Health probes are never throttled
    - Rate limiting is off when rate_limit.rate_limiter is None
"""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from costing_master.api.response_formatter import ResponseFormatter
from costing_master.core.errors import RateLimitedError
from costing_master.infrastructure import rate_limit as rate_limit_module
from costing_master.schemas.envelope import EmptyResponse

logger = logging.getLogger(__name__)

HEALTH_PREFIX = "/api/v1/health"


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{request.method} {request.url.path} failed: {type(e).__name__}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            raise
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                "client": _client_host(request),
            },
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token-bucket throttling keyed by client host."""

    def __init__(self, app, formatter: ResponseFormatter):
        super().__init__(app)
        self.formatter = formatter

    async def dispatch(self, request: Request, call_next):
        limiter = rate_limit_module.rate_limiter
        if limiter is None or request.url.path.startswith(HEALTH_PREFIX):
            return await call_next(request)
        try:
            limiter.check(_client_host(request))
        except RateLimitedError as e:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=EmptyResponse(
                    base=self.formatter.rate_limited(e.message),
                ).model_dump(),
            )
        return await call_next(request)


def register_middleware(app: FastAPI, formatter: ResponseFormatter) -> None:
    """Add middleware; the last added runs first, so logging wraps throttling."""
    app.add_middleware(RateLimitMiddleware, formatter=formatter)
    app.add_middleware(RequestLoggingMiddleware)
