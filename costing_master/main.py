"""Costing Master API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the response envelope
    - CORS configured from settings (not hardcoded)
    - Database, cache, and rate limiter initialized on startup via lifespan;
      the idle-bucket sweep is cancelled and the engine disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from costing_master.api.error_handlers import register_error_handlers
from costing_master.api.middleware import register_middleware
from costing_master.api.response_formatter import ResponseFormatter
from costing_master.api.routes import health, parameters, uoms
from costing_master.config import get_settings
from costing_master.infrastructure import database as db_module
from costing_master.infrastructure.cache import init_cache
from costing_master.infrastructure.observability import setup_logging
from costing_master.infrastructure.rate_limit import (
    init_rate_limiter, start_cleanup, stop_cleanup,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_module.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_cache(settings.cache_enabled, settings.cache_prefix)
    init_rate_limiter(
        settings.rate_limit_enabled,
        settings.rate_limit_burst,
        settings.rate_limit_per_second,
    )
    cleanup_task = start_cleanup(
        settings.rate_limit_cleanup_interval_seconds,
        settings.rate_limit_max_idle_seconds,
    )
    logger.info("Costing Master API started")
    yield
    logger.info("Costing Master API shutting down")
    await stop_cleanup(cleanup_task)
    if db_module.db_manager is not None:
        await db_module.db_manager.dispose()


app = FastAPI(
    title="Costing Master API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
formatter = ResponseFormatter()
register_middleware(app, formatter)

# Routes
app.include_router(health.router)
app.include_router(uoms.router)
app.include_router(parameters.router)

register_error_handlers(app, formatter)
