"""Dependency Wiring — builds per-request repositories, handlers, and adapters.

Invariants:
    - One AsyncSession per request (get_db); repositories never outlive the request
    - The cache decorator always wraps the store repository; NoOpCache when disabled
    - cache_backend is read at request time so init_cache() / tests can swap it
    - ResponseFormatter is stateless; a fresh one per request, no shared instance
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from costing_master.api.parameter_adapter import ParameterRequestHandler
from costing_master.api.response_formatter import ResponseFormatter
from costing_master.api.uom_adapter import UOMRequestHandler
from costing_master.config import get_settings
from costing_master.infrastructure import cache as cache_module
from costing_master.infrastructure.cached_repository import (
    CachedParameterRepository, CachedUOMRepository,
)
from costing_master.infrastructure.database import get_db
from costing_master.infrastructure.parameter_repository import (
    SqlAlchemyParameterRepository,
)
from costing_master.infrastructure.uom_repository import SqlAlchemyUOMRepository
from costing_master.services.parameter_commands import (
    CreateParameterHandler, DeleteParameterHandler, UpdateParameterHandler,
)
from costing_master.services.parameter_queries import (
    GetParameterHandler, ListParametersHandler,
)
from costing_master.services.uom_commands import (
    CreateUOMHandler, DeleteUOMHandler, UpdateUOMHandler,
)
from costing_master.services.uom_queries import GetUOMHandler, ListUOMsHandler


def get_response_formatter() -> ResponseFormatter:
    return ResponseFormatter()


def get_uom_request_handler(
    db: AsyncSession = Depends(get_db),
    formatter: ResponseFormatter = Depends(get_response_formatter),
) -> UOMRequestHandler:
    settings = get_settings()
    repo = CachedUOMRepository(
        SqlAlchemyUOMRepository(db),
        cache_module.cache_backend,
        settings.cache_ttl_seconds,
    )
    return UOMRequestHandler(
        create_handler=CreateUOMHandler(repo),
        update_handler=UpdateUOMHandler(repo),
        delete_handler=DeleteUOMHandler(repo),
        get_handler=GetUOMHandler(repo),
        list_handler=ListUOMsHandler(repo),
        formatter=formatter,
        actor=settings.default_actor,
        timeout_seconds=settings.request_timeout_seconds,
    )


def get_parameter_request_handler(
    db: AsyncSession = Depends(get_db),
    formatter: ResponseFormatter = Depends(get_response_formatter),
) -> ParameterRequestHandler:
    settings = get_settings()
    repo = CachedParameterRepository(
        SqlAlchemyParameterRepository(db),
        cache_module.cache_backend,
        settings.cache_ttl_seconds,
    )
    return ParameterRequestHandler(
        create_handler=CreateParameterHandler(repo),
        update_handler=UpdateParameterHandler(repo),
        delete_handler=DeleteParameterHandler(repo),
        get_handler=GetParameterHandler(repo),
        list_handler=ListParametersHandler(repo),
        formatter=formatter,
        actor=settings.default_actor,
        timeout_seconds=settings.request_timeout_seconds,
    )
