"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready reports postgres and cache as UP/DOWN and returns 503 if
      any component is DOWN (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from costing_master.infrastructure import cache as cache_module
from costing_master.infrastructure import database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

UP = "UP"
DOWN = "DOWN"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "costing-master",
        "version": "1.0.0",
    }


async def _cache_ok() -> bool:
    try:
        return await cache_module.cache_backend.health_check()
    except Exception as e:
        logger.error(f"Cache health check failed: {e}")
        return False


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database and cache connectivity."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    components = {
        "postgres": UP if db_ok else DOWN,
        "cache": UP if await _cache_ok() else DOWN,
    }
    if DOWN in components.values():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "components": components},
        )
    return {"status": "ready", "components": components}
