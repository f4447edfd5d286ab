"""API test fixtures — FastAPI test client over an in-memory SQLite database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
    - cache and rate limiter reset to their disabled defaults around every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from costing_master.infrastructure import cache as cache_module
from costing_master.infrastructure import database as db_module
from costing_master.infrastructure import rate_limit as rate_limit_module
from costing_master.infrastructure.database import DatabaseSessionManager, get_db
from costing_master.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    original_cache = cache_module.cache_backend
    original_limiter = rate_limit_module.rate_limiter
    cache_module.cache_backend = cache_module.NoOpCache()
    rate_limit_module.rate_limiter = None

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    cache_module.cache_backend = original_cache
    rate_limit_module.rate_limiter = original_limiter
