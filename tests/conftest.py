"""Root conftest — shared test configuration, SQLite fixtures, and in-memory repositories.

Invariants:
    - Settings never point at a real database or enable throttling during tests
    - Every DB test gets a fresh in-memory SQLite database
    - Fake repositories store snapshots (records), so a failed handler never leaks
      half-applied mutations into the store, the same as a real database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from costing_master.core.errors import (  # noqa: E402
    AlreadyExistsError, EntityKind, NotFoundError,
)
from costing_master.db.base import Base  # noqa: E402
import costing_master.models  # noqa: E402,F401
from costing_master.infrastructure.cached_repository import (  # noqa: E402
    parameter_from_record, parameter_to_record, uom_from_record, uom_to_record,
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


class _InMemoryRepository:
    """Dict-backed repository honoring the NotFound / AlreadyExists contract."""

    def __init__(self, entity: EntityKind, to_record, from_record):
        self.entity = entity
        self._to_record = to_record
        self._from_record = from_record
        self.rows: dict[str, dict] = {}
        self.calls: list[str] = []

    async def create(self, item) -> None:
        self.calls.append("create")
        if item.code.value in self.rows:
            raise AlreadyExistsError(self.entity)
        self.rows[item.code.value] = self._to_record(item)

    async def get_by_code(self, code):
        self.calls.append("get_by_code")
        if code.value not in self.rows:
            raise NotFoundError(self.entity)
        return self._from_record(self.rows[code.value])

    async def list(self, filter):
        self.calls.append("list")
        items = [self._from_record(r) for _, r in sorted(self.rows.items())]
        if filter.category is not None:
            items = [i for i in items if i.category == filter.category]
        if getattr(filter, "is_active", None) is not None:
            items = [i for i in items if i.is_active == filter.is_active]
        return items[filter.offset:filter.offset + filter.limit], len(items)

    async def update(self, item) -> None:
        self.calls.append("update")
        if item.code.value not in self.rows:
            raise NotFoundError(self.entity)
        self.rows[item.code.value] = self._to_record(item)

    async def delete(self, code) -> None:
        self.calls.append("delete")
        if self.rows.pop(code.value, None) is None:
            raise NotFoundError(self.entity)

    async def exists_by_code(self, code) -> bool:
        self.calls.append("exists_by_code")
        return code.value in self.rows


@pytest.fixture
def uom_repo():
    return _InMemoryRepository(EntityKind.UOM, uom_to_record, uom_from_record)


@pytest.fixture
def parameter_repo():
    return _InMemoryRepository(
        EntityKind.PARAMETER, parameter_to_record, parameter_from_record,
    )
