"""Caching Repository Decorators — read-through cache in front of a repository.

Invariants:
    - Transparent: callers see the same results and errors as the inner repository
    - get_by_code and list are cached; exists_by_code always hits the store
    - create / update / delete invalidate the entity key and every list key, after
      the inner call succeeds
    - CacheError never aborts a request: logged as a warning and treated as a miss
    - NotFoundError is not cached (absence is re-checked on every read)
    - Deleting a UOM also drops every cached parameter entry: the store's
      ON DELETE SET NULL clears uom on the parameters that referenced it

Design Decisions:
    - Decorator over cache calls inside SQLAlchemy repositories: the store adapter
      stays single-purpose, handlers stay unaware of caching
    - Entities cached as JSON-friendly records (ISO datetimes), rebuilt with
      reconstitute() on a hit
"""

import logging
from datetime import datetime
from typing import Any

from costing_master.core.errors import CacheError
from costing_master.core.list_filter import ParameterListFilter, UOMListFilter
from costing_master.core.parameter import Parameter
from costing_master.core.repository_protocols import (
    CacheLike, ParameterRepository, UOMRepository,
)
from costing_master.core.uom import UnitOfMeasure
from costing_master.core.value_objects import (
    DataType, ParameterCategory, ParameterCode, UOMCategory, UOMCode,
)

logger = logging.getLogger(__name__)

UOM_KEY_PREFIX = "uom:"
UOM_LIST_PATTERN = "uom:list:*"
PARAMETER_KEY_PREFIX = "param:"
PARAMETER_LIST_PATTERN = "param:list:*"
PARAMETER_ALL_PATTERN = "param:*"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _from_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None


def uom_to_record(uom: UnitOfMeasure) -> dict[str, Any]:
    return {
        "code": uom.code.value,
        "name": uom.name,
        "category": uom.category.value,
        "is_base_uom": uom.is_base_uom,
        "created_at": _iso(uom.created_at),
        "created_by": uom.created_by,
        "updated_at": _iso(uom.updated_at),
        "updated_by": uom.updated_by,
    }


def uom_from_record(record: dict[str, Any]) -> UnitOfMeasure:
    return UnitOfMeasure.reconstitute(
        code=UOMCode(record["code"]),
        name=record["name"],
        category=UOMCategory(record["category"]),
        is_base_uom=record["is_base_uom"],
        created_at=_from_iso(record["created_at"]),
        created_by=record["created_by"],
        updated_at=_from_iso(record["updated_at"]),
        updated_by=record["updated_by"],
    )


def parameter_to_record(parameter: Parameter) -> dict[str, Any]:
    return {
        "code": parameter.code.value,
        "name": parameter.name,
        "category": parameter.category.value,
        "data_type": parameter.data_type.value,
        "uom": parameter.uom,
        "min_value": parameter.min_value,
        "max_value": parameter.max_value,
        "allowed_values": parameter.allowed_values,
        "is_mandatory": parameter.is_mandatory,
        "description": parameter.description,
        "is_active": parameter.is_active,
        "created_at": _iso(parameter.created_at),
        "created_by": parameter.created_by,
        "updated_at": _iso(parameter.updated_at),
        "updated_by": parameter.updated_by,
    }


def parameter_from_record(record: dict[str, Any]) -> Parameter:
    return Parameter.reconstitute(
        code=ParameterCode(record["code"]),
        name=record["name"],
        category=ParameterCategory(record["category"]),
        data_type=DataType(record["data_type"]),
        uom=record["uom"],
        min_value=record["min_value"],
        max_value=record["max_value"],
        allowed_values=list(record["allowed_values"]),
        is_mandatory=record["is_mandatory"],
        description=record["description"],
        is_active=record["is_active"],
        created_at=_from_iso(record["created_at"]),
        created_by=record["created_by"],
        updated_at=_from_iso(record["updated_at"]),
        updated_by=record["updated_by"],
    )


class _CacheAccess:
    """Cache calls that degrade to a miss (or a no-op) on CacheError."""

    def __init__(self, cache: CacheLike, ttl_seconds: int):
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def get(self, key: str) -> tuple[bool, Any]:
        try:
            return await self.cache.get(key)
        except CacheError as e:
            logger.warning(
                f"Cache read failed, falling back to store: {e}",
                extra={"error_code": e.code},
            )
            return False, None

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.cache.set(key, value, self.ttl_seconds)
        except CacheError as e:
            logger.warning(
                f"Cache write failed: {e}", extra={"error_code": e.code},
            )

    async def invalidate(self, key: str, list_pattern: str) -> None:
        try:
            await self.cache.delete(key)
            await self.cache.delete_by_pattern(list_pattern)
        except CacheError as e:
            logger.warning(
                f"Cache invalidation failed for {key}: {e}",
                extra={"error_code": e.code},
            )

    async def invalidate_pattern(self, pattern: str) -> None:
        try:
            await self.cache.delete_by_pattern(pattern)
        except CacheError as e:
            logger.warning(
                f"Cache invalidation failed for {pattern}: {e}",
                extra={"error_code": e.code},
            )


class CachedUOMRepository:
    """UOMRepository decorator adding a read-through cache."""

    def __init__(self, inner: UOMRepository, cache: CacheLike, ttl_seconds: int):
        self.inner = inner
        self._cache = _CacheAccess(cache, ttl_seconds)

    @staticmethod
    def _key(code: UOMCode) -> str:
        return f"{UOM_KEY_PREFIX}{code.value}"

    @staticmethod
    def _list_key(filter: UOMListFilter) -> str:
        category = filter.category.value if filter.category else "all"
        return f"uom:list:{category}:{filter.effective_page}:{filter.limit}"

    async def create(self, uom: UnitOfMeasure) -> None:
        await self.inner.create(uom)
        await self._cache.invalidate(self._key(uom.code), UOM_LIST_PATTERN)

    async def get_by_code(self, code: UOMCode) -> UnitOfMeasure:
        hit, record = await self._cache.get(self._key(code))
        if hit:
            return uom_from_record(record)
        uom = await self.inner.get_by_code(code)
        await self._cache.set(self._key(code), uom_to_record(uom))
        return uom

    async def list(
        self, filter: UOMListFilter,
    ) -> tuple[list[UnitOfMeasure], int]:
        key = self._list_key(filter)
        hit, record = await self._cache.get(key)
        if hit:
            return [uom_from_record(r) for r in record["items"]], record["total"]
        uoms, total = await self.inner.list(filter)
        await self._cache.set(
            key, {"items": [uom_to_record(u) for u in uoms], "total": total},
        )
        return uoms, total

    async def update(self, uom: UnitOfMeasure) -> None:
        await self.inner.update(uom)
        await self._cache.invalidate(self._key(uom.code), UOM_LIST_PATTERN)

    async def delete(self, code: UOMCode) -> None:
        await self.inner.delete(code)
        await self._cache.invalidate(self._key(code), UOM_LIST_PATTERN)
        await self._cache.invalidate_pattern(PARAMETER_ALL_PATTERN)

    async def exists_by_code(self, code: UOMCode) -> bool:
        return await self.inner.exists_by_code(code)


class CachedParameterRepository:
    """ParameterRepository decorator adding a read-through cache."""

    def __init__(
        self, inner: ParameterRepository, cache: CacheLike, ttl_seconds: int,
    ):
        self.inner = inner
        self._cache = _CacheAccess(cache, ttl_seconds)

    @staticmethod
    def _key(code: ParameterCode) -> str:
        return f"{PARAMETER_KEY_PREFIX}{code.value}"

    @staticmethod
    def _list_key(filter: ParameterListFilter) -> str:
        category = filter.category.value if filter.category else "all"
        active = "all" if filter.is_active is None else str(filter.is_active).lower()
        return (
            f"param:list:{category}:{active}:"
            f"{filter.effective_page}:{filter.limit}"
        )

    async def create(self, parameter: Parameter) -> None:
        await self.inner.create(parameter)
        await self._cache.invalidate(
            self._key(parameter.code), PARAMETER_LIST_PATTERN,
        )

    async def get_by_code(self, code: ParameterCode) -> Parameter:
        hit, record = await self._cache.get(self._key(code))
        if hit:
            return parameter_from_record(record)
        parameter = await self.inner.get_by_code(code)
        await self._cache.set(self._key(code), parameter_to_record(parameter))
        return parameter

    async def list(
        self, filter: ParameterListFilter,
    ) -> tuple[list[Parameter], int]:
        key = self._list_key(filter)
        hit, record = await self._cache.get(key)
        if hit:
            return (
                [parameter_from_record(r) for r in record["items"]],
                record["total"],
            )
        parameters, total = await self.inner.list(filter)
        await self._cache.set(key, {
            "items": [parameter_to_record(p) for p in parameters],
            "total": total,
        })
        return parameters, total

    async def update(self, parameter: Parameter) -> None:
        await self.inner.update(parameter)
        await self._cache.invalidate(
            self._key(parameter.code), PARAMETER_LIST_PATTERN,
        )

    async def delete(self, code: ParameterCode) -> None:
        await self.inner.delete(code)
        await self._cache.invalidate(self._key(code), PARAMETER_LIST_PATTERN)

    async def exists_by_code(self, code: ParameterCode) -> bool:
        return await self.inner.exists_by_code(code)
