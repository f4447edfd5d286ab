"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - get_by_code / update / delete raise NotFoundError for an absent code, distinct
      from DatabaseError for a broken store
    - create raises AlreadyExistsError when the store's unique constraint rejects the row
    - list returns (page, total) ordered by code ascending
    - Cache misses and cache failures look identical to callers: (False, None)

Design Decisions:
    - Protocol over ABC: structural subtyping, SQLAlchemy and in-memory test doubles
      both satisfy the contract without inheriting from it
    - Async in Protocol: every implementation does IO and must honor task cancellation
"""

from typing import Any, Protocol

from costing_master.core.list_filter import ParameterListFilter, UOMListFilter
from costing_master.core.parameter import Parameter
from costing_master.core.uom import UnitOfMeasure
from costing_master.core.value_objects import ParameterCode, UOMCode


class UOMRepository(Protocol):
    """Contract for UOM persistence — implemented by shell."""
    async def create(self, uom: UnitOfMeasure) -> None: ...
    async def get_by_code(self, code: UOMCode) -> UnitOfMeasure: ...
    async def list(
        self, filter: UOMListFilter,
    ) -> tuple[list[UnitOfMeasure], int]: ...
    async def update(self, uom: UnitOfMeasure) -> None: ...
    async def delete(self, code: UOMCode) -> None: ...
    async def exists_by_code(self, code: UOMCode) -> bool: ...


class ParameterRepository(Protocol):
    """Contract for Parameter persistence — implemented by shell."""
    async def create(self, parameter: Parameter) -> None: ...
    async def get_by_code(self, code: ParameterCode) -> Parameter: ...
    async def list(
        self, filter: ParameterListFilter,
    ) -> tuple[list[Parameter], int]: ...
    async def update(self, parameter: Parameter) -> None: ...
    async def delete(self, code: ParameterCode) -> None: ...
    async def exists_by_code(self, code: ParameterCode) -> bool: ...


class CacheLike(Protocol):
    """Contract for the optional read cache — implemented by shell."""
    async def get(self, key: str) -> tuple[bool, Any]: ...
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...
    async def delete(self, *keys: str) -> None: ...
    async def delete_by_pattern(self, pattern: str) -> None: ...
    async def health_check(self) -> bool: ...
