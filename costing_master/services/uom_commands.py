"""UOM Commands — create, update, and delete handlers for units of measure.

Invariants:
    - Pipeline order: value objects -> existence check / load -> entity -> persist
    - Create rejects a known duplicate before building the entity; the store's
      primary key stays the final authority for concurrent creates
    - Update propagates NotFoundError from get_by_code unchanged
"""

import logging
from dataclasses import dataclass

from costing_master.core.errors import AlreadyExistsError, EntityKind
from costing_master.core.repository_protocols import UOMRepository
from costing_master.core.uom import UnitOfMeasure
from costing_master.core.value_objects import UOMCategory, UOMCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateUOMCommand:
    uom_code: str
    uom_name: str
    category: str
    is_base_uom: bool
    created_by: str


@dataclass(frozen=True)
class UpdateUOMCommand:
    uom_code: str
    uom_name: str
    category: str
    is_base_uom: bool
    updated_by: str


@dataclass(frozen=True)
class DeleteUOMCommand:
    uom_code: str


class CreateUOMHandler:
    """Handles CreateUOM."""

    def __init__(self, repo: UOMRepository):
        self.repo = repo

    async def handle(self, cmd: CreateUOMCommand) -> UnitOfMeasure:
        code = UOMCode.parse(cmd.uom_code)
        category = UOMCategory.parse(cmd.category)

        if await self.repo.exists_by_code(code):
            raise AlreadyExistsError(EntityKind.UOM)

        entity = UnitOfMeasure.create(code, cmd.uom_name, category, cmd.created_by)
        if cmd.is_base_uom:
            entity.set_as_base_uom()

        await self.repo.create(entity)
        logger.info(
            f"UOM {code} created",
            extra={"entity": EntityKind.UOM.value, "code": code.value},
        )
        return entity


class UpdateUOMHandler:
    """Handles UpdateUOM."""

    def __init__(self, repo: UOMRepository):
        self.repo = repo

    async def handle(self, cmd: UpdateUOMCommand) -> UnitOfMeasure:
        code = UOMCode.parse(cmd.uom_code)
        category = UOMCategory.parse(cmd.category)

        entity = await self.repo.get_by_code(code)
        entity.update(cmd.uom_name, category, cmd.is_base_uom, cmd.updated_by)

        await self.repo.update(entity)
        logger.info(
            f"UOM {code} updated",
            extra={"entity": EntityKind.UOM.value, "code": code.value},
        )
        return entity


class DeleteUOMHandler:
    """Handles DeleteUOM."""

    def __init__(self, repo: UOMRepository):
        self.repo = repo

    async def handle(self, cmd: DeleteUOMCommand) -> None:
        code = UOMCode.parse(cmd.uom_code)
        await self.repo.delete(code)
        logger.info(
            f"UOM {code} deleted",
            extra={"entity": EntityKind.UOM.value, "code": code.value},
        )
