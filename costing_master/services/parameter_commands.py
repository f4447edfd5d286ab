"""Parameter Commands — create, update, and delete handlers for parameters.

Invariants:
    - Code, category, and data type are validated before any repository call
    - Create: duplicate check happens before the entity is built
    - Optional fields applied in a fixed order: uom, description, mandatory,
      numeric bounds, allowed values (update then applies is_active)
    - Nothing is persisted when any setter rejects its input
"""

import logging
from dataclasses import dataclass, field

from costing_master.core.errors import AlreadyExistsError, EntityKind
from costing_master.core.parameter import Parameter
from costing_master.core.repository_protocols import ParameterRepository
from costing_master.core.value_objects import DataType, ParameterCategory, ParameterCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateParameterCommand:
    parameter_code: str
    parameter_name: str
    category: str
    data_type: str
    created_by: str
    uom: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: list[str] = field(default_factory=list)
    is_mandatory: bool = False
    description: str | None = None


@dataclass(frozen=True)
class UpdateParameterCommand:
    parameter_code: str
    parameter_name: str
    category: str
    data_type: str
    updated_by: str
    uom: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: list[str] = field(default_factory=list)
    is_mandatory: bool = False
    description: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class DeleteParameterCommand:
    parameter_code: str


def _apply_optional_fields(
    entity: Parameter,
    cmd: CreateParameterCommand | UpdateParameterCommand,
) -> None:
    entity.set_uom(cmd.uom)
    entity.set_description(cmd.description)
    entity.set_mandatory(cmd.is_mandatory)
    entity.set_numeric_constraints(cmd.min_value, cmd.max_value)
    entity.set_allowed_values(cmd.allowed_values)


class CreateParameterHandler:
    """Handles CreateParameter."""

    def __init__(self, repo: ParameterRepository):
        self.repo = repo

    async def handle(self, cmd: CreateParameterCommand) -> Parameter:
        code = ParameterCode.parse(cmd.parameter_code)
        category = ParameterCategory.parse(cmd.category)
        data_type = DataType.parse(cmd.data_type)

        if await self.repo.exists_by_code(code):
            raise AlreadyExistsError(EntityKind.PARAMETER)

        entity = Parameter.create(
            code, cmd.parameter_name, category, data_type, cmd.created_by,
        )
        _apply_optional_fields(entity, cmd)

        await self.repo.create(entity)
        logger.info(
            f"Parameter {code} created",
            extra={"entity": EntityKind.PARAMETER.value, "code": code.value},
        )
        return entity


class UpdateParameterHandler:
    """Handles UpdateParameter."""

    def __init__(self, repo: ParameterRepository):
        self.repo = repo

    async def handle(self, cmd: UpdateParameterCommand) -> Parameter:
        code = ParameterCode.parse(cmd.parameter_code)
        category = ParameterCategory.parse(cmd.category)
        data_type = DataType.parse(cmd.data_type)

        entity = await self.repo.get_by_code(code)
        entity.update(cmd.parameter_name, category, data_type, cmd.updated_by)
        _apply_optional_fields(entity, cmd)
        if cmd.is_active:
            entity.activate()
        else:
            entity.deactivate()

        await self.repo.update(entity)
        logger.info(
            f"Parameter {code} updated",
            extra={"entity": EntityKind.PARAMETER.value, "code": code.value},
        )
        return entity


class DeleteParameterHandler:
    """Handles DeleteParameter."""

    def __init__(self, repo: ParameterRepository):
        self.repo = repo

    async def handle(self, cmd: DeleteParameterCommand) -> None:
        code = ParameterCode.parse(cmd.parameter_code)
        await self.repo.delete(code)
        logger.info(
            f"Parameter {code} deleted",
            extra={"entity": EntityKind.PARAMETER.value, "code": code.value},
        )
