"""SQLAlchemy Parameter Repository — implements core.repository_protocols.ParameterRepository.

Invariants:
    - Same NotFound / AlreadyExists / DatabaseError contract as the UOM repository
    - list filters on category and is_active only when they are not None
    - allowed_values round-trips as an ordered list; NULL bounds stay None
"""

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from costing_master.core.audit import ensure_utc
from costing_master.core.errors import (
    AlreadyExistsError, DatabaseError, EntityKind, NotFoundError,
)
from costing_master.core.list_filter import ParameterListFilter
from costing_master.core.parameter import Parameter
from costing_master.core.value_objects import DataType, ParameterCategory, ParameterCode
from costing_master.infrastructure.database import translate_db_errors
from costing_master.models.parameter import ParameterModel


def _to_entity(row: ParameterModel) -> Parameter:
    return Parameter.reconstitute(
        code=ParameterCode(row.parameter_code),
        name=row.parameter_name,
        category=ParameterCategory(row.parameter_category),
        data_type=DataType(row.data_type),
        uom=row.uom,
        min_value=row.min_value,
        max_value=row.max_value,
        allowed_values=list(row.allowed_values or []),
        is_mandatory=row.is_mandatory,
        description=row.description,
        is_active=row.is_active,
        created_at=ensure_utc(row.created_at),
        created_by=row.created_by,
        updated_at=ensure_utc(row.updated_at),
        updated_by=row.updated_by,
    )


def _mutable_columns(parameter: Parameter) -> dict:
    return {
        "parameter_name": parameter.name,
        "parameter_category": parameter.category.value,
        "data_type": parameter.data_type.value,
        "uom": parameter.uom,
        "min_value": parameter.min_value,
        "max_value": parameter.max_value,
        "allowed_values": parameter.allowed_values,
        "is_mandatory": parameter.is_mandatory,
        "description": parameter.description,
        "is_active": parameter.is_active,
    }


class SqlAlchemyParameterRepository:
    """Parameter persistence over an AsyncSession (one session per request)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, parameter: Parameter) -> None:
        try:
            async with translate_db_errors(self.db, "insert"):
                await self.db.execute(insert(ParameterModel).values(
                    parameter_code=parameter.code.value,
                    created_at=parameter.created_at,
                    created_by=parameter.created_by,
                    **_mutable_columns(parameter),
                ))
                await self.db.commit()
        except DatabaseError as e:
            if (
                isinstance(e.__cause__, IntegrityError)
                and await self.exists_by_code(parameter.code)
            ):
                raise AlreadyExistsError(EntityKind.PARAMETER) from e
            raise

    async def get_by_code(self, code: ParameterCode) -> Parameter:
        async with translate_db_errors(self.db, "select"):
            result = await self.db.execute(
                select(ParameterModel)
                .where(ParameterModel.parameter_code == code.value)
                .execution_options(populate_existing=True),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError(EntityKind.PARAMETER)
        return _to_entity(row)

    async def list(
        self, filter: ParameterListFilter,
    ) -> tuple[list[Parameter], int]:
        conditions = []
        if filter.category is not None:
            conditions.append(
                ParameterModel.parameter_category == filter.category.value,
            )
        if filter.is_active is not None:
            conditions.append(ParameterModel.is_active == filter.is_active)

        count_query = select(func.count()).select_from(ParameterModel).where(*conditions)
        query = (
            select(ParameterModel)
            .where(*conditions)
            .execution_options(populate_existing=True)
            .order_by(ParameterModel.parameter_code.asc())
            .limit(filter.limit)
            .offset(filter.offset)
        )

        async with translate_db_errors(self.db, "select"):
            total = (await self.db.execute(count_query)).scalar_one()
            rows = (await self.db.execute(query)).scalars().all()
        return [_to_entity(row) for row in rows], total

    async def update(self, parameter: Parameter) -> None:
        async with translate_db_errors(self.db, "update"):
            result = await self.db.execute(
                update(ParameterModel)
                .where(ParameterModel.parameter_code == parameter.code.value)
                .values(
                    updated_at=parameter.updated_at,
                    updated_by=parameter.updated_by,
                    **_mutable_columns(parameter),
                )
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise NotFoundError(EntityKind.PARAMETER)

    async def delete(self, code: ParameterCode) -> None:
        async with translate_db_errors(self.db, "delete"):
            result = await self.db.execute(
                delete(ParameterModel)
                .where(ParameterModel.parameter_code == code.value)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise NotFoundError(EntityKind.PARAMETER)

    async def exists_by_code(self, code: ParameterCode) -> bool:
        async with translate_db_errors(self.db, "select"):
            result = await self.db.execute(
                select(ParameterModel.parameter_code).where(
                    ParameterModel.parameter_code == code.value,
                ),
            )
            return result.scalar_one_or_none() is not None
