"""SQLAlchemy UOM Repository — implements core.repository_protocols.UOMRepository.

Invariants:
    - get_by_code / update / delete raise NotFoundError when no row matches
    - create raises AlreadyExistsError when the primary key rejects a duplicate
      (covers creates that raced past the handler's existence check)
    - list orders by uom_code ascending; total counts the filtered rows, not the page
    - Every other SQLAlchemy failure surfaces as DatabaseError
    - Reads refresh from the store (populate_existing); writes are Core statements,
      so the session identity map never masks a committed change
"""

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from costing_master.core.audit import ensure_utc
from costing_master.core.errors import (
    AlreadyExistsError, DatabaseError, EntityKind, NotFoundError,
)
from costing_master.core.list_filter import UOMListFilter
from costing_master.core.uom import UnitOfMeasure
from costing_master.core.value_objects import UOMCategory, UOMCode
from costing_master.infrastructure.database import translate_db_errors
from costing_master.models.uom import UOMModel


def _to_entity(row: UOMModel) -> UnitOfMeasure:
    return UnitOfMeasure.reconstitute(
        code=UOMCode(row.uom_code),
        name=row.uom_name,
        category=UOMCategory(row.uom_category),
        is_base_uom=row.is_base_uom,
        created_at=ensure_utc(row.created_at),
        created_by=row.created_by,
        updated_at=ensure_utc(row.updated_at),
        updated_by=row.updated_by,
    )


class SqlAlchemyUOMRepository:
    """UOM persistence over an AsyncSession (one session per request)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, uom: UnitOfMeasure) -> None:
        try:
            async with translate_db_errors(self.db, "insert"):
                await self.db.execute(insert(UOMModel).values(
                    uom_code=uom.code.value,
                    uom_name=uom.name,
                    uom_category=uom.category.value,
                    is_base_uom=uom.is_base_uom,
                    created_at=uom.created_at,
                    created_by=uom.created_by,
                ))
                await self.db.commit()
        except DatabaseError as e:
            if isinstance(e.__cause__, IntegrityError) and await self.exists_by_code(uom.code):
                raise AlreadyExistsError(EntityKind.UOM) from e
            raise

    async def get_by_code(self, code: UOMCode) -> UnitOfMeasure:
        async with translate_db_errors(self.db, "select"):
            result = await self.db.execute(
                select(UOMModel)
                .where(UOMModel.uom_code == code.value)
                .execution_options(populate_existing=True),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError(EntityKind.UOM)
        return _to_entity(row)

    async def list(
        self, filter: UOMListFilter,
    ) -> tuple[list[UnitOfMeasure], int]:
        query = select(UOMModel).execution_options(populate_existing=True)
        count_query = select(func.count()).select_from(UOMModel)
        if filter.category is not None:
            query = query.where(UOMModel.uom_category == filter.category.value)
            count_query = count_query.where(
                UOMModel.uom_category == filter.category.value,
            )

        async with translate_db_errors(self.db, "select"):
            total = (await self.db.execute(count_query)).scalar_one()
            result = await self.db.execute(
                query.order_by(UOMModel.uom_code.asc())
                .limit(filter.limit)
                .offset(filter.offset),
            )
            rows = result.scalars().all()
        return [_to_entity(row) for row in rows], total

    async def update(self, uom: UnitOfMeasure) -> None:
        async with translate_db_errors(self.db, "update"):
            result = await self.db.execute(
                update(UOMModel)
                .where(UOMModel.uom_code == uom.code.value)
                .values(
                    uom_name=uom.name,
                    uom_category=uom.category.value,
                    is_base_uom=uom.is_base_uom,
                    updated_at=uom.updated_at,
                    updated_by=uom.updated_by,
                )
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise NotFoundError(EntityKind.UOM)

    async def delete(self, code: UOMCode) -> None:
        async with translate_db_errors(self.db, "delete"):
            result = await self.db.execute(
                delete(UOMModel)
                .where(UOMModel.uom_code == code.value)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise NotFoundError(EntityKind.UOM)

    async def exists_by_code(self, code: UOMCode) -> bool:
        async with translate_db_errors(self.db, "select"):
            result = await self.db.execute(
                select(UOMModel.uom_code).where(UOMModel.uom_code == code.value),
            )
            return result.scalar_one_or_none() is not None
