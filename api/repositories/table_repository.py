"""Repository for Table operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.pagination import MAX_SQL_INTEGER, PageRequest
from models import TableEntity
from repositories.base import EntityNotFoundError, PageSlice
from repositories.utils import log_slow_query


class TableRepository:
    """SQLAlchemy-backed EntityStore for TableEntity.

    Calls flush() but never commit(); the caller owns the transaction.
    """

    entity_name = "Table"

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @log_slow_query("table_find_by_id")
    async def find_by_id(self, table_id: int) -> TableEntity:
        # Ids outside the INTEGER column range cannot be stored
        if not -MAX_SQL_INTEGER - 1 <= table_id <= MAX_SQL_INTEGER:
            raise EntityNotFoundError(self.entity_name, table_id)
        table = await self.db.get(TableEntity, table_id)
        if table is None:
            raise EntityNotFoundError(self.entity_name, table_id)
        return table

    @log_slow_query("table_find_all")
    async def find_all(self, page: PageRequest) -> PageSlice[TableEntity]:
        """One page of tables ordered by id, plus the total row count."""
        total = await self.db.scalar(select(func.count()).select_from(TableEntity))
        result = await self.db.execute(
            select(TableEntity)
            .order_by(TableEntity.id)
            .offset(page.offset)
            .limit(page.limit)
        )
        return PageSlice(items=result.scalars().all(), total_elements=total or 0)

    @log_slow_query("table_save")
    async def save(self, table: TableEntity) -> TableEntity:
        """Insert a new table or flush changes to a tracked one."""
        self.db.add(table)
        await self.db.flush()
        await self.db.refresh(table)
        return table

    @log_slow_query("table_delete_by_id")
    async def delete_by_id(self, table_id: int) -> int:
        table = await self.find_by_id(table_id)
        await self.db.delete(table)
        await self.db.flush()
        return table_id
