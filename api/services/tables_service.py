"""Table service: create, read, update, delete and page through Tables.

Every function takes the request-scoped AsyncSession. The session's
transaction scope (core.database.session_scope) commits or rolls back;
nothing here commits, and store errors such as EntityNotFoundError are
left to propagate to the route layer.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from core.pagination import (
    Page,
    PageRequest,
    create_page,
    empty_page,
    normalize_page,
)
from core.telemetry import track_operation
from core.wide_event import set_wide_event_fields
from models import TableEntity
from repositories.base import EntityStore
from repositories.table_repository import TableRepository
from schemas import CreateTableRequest, Table, UpdateTableRequest
from services import table_mapper
from services.validation import validate_payload

logger = get_logger(__name__)


def _table_store(db: AsyncSession) -> EntityStore[TableEntity, int]:
    return TableRepository(db)


@track_operation("table_create")
async def create_table(
    db: AsyncSession, payload: CreateTableRequest | Mapping[str, Any]
) -> Table:
    """Create a Table from the payload and return it with its new id."""
    request = validate_payload(CreateTableRequest, payload)
    store = _table_store(db)

    table = table_mapper.to_entity(request)

    logger.debug("table.saving", operation="create")
    created = await store.save(table)

    set_wide_event_fields(table_id=created.id)
    return table_mapper.to_view(created)


@track_operation("table_update")
async def update_table(
    db: AsyncSession,
    table_id: int,
    payload: UpdateTableRequest | Mapping[str, Any],
) -> Table:
    """Apply the supplied fields to an existing Table.

    Raises:
        PayloadValidationError: payload is invalid (checked before any lookup).
        EntityNotFoundError: no Table has this id.
    """
    request = validate_payload(UpdateTableRequest, payload)
    store = _table_store(db)
    set_wide_event_fields(table_id=table_id)

    table = await store.find_by_id(table_id)
    table_mapper.merge_into(request, table)

    logger.debug("table.saving", operation="update", table_id=table_id)
    updated = await store.save(table)

    return table_mapper.to_view(updated)


@track_operation("table_find")
async def find_table(db: AsyncSession, table_id: int) -> Table:
    """Raises EntityNotFoundError if no Table has this id."""
    set_wide_event_fields(table_id=table_id)
    table = await _table_store(db).find_by_id(table_id)
    return table_mapper.to_view(table)


@track_operation("table_find_all")
async def find_all_tables(db: AsyncSession, page: PageRequest | None) -> Page[Table]:
    """One page of Tables.

    A missing or invalid page request falls back to the first page of
    20. A page without content is returned as an empty page with a total
    of zero.
    """
    page_settings = normalize_page(page)
    logger.debug(
        "table.page_settings",
        page_index=page_settings.index,
        page_size=page_settings.size,
    )

    page_data = await _table_store(db).find_all(page_settings)

    if page_data.has_content:
        tables = [table_mapper.to_view(table) for table in page_data.items]
        return create_page(tables, page_settings, page_data.total_elements)

    return empty_page(page_settings)


@track_operation("table_delete")
async def delete_table(db: AsyncSession, table_id: int) -> int:
    """Delete a Table and return its id.

    Raises EntityNotFoundError if no Table has this id.
    """
    set_wide_event_fields(table_id=table_id)
    deleted_id = await _table_store(db).delete_by_id(table_id)
    logger.info("table.deleted", table_id=deleted_id)
    return deleted_id
