"""Table CRUD endpoints.

Not-found and validation errors raised by the service are translated to
404/422 by the exception handlers registered in main.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from starlette import status

from core.database import DbSession, DbSessionReadOnly
from core.pagination import PageRequest, page_request_params
from core.ratelimit import READ_LIMIT, WRITE_LIMIT, limiter
from schemas import (
    CreateTableRequest,
    DeletedTableResponse,
    Table,
    TablePage,
    UpdateTableRequest,
)
from services.tables_service import (
    create_table,
    delete_table,
    find_all_tables,
    find_table,
    update_table,
)

router = APIRouter(prefix="/api/tables", tags=["tables"])

_NOT_FOUND = {404: {"description": "Table not found"}}

PageParams = Annotated[PageRequest | None, Depends(page_request_params)]


@router.post(
    "",
    response_model=Table,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"description": "Invalid payload"}},
)
@limiter.limit(WRITE_LIMIT)
async def create_table_endpoint(
    request: Request, payload: CreateTableRequest, db: DbSession
) -> Table:
    """Create a Table."""
    return await create_table(db, payload)


@router.get("", response_model=TablePage)
@limiter.limit(READ_LIMIT)
async def list_tables_endpoint(
    request: Request, db: DbSessionReadOnly, page: PageParams
) -> TablePage:
    """List Tables one page at a time (defaults: page 0, size 20)."""
    return await find_all_tables(db, page)


@router.get("/{table_id}", response_model=Table, responses=_NOT_FOUND)
@limiter.limit(READ_LIMIT)
async def get_table_endpoint(
    request: Request, table_id: int, db: DbSessionReadOnly
) -> Table:
    """Get a Table by id."""
    return await find_table(db, table_id)


@router.put(
    "/{table_id}",
    response_model=Table,
    responses={**_NOT_FOUND, 422: {"description": "Invalid payload"}},
)
@limiter.limit(WRITE_LIMIT)
async def update_table_endpoint(
    request: Request, table_id: int, payload: UpdateTableRequest, db: DbSession
) -> Table:
    """Update the supplied fields of a Table."""
    return await update_table(db, table_id, payload)


@router.delete("/{table_id}", response_model=DeletedTableResponse, responses=_NOT_FOUND)
@limiter.limit(WRITE_LIMIT)
async def delete_table_endpoint(
    request: Request, table_id: int, db: DbSession
) -> DeletedTableResponse:
    """Delete a Table, returning its id."""
    deleted_id = await delete_table(db, table_id)
    return DeletedTableResponse(id=deleted_id)
