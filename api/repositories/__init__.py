"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services free of
SQL and routes free of persistence concerns. Each repository satisfies the
EntityStore protocol from repositories.base.
"""

from repositories.base import EntityNotFoundError, EntityStore, PageSlice
from repositories.table_repository import TableRepository
from repositories.utils import log_slow_query

__all__ = [
    "EntityNotFoundError",
    "EntityStore",
    "PageSlice",
    "TableRepository",
    "log_slow_query",
]
