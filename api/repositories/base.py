"""Storage contract shared by entity repositories.

Services depend on this protocol, not on a concrete base class; a
repository satisfies it simply by providing the four methods.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from core.pagination import PageRequest

EntityT = TypeVar("EntityT")
IdT = TypeVar("IdT")


class EntityNotFoundError(Exception):
    """Raised when no entity matches the given identifier."""

    def __init__(self, entity_name: str, entity_id: object):
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} with id {entity_id} not found")


@dataclass(frozen=True)
class PageSlice(Generic[EntityT]):
    """Entities for one page plus the total count across all pages."""

    items: Sequence[EntityT]
    total_elements: int

    @property
    def has_content(self) -> bool:
        return len(self.items) > 0


class EntityStore(Protocol[EntityT, IdT]):
    """Find, page, save and delete entities by identifier.

    Implementations flush but never commit; the caller owns the
    transaction.
    """

    async def find_by_id(self, entity_id: IdT) -> EntityT:
        """Raises EntityNotFoundError if absent."""
        ...

    async def find_all(self, page: PageRequest) -> PageSlice[EntityT]: ...

    async def save(self, entity: EntityT) -> EntityT:
        """Insert when the entity has no id yet, update otherwise."""
        ...

    async def delete_by_id(self, entity_id: IdT) -> IdT:
        """Raises EntityNotFoundError if absent."""
        ...
