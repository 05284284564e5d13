"""Pagination request normalization and page assembly.

A PageRequest is a zero-based (index, size) pair. Anything that is not a
usable request (missing, negative index, non-positive size, wrong types)
is replaced by the default first page of DEFAULT_PAGE_SIZE items, so
listing endpoints never fail on paging input.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from math import ceil
from typing import Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel, computed_field

T = TypeVar("T")

DEFAULT_PAGE_INDEX = 0
DEFAULT_PAGE_SIZE = 20

# Largest value a signed 64-bit SQL INTEGER column or OFFSET can hold
MAX_SQL_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    """Which slice of a collection is requested.

    Attributes:
        index: Zero-based page number.
        size: Number of items per page.
    """

    index: int
    size: int

    @property
    def offset(self) -> int:
        """Number of items to skip (SQL OFFSET)."""
        return self.index * self.size

    @property
    def limit(self) -> int:
        return self.size


DEFAULT_PAGE = PageRequest(index=DEFAULT_PAGE_INDEX, size=DEFAULT_PAGE_SIZE)


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a valid page index or size
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_page(requested: PageRequest | None) -> PageRequest:
    """Return a usable page request; never raises.

    Invalid or missing requests become DEFAULT_PAGE, valid ones are
    returned unchanged. A request whose rows lie beyond MAX_SQL_INTEGER
    cannot be expressed as LIMIT/OFFSET and counts as invalid.
    """
    if not isinstance(requested, PageRequest):
        return DEFAULT_PAGE
    if not _is_int(requested.index) or not _is_int(requested.size):
        return DEFAULT_PAGE
    if requested.index < 0 or requested.size <= 0:
        return DEFAULT_PAGE
    if requested.offset + requested.size > MAX_SQL_INTEGER:
        return DEFAULT_PAGE
    return requested


class Page(BaseModel, Generic[T]):
    """One page of items plus pagination metadata."""

    items: list[T]
    page_index: int
    page_size: int
    total_elements: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return ceil(self.total_elements / self.page_size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def number_of_elements(self) -> int:
        return len(self.items)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def first(self) -> bool:
        return self.page_index == 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def last(self) -> bool:
        return not self.has_next

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.page_index > 0


def create_page(
    items: Sequence[T], page: PageRequest, total_elements: int
) -> Page[T]:
    """Package already-fetched items; no filtering or sorting happens here."""
    return Page(
        items=list(items),
        page_index=page.index,
        page_size=page.size,
        total_elements=total_elements,
    )


def empty_page(page: PageRequest) -> Page[T]:
    """A page with no items and a total of zero, keeping the page metadata."""
    return Page(
        items=[],
        page_index=page.index,
        page_size=page.size,
        total_elements=0,
    )


def page_request_params(
    page: int | None = Query(
        default=None,
        description="Zero-based page index (invalid values fall back to 0)",
    ),
    size: int | None = Query(
        default=None,
        description=f"Items per page (invalid values fall back to {DEFAULT_PAGE_SIZE})",
    ),
) -> PageRequest | None:
    """FastAPI dependency turning ?page=&size= into a PageRequest.

    Values are deliberately not range-checked here; normalize_page()
    replaces unusable requests with the default page.

    Usage:
        @router.get("/items")
        async def list_items(
            page: PageRequest | None = Depends(page_request_params),
        ):
            ...
    """
    if page is None and size is None:
        return None
    return PageRequest(
        index=DEFAULT_PAGE_INDEX if page is None else page,
        size=DEFAULT_PAGE_SIZE if size is None else size,
    )
