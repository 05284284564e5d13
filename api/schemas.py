"""Pydantic schemas for API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.pagination import Page

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 4096


class CreateTableRequest(BaseModel):
    """Payload for creating a Table. The id is assigned by the server."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class UpdateTableRequest(BaseModel):
    """Payload for updating a Table.

    Only fields the caller actually sends are applied; omitted fields keep
    their stored value. ``name`` may be omitted but not cleared.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: str | None) -> str:
        # Runs only when name is supplied; None means "clear", which is not allowed
        if v is None:
            raise ValueError("name cannot be null")
        return v


class Table(BaseModel):
    """Table response schema."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


TablePage = Page[Table]


class DeletedTableResponse(BaseModel):
    """Identifier of the Table that was deleted."""

    id: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class PoolStatusResponse(BaseModel):
    """Connection pool status."""

    pool_size: int
    checked_out: int
    overflow: int
    checked_in: int


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with component status."""

    status: str
    service: str
    database: bool
    pool: PoolStatusResponse | None = None
