"""Transformations between Table request, entity and response shapes.

All functions are pure apart from merge_into(), which updates the target
entity in place.
"""

from collections.abc import Iterable

from models import TableEntity
from schemas import CreateTableRequest, Table, UpdateTableRequest


def to_entity(source: CreateTableRequest) -> TableEntity:
    """New, unsaved entity; the id is left for the database to assign."""
    return TableEntity(name=source.name, description=source.description)


def update_to_entity(source: UpdateTableRequest) -> TableEntity:
    """Standalone unsaved entity built from the fields present in ``source``."""
    return TableEntity(**source.model_dump(exclude_unset=True))


def to_view(source: TableEntity) -> Table:
    return Table.model_validate(source)


def merge_into(source: UpdateTableRequest, target: TableEntity) -> None:
    """Overwrite the target's attributes with the fields the caller supplied.

    Omitted fields are left alone. ``target.id`` is never touched because
    update requests have no id field.
    """
    for field, value in source.model_dump(exclude_unset=True).items():
        setattr(target, field, value)


def to_views(source: Iterable[TableEntity]) -> set[Table]:
    """Map every entity to a view. Order is not preserved."""
    return {to_view(entity) for entity in source}


def updates_to_entities(source: Iterable[UpdateTableRequest]) -> set[TableEntity]:
    """Map every update request to a standalone entity. Order is not preserved."""
    return {update_to_entity(request) for request in source}
