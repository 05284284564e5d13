"""Explicit payload validation for service entry points."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class PayloadValidationError(Exception):
    """Raised when a create/update payload fails validation.

    ``errors`` holds pydantic's field-level error list (loc, msg, type).
    """

    def __init__(self, model_name: str, errors: list[dict[str, Any]]):
        self.model_name = model_name
        self.errors = errors
        super().__init__(f"Invalid {model_name}: {len(errors)} validation error(s)")


def validate_payload(
    model_cls: type[ModelT], payload: ModelT | Mapping[str, Any]
) -> ModelT:
    """Validate ``payload`` against ``model_cls`` and return a fresh instance.

    Model instances are re-validated from their explicitly-set fields, so
    instances built with model_construct() or mutated after creation are
    checked too, and partial updates keep their "unset" information.
    """
    if isinstance(payload, BaseModel):
        data: Any = payload.model_dump(exclude_unset=True)
    else:
        data = payload

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise PayloadValidationError(
            model_cls.__name__,
            e.errors(include_url=False, include_context=False),
        ) from e
