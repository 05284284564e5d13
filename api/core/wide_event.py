"""Request-scoped wide event for canonical log lines.

One dict per request accumulates context (request id, route, table ids,
operation timings). RequestTimingMiddleware creates it at request start and
logs it once at request end; everything else only adds fields.

Usage:
    from core.wide_event import set_wide_event_fields

    set_wide_event_fields(table_id=table.id)
    set_wide_event_nested("operations", table_create_ms=1.7)
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any] | None] = ContextVar("wide_event", default=None)


def init_wide_event() -> dict[str, Any]:
    """Start a fresh wide event for the current async context."""
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Current wide event, or an empty dict outside a request."""
    event = _wide_event.get()
    return event if event is not None else {}


def set_wide_event_field(key: str, value: Any) -> None:
    """Set one field. No-op outside a request (CLI, tests)."""
    set_wide_event_fields(**{key: value})


def set_wide_event_fields(**kwargs: Any) -> None:
    """Set several fields. No-op outside a request (CLI, tests)."""
    event = _wide_event.get()
    if event is not None:
        event.update(kwargs)


def set_wide_event_nested(category: str, **kwargs: Any) -> None:
    """Merge fields into a nested category.

    Example:
        set_wide_event_nested("operations", table_find_ms=0.4)
        # Results in: {"operations": {"table_find_ms": 0.4}}
    """
    event = _wide_event.get()
    if event is None:
        return
    event.setdefault(category, {}).update(kwargs)


def clear_wide_event() -> None:
    """Drop the current event once it has been emitted."""
    _wide_event.set(None)
