"""Request timing and operation tracking.

Each request gets a wide event (see core.wide_event) that collects context
while the request runs and is logged as a single ``request.completed`` line.
"""

import inspect
import time
import uuid
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.config import get_settings
from core.logger import bind_contextvars, clear_contextvars, get_logger
from core.wide_event import (
    clear_wide_event,
    get_wide_event,
    init_wide_event,
    set_wide_event_nested,
)

logger = get_logger(__name__)

# Successful requests faster than this are not logged
SLOW_REQUEST_THRESHOLD_MS = 1000

P = ParamSpec("P")
R = TypeVar("R")


class RequestTimingMiddleware:
    """Times each request and emits its wide event at request end.

    - One wide event per request (canonical log line)
    - x-request-id and x-request-duration-ms response headers
    - Only errors and slow requests are emitted
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")

        client = scope.get("client")
        client_ip = client[0] if client else "unknown"
        request_id = str(uuid.uuid4())

        settings = get_settings()
        wide_event = init_wide_event()
        wide_event["service_name"] = settings.service_name
        wide_event["service_version"] = settings.service_version
        wide_event["request_id"] = request_id
        wide_event["http_method"] = method
        wide_event["http_path"] = path
        wide_event["http_client_ip"] = client_ip

        # Every log line emitted during the request carries its id
        clear_contextvars()
        bind_contextvars(request_id=request_id)

        response_status: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status

            if message.get("type") == "http.response.start":
                response_status = int(message.get("status", 0))
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                duration_ms = (time.perf_counter() - start_time) * 1000
                headers.append(
                    (b"x-request-duration-ms", f"{duration_ms:.2f}".encode())
                )
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers

            elif message.get("type") == "http.response.body" and not message.get(
                "more_body", False
            ):
                duration_ms = (time.perf_counter() - start_time) * 1000
                route = scope.get("route")

                event = get_wide_event()
                event["http_route"] = getattr(route, "path", None) or path
                event["http_status_code"] = response_status
                event["duration_ms"] = round(duration_ms, 2)
                event["outcome"] = (
                    "success" if response_status and response_status < 400 else "error"
                )

                should_emit = (
                    response_status is None
                    or response_status >= 400
                    or duration_ms > SLOW_REQUEST_THRESHOLD_MS
                )
                if should_emit:
                    logger.info("request.completed", **event)

                clear_wide_event()

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            route = scope.get("route")
            event = get_wide_event()
            event["http_route"] = getattr(route, "path", None) or path
            event["duration_ms"] = round(duration_ms, 2)
            event["outcome"] = "exception"
            event["exception_type"] = type(exc).__name__
            logger.info("request.completed", **event)
            clear_wide_event()
            raise


def track_operation(operation_name: str):
    """Decorator recording an async business operation's duration.

    The timing lands in the wide event under ``operations``; failures
    also record the exception type. Exceptions always propagate.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"track_operation expects an async function: {func!r}")

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs):
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)  # type: ignore[misc]
            except Exception as e:
                set_wide_event_nested(
                    "operations", **{f"{operation_name}_error": type(e).__name__}
                )
                raise
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000
                set_wide_event_nested(
                    "operations", **{f"{operation_name}_ms": round(duration_ms, 2)}
                )

        return cast(Callable[P, R], wrapper)

    return decorator
