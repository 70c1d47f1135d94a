"""Request context middleware for observability."""

import time
import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from enrollment_bff.api.models.context import RequestContext
from enrollment_bff.observability.logging import get_logger
from enrollment_bff.observability.metrics import REQUEST_LATENCY
from enrollment_bff.observability.tracing import get_current_trace_id

logger = get_logger(__name__)

_request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def get_request_context() -> RequestContext | None:
    """Get the context of the request being handled, if any."""
    return _request_context.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request identifiers to structlog and echoes them back.

    An inbound X-Request-ID is reused when present so that ids stay
    stable across the client, this service and its logs.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        context = RequestContext(
            request_id=request_id,
            trace_id=get_current_trace_id() or request_id,
            client_app=request.headers.get("X-Client-App"),
        )
        _request_context.set(context)
        request.state.context = context

        clear_contextvars()
        bind_contextvars(
            request_id=context.request_id,
            trace_id=context.trace_id,
            client_app=context.client_app,
        )

        start = time.perf_counter()
        logger.debug("request_started", method=request.method, path=request.url.path)

        response = await call_next(request)

        route = request.scope.get("route")
        REQUEST_LATENCY.labels(
            method=request.method,
            route=getattr(route, "path", "unmatched"),
            status=str(response.status_code),
        ).observe(time.perf_counter() - start)

        logger.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

        response.headers["X-Request-ID"] = context.request_id
        return response
