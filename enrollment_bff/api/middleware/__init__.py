"""API middleware."""

from enrollment_bff.api.middleware.context import (
    RequestContextMiddleware,
    get_request_context,
)

__all__ = ["RequestContextMiddleware", "get_request_context"]
