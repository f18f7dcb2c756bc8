"""
HotWheels API — Request ID Middleware
=======================================

What:  Tags each request with a short correlation ID.
Why:   The access log line and any fault logged by the catalog dispatcher
       for the same request share the ID, and clients get it back in the
       X-Request-ID response header to quote in bug reports.
How:   Reuses a client-supplied X-Request-ID, otherwise generates one;
       stores it in a ContextVar and echoes it in the response.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ── Context Variable ──────────────────────────────────────────────────────
# What: Coroutine-local storage for the current request ID
# Why ContextVar: concurrent requests share one thread and one event loop;
# a ContextVar gives each request task its own value. Tasks spawned by
# call_next copy the context, so the route and the access logger see it too.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """First 8 hex chars of a uuid4: short enough for log lines, unique enough per day."""
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns `request_id_var` and the X-Request-ID response header.

    Behavior:
        1. Reuse the client's X-Request-ID if it sent one (end-to-end tracing)
        2. Otherwise generate a short ID
        3. Expose it through request_id_var and request.state
        4. Echo it in the response headers, 500s included
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # An empty header counts as absent
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        # Keep the token so the value is restored once this request is done
        token = request_id_var.set(rid)

        # request.state for handlers, the ContextVar for loggers
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        # Clients quote this ID in bug reports; it matches the access log line
        response.headers[REQUEST_ID_HEADER] = rid
        return response
