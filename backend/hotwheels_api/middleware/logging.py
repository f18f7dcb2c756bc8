"""
HotWheels API — Request Logging Middleware
============================================

What:  One access-log line per request: method, path, status, duration.
Why:   The catalog dispatcher only logs faults; 404s and slow list queries
       are visible here instead.
How:   Times the downstream call and logs on the "hotwheels.access" logger,
       at a level picked from the status code.

Example line:
    2026-01-15T12:00:00 [INFO] hotwheels.access: GET /all-models 200 84.2ms [a1b2c3d4] from 10.0.0.7

What we DON'T log: query strings and headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hotwheels_api.middleware.request_id import request_id_var

logger = logging.getLogger("hotwheels.access")


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request after its response has been produced.

    Must be added *before* RequestIDMiddleware (Starlette runs the last added
    middleware first) so the request ID is already set when this one runs.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # perf_counter: monotonic and high resolution, unaffected by clock changes
        start_time = time.perf_counter()

        # request.client is None under ASGITransport and some proxies
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        # Decoded path only; the query string is never logged
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        rid = request_id_var.get("")

        # Message for humans; `extra` fields for log processors that index them
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
