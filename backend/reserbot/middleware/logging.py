"""
ReserBot Backend — Access Logging Middleware
==============================================

What:  One access line per request: method, path, status, duration. The request
       ID is added by the log format (RequestIDLogFilter).
How:   Booking traffic is logged at a level chosen by outcome, so rejected
       reservations and store failures can be filtered without parsing:

           2xx/3xx                  → INFO
           400 (rejected booking)   → WARNING
           404 (unknown route)      → INFO, frontend probes are noise
           5xx / unhandled error    → ERROR

An exception escaping the app is logged here as status 500 and re-raised;
RequestIDMiddleware (one layer out) turns it into the 500 response.

Request bodies are never logged (they carry customer names).
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("reserbot.access")

# Polled by load balancers every few seconds
SKIPPED_PATHS = frozenset({"/health"})


def access_log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status == 404:
        return logging.INFO
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response: Optional[Response] = None
        try:
            response = await call_next(request)
        finally:
            status = response.status_code if response is not None else 500
            self._log(request, status, (time.perf_counter() - start_time) * 1000)
        return response

    @staticmethod
    def _log(request: Request, status: int, duration_ms: float) -> None:
        logger.log(
            access_log_level(status),
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            status,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
