"""
ReserBot Backend — Request ID Middleware
==========================================

What:  Tags every request with a short correlation ID and guarantees that
       every response, including an unexpected 500, carries it back.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates one; stores it in a ContextVar for loggers and error
       handlers.

This is the outermost application middleware. Errors the exception handlers
in main.py did not map (bugs, unreachable store) surface here as exceptions
from call_next; they are logged with their traceback and answered with the
generic 500 body, so they never reach Starlette's ServerErrorMiddleware
(which sits outside every middleware and would drop the header).
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from reserbot.exceptions import INTERNAL_ERROR_MESSAGE

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Stamps `record.request_id` so log formats can include it ("-" outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns `request.state.request_id` and the X-Request-ID response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Unexpected error on %s %s: %s",
                request.method,
                request.url.path,
                str(exc),
                exc_info=exc,
            )
            response = JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

        response.headers[REQUEST_ID_HEADER] = rid
        return response
