"""
ReserBot Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires settings, the record store, middleware, the global
       exception handlers and the routers.
Who:   uvicorn (uvicorn reserbot.main:app) and the test-suite (create_app(...)).

Application Architecture:
    Middleware:  RequestID → Logging → GZip → CORS
    Routes:      /api/reservas (GET, POST), /api/reservas/{id} (DELETE),
                 /api/test, /health, static frontend (catch-all GET)
    Errors:      ValidationError / RecordStoreError → 400
                 RouteNotFoundError / unmatched route → 404
                 anything else → 500 with a generic message (X-Request-ID kept)

Lifecycle:
    Startup:  logging, configuration check (logged, never fatal), optional table creation
    Shutdown: close the record store (HTTP client or engine pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reserbot import __version__
from reserbot.config import Settings, settings as default_settings
from reserbot.dependencies import build_record_store
from reserbot.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    RecordStoreError,
    ReservasError,
    RouteNotFoundError,
    StoreConfigurationError,
    StoreConnectionError,
    ValidationError,
)
from reserbot.middleware.logging import RequestLoggingMiddleware
from reserbot.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from reserbot.routes import connection, health, reservas, static
from reserbot.services.database_store import DatabaseRecordStore
from reserbot.services.store_base import RecordStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"

# Per-call chatter from the HTTP client, the driver and uvicorn's own access log
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx")


def setup_logging(config: Settings) -> None:
    """
    Configure the root logger once, before anything else logs.

    Every line carries the ID of the request being served, so all lines of
    one booking attempt can be grepped together.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    store: RecordStore = app.state.record_store

    setup_logging(config)
    logger.info("ReserBot backend %s starting up (record store: %s)",
                __version__, config.record_store_backend)

    # Bad credentials must not prevent startup: store calls report them instead
    try:
        config.validate_store_configuration()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if config.db_create_tables and isinstance(store, DatabaseRecordStore):
        await store.create_schema()

    logger.info("Server ready at http://%s:%d", config.host, config.port)

    yield

    logger.info("ReserBot backend shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to the two-tier error contract.

        ValidationError          → 400 {error}
        StoreConnectionError     → 400 {error, details}
        RecordStoreError         → 400 {error: store message}
        RouteNotFoundError, 404/405 from routing → 404 {error: "route not found"}
        RequestValidationError   → 400 {error: "invalid request body", details}
        StoreConfigurationError, ReservasError → 500 {error: "internal server error"}

    Anything else is answered by RequestIDMiddleware with the same 500 body.
    Internal details are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return error_response(400, exc.message)

    @app.exception_handler(StoreConnectionError)
    async def handle_store_connection_error(request: Request, exc: StoreConnectionError):
        logger.warning("Record store connection check failed: %s", exc.details)
        return error_response(400, exc.message, details=exc.details)

    @app.exception_handler(RecordStoreError)
    async def handle_record_store_error(request: Request, exc: RecordStoreError):
        logger.warning("Record store rejected request: %s | Context: %s", exc.message, exc.context)
        return error_response(400, exc.message)

    @app.exception_handler(RouteNotFoundError)
    async def handle_route_not_found(request: Request, exc: RouteNotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown path or known path with another method: both are "no such route"
        if exc.status_code in (404, 405):
            return error_response(404, RouteNotFoundError().message)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        details = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning("Invalid request body: %s", details)
        return error_response(400, "invalid request body", details=details)

    @app.exception_handler(StoreConfigurationError)
    async def handle_store_configuration_error(request: Request, exc: StoreConfigurationError):
        logger.error("%s | Context: %s", exc.message, exc.context)
        return error_response(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(ReservasError)
    async def handle_application_error(request: Request, exc: ReservasError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return error_response(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    record_store: Optional[RecordStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use (defaults to the environment-loaded settings)
        record_store: Store to inject; built from `settings` when omitted
    """
    config = settings or default_settings

    app = FastAPI(
        title="ReserBot API",
        description="Booking backend: list, create and delete reservations.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.record_store = record_store or build_record_store(config)

    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(reservas.router)
    app.include_router(connection.router)
    app.include_router(health.router)
    # Catch-all GET, must stay last
    app.include_router(static.router)

    return app


app = create_app()
