"""
ReserBot Backend — Record Store Wiring & FastAPI Dependencies
==============================================================

What:  Builds the configured RecordStore and hands a ReservaService to routes.
Why:   The store is constructed explicitly by the app factory and kept on
       `app.state`; route handlers receive it through Depends(), so tests can
       pass any RecordStore to create_app() or override the dependency.
"""

from fastapi import Request

from reserbot.config import Settings
from reserbot.services.database_store import DatabaseRecordStore
from reserbot.services.reserva_service import ReservaService
from reserbot.services.store_base import RecordStore
from reserbot.services.supabase_store import SupabaseRecordStore


def build_record_store(settings: Settings) -> RecordStore:
    """Instantiate the backend selected by RECORD_STORE_BACKEND (no I/O happens here)."""
    if settings.record_store_backend == "database":
        return DatabaseRecordStore.from_settings(settings)
    return SupabaseRecordStore(
        url=settings.supabase_url,
        api_key=settings.supabase_anon_key,
        table=settings.reservas_table,
        timeout=settings.store_timeout_seconds,
    )


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_reserva_service(request: Request) -> ReservaService:
    return ReservaService(get_record_store(request))
