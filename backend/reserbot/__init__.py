"""
ReserBot Backend — Application Package Initializer
==================================================

What: Marks the `reserbot` directory as a Python package.
Why:  Enables module imports like `from reserbot.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a thin layered service over an external record store:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     ReservaService (Validation)     │  ← Business rules, orchestration
    ├─────────────────────────────────────┤
    │      RecordStore (Persistence)      │  ← Supabase REST or SQLAlchemy
    └─────────────────────────────────────┘

    The record store is constructed once per application and injected into
    the service for every request, so tests can swap in a fake store.
"""

__version__ = "1.0.0"
