"""
ReserBot Backend — Database Engine Helpers
============================================

What:  Declarative base, async engine and session factory builders.
Why:   The SQL-backed record store and Alembic share one metadata object and
       one way of turning Settings into an engine.
How:   Engines are built on demand from a Settings instance and owned by the
       DatabaseRecordStore that created them (no module-level engine).

Connection Pooling Strategy:
    Pool sizing only applies to server databases (PostgreSQL). SQLite, used by
    the test-suite through aiosqlite, manages its own pool class and rejects
    pool_size / max_overflow.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from reserbot.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (metadata shared with Alembic)."""
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create an async engine for `settings.database_url`.

    SQL echo follows LOG_LEVEL=DEBUG; pooling arguments are only passed to
    non-SQLite URLs.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows are read back into dicts after commit
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
