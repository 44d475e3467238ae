"""
ReserBot Backend — SQLAlchemy Record Store
============================================

What:  RecordStore talking to the reservations table directly through async
       SQLAlchemy (asyncpg against Supabase/Postgres, aiosqlite in tests).
Why:   Lets the service run against any Postgres holding the `reservas`
       table, without the PostgREST layer in between.
How:   The store owns its engine and session factory; each operation runs in
       its own short transaction (session.begin()) and returns plain dicts.

Error translation mirrors what PostgREST would report for the same input:
    unparseable hora / fecha / id → RecordStoreError ("invalid input syntax ...")
    IntegrityError / DataError / ProgrammingError → RecordStoreError(<driver message>)
    anything else (connection refused, pool timeout) → propagated (500)
"""

import logging
from datetime import date, time
from typing import List

from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.exc import DataError, IntegrityError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncEngine

from reserbot.config import Settings
from reserbot.database import Base, build_engine, build_session_factory
from reserbot.exceptions import RecordStoreError
from reserbot.models.reserva import Reserva
from reserbot.services.store_base import Record, RecordId, RecordStore

logger = logging.getLogger(__name__)

# Driver-reported errors that stem from the submitted values, not the connection
_REJECTION_ERRORS = (IntegrityError, DataError, ProgrammingError)


class DatabaseRecordStore(RecordStore):
    """Reservations stored in a SQL table mapped by the Reserva model."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseRecordStore":
        return cls(build_engine(settings))

    async def create_schema(self) -> None:
        """Create the reservas table if it does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Ensured table '%s' exists", Reserva.__tablename__)

    # ── RecordStore operations ────────────────────────────────────────────

    async def select_all(self, order_by: str = "fecha", ascending: bool = True) -> List[Record]:
        column = Reserva.__table__.columns.get(order_by)
        if column is None:
            raise RecordStoreError(
                message=f"column {Reserva.__tablename__}.{order_by} does not exist",
            )
        ordering = asc(column) if ascending else desc(column)

        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Reserva).order_by(ordering))
                return [row.to_record() for row in result.scalars().all()]
        except _REJECTION_ERRORS as e:
            raise self._store_error(e)

    async def insert(self, record: Record) -> Record:
        row = Reserva(
            nombre=record["nombre"],
            fecha=_parse_date(record["fecha"]),
            hora=_parse_time(record["hora"]),
            servicio=record["servicio"],
        )
        try:
            async with self._session_factory.begin() as session:
                session.add(row)
                await session.flush()  # assigns the identity value
                stored = row.to_record()
        except _REJECTION_ERRORS as e:
            raise self._store_error(e)

        logger.debug("Inserted reserva id=%s", stored["id"])
        return stored

    async def delete(self, record_id: RecordId) -> None:
        try:
            key = int(record_id)
        except (TypeError, ValueError):
            raise RecordStoreError(
                message=f'invalid input syntax for type bigint: "{record_id}"',
            )

        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(delete(Reserva).where(Reserva.id == key))
                deleted = result.rowcount
        except _REJECTION_ERRORS as e:
            raise self._store_error(e)

        logger.debug("Deleted reserva id=%s (%d rows)", key, deleted)

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count()).select_from(Reserva))
                return int(result.scalar() or 0)
        except _REJECTION_ERRORS as e:
            raise self._store_error(e)

    async def close(self) -> None:
        await self.engine.dispose()

    @staticmethod
    def _store_error(exc: Exception) -> RecordStoreError:
        original = getattr(exc, "orig", None) or exc
        return RecordStoreError(
            message=str(original).strip() or "record store error",
            context={"error_type": type(exc).__name__},
        )


def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise RecordStoreError(message=f'invalid input syntax for type date: "{value}"')


def _parse_time(value) -> time:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        raise RecordStoreError(message=f'invalid input syntax for type time: "{value}"')
