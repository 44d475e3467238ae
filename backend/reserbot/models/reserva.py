"""
ReserBot Backend — Reserva SQLAlchemy Model
=============================================

What:  ORM model for the `reservas` table.
Why:   Used by DatabaseRecordStore for direct Postgres access and by Alembic
       as the schema source of truth. The Supabase backend talks to the same
       table over PostgREST, so both backends share these column names.

Table Design:
    - id: BIGINT identity; the store assigns it, the API never accepts one
    - fecha: DATE, indexed because every listing is ORDER BY fecha
    - hora: TIME, no range validation at any layer
    - created_at: server-side default, passed through to API responses
"""

from datetime import date, datetime, time, timezone

from sqlalchemy import BigInteger, Date, Index, Integer, Text, Time, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from reserbot.database import Base


class Reserva(Base):
    """A single booking: who (nombre), when (fecha + hora) and what (servicio)."""

    __tablename__ = "reservas"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    nombre: Mapped[str] = mapped_column(Text, nullable=False)

    fecha: Mapped[date] = mapped_column(Date, nullable=False)

    hora: Mapped[time] = mapped_column(Time, nullable=False)

    servicio: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_reservas_fecha", "fecha"),
    )

    def to_record(self) -> dict:
        """Row as a JSON-friendly dict, shaped like a PostgREST row."""
        return {
            "id": self.id,
            "nombre": self.nombre,
            "fecha": self.fecha.isoformat(),
            "hora": self.hora.isoformat(),
            "servicio": self.servicio,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Reserva(id={self.id}, fecha='{self.fecha}', hora='{self.hora}')>"
