"""
ReserBot Backend — Reserva Service (Validation & Orchestration)
================================================================

What:  Validates reservation input and forwards list / create / delete /
       count operations to the injected RecordStore.
Why:   Keeps every business rule out of the HTTP layer and out of the stores.
How:   Stateless class built per request around a shared store instance.
       Failures are raised as application exceptions; the global handlers
       in main.py turn them into HTTP responses.

Creation rules (checked in order, first failure wins):
    1. nombre, fecha, hora and servicio present and non-empty
    2. len(nombre) >= 3
    3. fecha >= today (calendar dates only, today itself is accepted)
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from reserbot.exceptions import RecordStoreError, StoreConnectionError, ValidationError
from reserbot.schemas.reserva import ReservaCreate
from reserbot.services.store_base import Record, RecordId, RecordStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("nombre", "fecha", "hora", "servicio")
MIN_NOMBRE_LENGTH = 3

MSG_FIELDS_REQUIRED = "all fields are required"
MSG_NOMBRE_TOO_SHORT = "name must be at least 3 characters"
MSG_PAST_DATE = "cannot make reservations for past dates"
MSG_INVALID_DATE = "fecha must be a valid date (YYYY-MM-DD)"


def parse_fecha(value: str) -> Optional[date]:
    """
    Parse a booking date, ignoring any time-of-day component.

    Accepts YYYY-MM-DD or a full ISO 8601 datetime. Returns None when the
    value is not a date.
    """
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError):
        return None


class ReservaService:
    """
    Business logic for reservations.

    Args:
        store: RecordStore holding the reservations
        today: Clock returning the current calendar date (tests pin it)
    """

    def __init__(self, store: RecordStore, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    def validate(self, candidate: ReservaCreate) -> Record:
        """
        Apply the creation rules to a candidate.

        Returns:
            The record to insert (the four business fields only).

        Raises:
            ValidationError: with the reason of the first failing rule.
        """
        values = {name: getattr(candidate, name) for name in REQUIRED_FIELDS}

        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ValidationError(MSG_FIELDS_REQUIRED, context={"missing": missing})

        if len(values["nombre"]) < MIN_NOMBRE_LENGTH:
            raise ValidationError(MSG_NOMBRE_TOO_SHORT, field="nombre")

        fecha = parse_fecha(values["fecha"])
        if fecha is None:
            raise ValidationError(MSG_INVALID_DATE, field="fecha")
        if fecha < self.today():
            raise ValidationError(MSG_PAST_DATE, field="fecha")

        return values

    async def list_reservas(self) -> List[Record]:
        return await self.store.select_all(order_by="fecha", ascending=True)

    async def create_reserva(self, candidate: ReservaCreate) -> Record:
        record = self.validate(candidate)
        created = await self.store.insert(record)
        logger.info(
            "Reserva created: id=%s fecha=%s hora=%s",
            created.get("id"),
            record["fecha"],
            record["hora"],
        )
        return created

    async def delete_reserva(self, reserva_id: RecordId) -> None:
        # No existence check: deleting an unknown id succeeds like the store does
        await self.store.delete(reserva_id)
        logger.info("Reserva deleted: id=%s", reserva_id)

    async def check_connection(self) -> int:
        """
        Count the stored reservations to prove the store is reachable.

        Raises:
            StoreConnectionError: the store answered with an error.
        """
        try:
            return await self.store.count()
        except RecordStoreError as e:
            raise StoreConnectionError(details=e.message, context=e.context)
