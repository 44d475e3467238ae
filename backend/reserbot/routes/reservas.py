"""
ReserBot Backend — Reservation Route Handlers
===============================================

What:  GET/POST /api/reservas and DELETE /api/reservas/{id}.
How:   Routes stay thin: they call ReservaService and wrap the result in the
       {success, data, message} envelope. Every failure is raised by the
       service or the store and mapped once by the handlers in main.py.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from reserbot.dependencies import get_reserva_service
from reserbot.schemas.reserva import (
    ErrorResponse,
    MessageResponse,
    ReservaCreate,
    ReservaCreatedResponse,
    ReservaListResponse,
)
from reserbot.services.reserva_service import ReservaService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reservas"])


@router.get(
    "/reservas",
    response_model=ReservaListResponse,
    responses={
        400: {"description": "Record store rejected the query", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all reservations ordered by date",
)
async def list_reservas(
    service: ReservaService = Depends(get_reserva_service),
) -> ReservaListResponse:
    rows = await service.list_reservas()
    return ReservaListResponse(data=rows)


@router.post(
    "/reservas",
    status_code=status.HTTP_201_CREATED,
    response_model=ReservaCreatedResponse,
    responses={
        400: {"description": "Invalid reservation or store rejection", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a reservation",
    description=(
        "Validates that nombre, fecha, hora and servicio are present, that nombre has at "
        "least 3 characters and that fecha is not in the past, then stores the reservation."
    ),
)
async def create_reserva(
    payload: Optional[ReservaCreate] = Body(default=None),
    service: ReservaService = Depends(get_reserva_service),
) -> ReservaCreatedResponse:
    # An empty body is validated like a body with no fields
    created = await service.create_reserva(payload or ReservaCreate())
    return ReservaCreatedResponse(data=created)


@router.delete(
    "/reservas/{reserva_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Record store rejected the delete", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a reservation by id",
    description="Deleting an id that does not exist also reports success.",
)
async def delete_reserva(
    reserva_id: str,
    service: ReservaService = Depends(get_reserva_service),
) -> MessageResponse:
    await service.delete_reserva(reserva_id)
    return MessageResponse(message="reservation deleted successfully")
