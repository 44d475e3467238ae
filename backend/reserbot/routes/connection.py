"""
ReserBot Backend — Record Store Connectivity Probe
====================================================

What:  GET /api/test counts the stored reservations.
Why:   Lets an operator confirm SUPABASE_URL / SUPABASE_ANON_KEY (or
       DATABASE_URL) work end to end without creating any data.

Responses:
    200 {"success": true, "message": ..., "totalReservas": n}
    400 {"error": "record store connection error", "details": <store message>}
    500 {"error": "internal server error"}
"""

from fastapi import APIRouter, Depends

from reserbot.dependencies import get_reserva_service
from reserbot.schemas.reserva import ConnectionTestResponse, ErrorResponse
from reserbot.services.reserva_service import ReservaService

router = APIRouter(prefix="/api", tags=["Diagnostics"])


@router.get(
    "/test",
    response_model=ConnectionTestResponse,
    responses={
        400: {"description": "Record store reported an error", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Check connectivity with the record store",
)
async def test_connection(
    service: ReservaService = Depends(get_reserva_service),
) -> ConnectionTestResponse:
    total = await service.check_connection()
    return ConnectionTestResponse(totalReservas=total)
