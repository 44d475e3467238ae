"""
ReserBot Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract with the booking frontend.
Why:   Serialization of store records, OpenAPI doc generation, and a single
       place where the response envelopes ({success, data, message}) live.

Design Decision:
    The create request model accepts every field as optional. Presence,
    length and date rules are business validation owned by ReservaService,
    which reports them as 400 with a human-readable reason instead of
    FastAPI's automatic 422 field errors.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ReservaCreate(BaseModel):
    """Candidate reservation as sent by the client (unvalidated)."""
    nombre: Optional[str] = Field(default=None, description="Customer name (min 3 characters)")
    fecha: Optional[str] = Field(default=None, description="Booking date, YYYY-MM-DD")
    hora: Optional[str] = Field(default=None, description="Booking time, HH:MM")
    servicio: Optional[str] = Field(default=None, description="Requested service")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════

# A stored row exactly as the store returns it: id, nombre, fecha, hora,
# servicio, created_at and any column added later. Not re-validated on the
# way out, so one odd row (NULL hora, timestamp fecha) cannot break a listing.
StoredReserva = Dict[str, Any]


class ReservaListResponse(BaseModel):
    success: bool = True
    data: List[StoredReserva] = Field(description="Reservations ordered by fecha ascending")


class ReservaCreatedResponse(BaseModel):
    success: bool = True
    message: str = Field(default="reservation created successfully")
    data: StoredReserva


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ConnectionTestResponse(BaseModel):
    """Result of the record store connectivity probe (GET /api/test)."""
    success: bool = True
    message: str = Field(default="record store connection successful")
    totalReservas: int = Field(description="Number of stored reservations")


class ErrorResponse(BaseModel):
    """
    Error payload shared by every failing endpoint.

    Example:
        {"error": "name must be at least 3 characters"}
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Extra context (probe, body errors)")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    record_store: str = Field(description="Record store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
