"""
ReserBot Backend — Health Check Route
=======================================

What:  Liveness/readiness endpoint for Docker health checks and load balancers.
How:   Runs the store's count query and reports the aggregate status.
       Unlike GET /api/test it never fails: an unreachable store is reported
       as "unhealthy" inside a 200 response.
"""

import logging
import time

from fastapi import APIRouter, Depends

from reserbot import __version__
from reserbot.dependencies import get_record_store
from reserbot.schemas.reserva import HealthResponse
from reserbot.services.store_base import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: RecordStore = Depends(get_record_store)) -> HealthResponse:
    store_status = "connected"
    overall = "healthy"

    try:
        await store.count()
    except Exception as e:
        store_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: record store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        record_store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
