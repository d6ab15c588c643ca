"""
Noteful API: Health Check Route
================================

GET /health for load balancers and container health checks. The service is
healthy only when the database answers `SELECT 1`; otherwise the route
answers 503 so traffic is routed elsewhere.
"""

import time

from fastapi import APIRouter, Depends, Response

from noteful import __version__
from noteful.database import Database, get_database
from noteful.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    connected = await database.ping()
    if not connected:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
