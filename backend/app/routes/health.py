"""
WoofPoint Backend — Health Check Route
========================================

What:  Liveness endpoint for container health checks and load balancers.
How:   Answers from the process alone. The database and S3 are not probed,
       so a slow dependency never causes the instance to be recycled.
"""

import time

from fastapi import APIRouter

from app import __version__
from app.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

# Set once at import; uptime is measured from here
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
