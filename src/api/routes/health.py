"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from src.api.dependencies import get_app_settings, get_db_pool
from src.application.dto.responses import HealthResponse, ProviderHealthResponse
from src.config import Settings
from src.infrastructure.storage.sqlite import ConnectionPool

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health(
    pool: ConnectionPool = Depends(get_db_pool),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    start = time.time()
    available = await pool.check_health()
    db_status = ProviderHealthResponse(
        name="sqlite",
        available=available,
        latency_ms=(time.time() - start) * 1000 if available else None,
        error=None if available else "Database query failed",
    )

    return HealthResponse(
        status="healthy" if available else "unhealthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
