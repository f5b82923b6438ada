"""Liveness and database health endpoints."""

import time

from fastapi import APIRouter

from billventory import __version__
from billventory.application.dto.responses import HealthResponse, ProviderHealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


def _uptime() -> float:
    return time.monotonic() - _started_at


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Process is up; does not touch the database."""
    return HealthResponse(status="healthy", version=__version__, uptime_seconds=_uptime())


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """Round-trip a trivial query through the connection pool."""
    from billventory.infrastructure.storage.sqlite import get_connection_pool

    started = time.perf_counter()
    try:
        pool = await get_connection_pool()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        database = ProviderHealthResponse(name="sqlite", available=False, error=str(e))
    else:
        database = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.perf_counter() - started) * 1000,
        )

    return HealthResponse(
        status="healthy" if database.available else "unhealthy",
        version=__version__,
        uptime_seconds=_uptime(),
        database=database,
    )
