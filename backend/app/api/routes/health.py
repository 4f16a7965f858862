"""Health Probes — liveness and database readiness.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process is serving
    - GET /api/v1/health/ready answers 503 until the store answers SELECT 1
"""

import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": "invoice-dashboard-api",
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness(request: Request):
    db_manager = getattr(request.app.state, "db_manager", None)
    started = time.perf_counter()
    db_ok = db_manager is not None and await db_manager.health_check()
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "latency_ms": round((time.perf_counter() - started) * 1000, 1),
    }
