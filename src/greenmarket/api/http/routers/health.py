"""Health check endpoints for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.greenmarket.api.http.app_data import ApplicationDependencies
from src.greenmarket.api.http.deps import get_app_dependencies

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe. Returns 503 while the database is unreachable."""
    db_healthy = app_deps.database_service.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {"database": "healthy" if db_healthy else "unhealthy"},
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
