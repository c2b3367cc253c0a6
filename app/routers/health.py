# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from app import __version__
from app.config import settings
from core.services.barcode_service import BarcodeService
from lib.fonts import fonts_registered
from lib.utils import ApplicationError

router = APIRouter()

# Payload rendered by the readiness probe
PROBE_TEXT = "READY"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual component checks."""
    fonts: str
    barcode: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns whether the service can render labels: fonts are registered
    and the barcode backend renders a probe payload.
    """
    checks = ChecksResponse(fonts="unknown", barcode="unknown")

    checks.fonts = "healthy" if fonts_registered() else "unhealthy: not registered"

    try:
        await run_in_threadpool(BarcodeService.render_code128, PROBE_TEXT)
        checks.barcode = "healthy"
    except ApplicationError as e:
        checks.barcode = f"unhealthy: {e.message[:50]}"

    all_healthy = checks.fonts == "healthy" and checks.barcode == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
