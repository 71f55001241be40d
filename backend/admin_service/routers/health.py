"""
Health Router - Liveness endpoint for load balancers and orchestration.
"""

from fastapi import APIRouter, Request

from ..models.responses import HealthStatus, utc_timestamp
from .admin import ADMIN_ENDPOINT_GROUPS

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request):
    """Basic health check endpoint."""
    settings = request.app.state.settings

    return HealthStatus(
        service=settings.service_name,
        status="healthy",
        timestamp=utc_timestamp(),
        version=settings.app_version,
        endpoints=list(ADMIN_ENDPOINT_GROUPS),
    )
