"""
Admin Router - Administrative endpoints.

Placeholder routes for user management, analytics and system administration.
Each returns a success envelope with empty data until the real features land.
"""

from fastapi import APIRouter

from ..models.responses import Envelope

router = APIRouter()

# Endpoint groups advertised by the health check
ADMIN_ENDPOINT_GROUPS = ["users", "analytics", "system"]


@router.get("/users", response_model=Envelope, response_model_exclude_none=True)
async def list_users():
    """User management."""
    return Envelope(
        success=True,
        message="Admin users endpoint - Coming soon",
        data=[],
    )


@router.get("/analytics", response_model=Envelope, response_model_exclude_none=True)
async def get_analytics():
    """Platform analytics."""
    return Envelope(
        success=True,
        message="Admin analytics endpoint - Coming soon",
        data={},
    )


@router.get("/system", response_model=Envelope, response_model_exclude_none=True)
async def get_system():
    """System administration."""
    return Envelope(
        success=True,
        message="Admin system endpoint - Coming soon",
        data={},
    )
