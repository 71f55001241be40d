"""
Response Models - JSON envelopes returned by every Admin Service route.

This module defines:
- ErrorDetail: machine-readable error code plus message
- Envelope: the standard success/error wrapper
- HealthStatus: the /health payload
- Helpers that build envelope dicts for exception handlers
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error information carried by a failed envelope."""

    code: str
    message: str
    details: Optional[str] = None


class Envelope(BaseModel):
    """Standard response envelope."""

    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[ErrorDetail] = None


class HealthStatus(BaseModel):
    """Health status response model."""

    service: str
    status: str
    timestamp: str
    version: str
    endpoints: List[str]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_envelope(code: str, message: str, details: Optional[str] = None) -> dict:
    """Build a failed envelope, dropping absent fields."""
    envelope = Envelope(
        success=False,
        error=ErrorDetail(code=code, message=message, details=details),
    )
    return envelope.model_dump(exclude_none=True)
