"""
PaddyHub Backend: Shared Response Schemas
=========================================

What:  Error and health payloads shared by every route.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "No data received",
            "details": null,
            "request_id": "1f0c2b7a"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Service status plus the reachability of each store."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    databases: Dict[str, str] = Field(
        description="Per-store connectivity: connected or disconnected"
    )
    uptime_seconds: float = Field(description="Seconds since service started")
