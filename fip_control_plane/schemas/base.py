# fip_control_plane/schemas/base.py
"""
Base schemas for API responses
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ErrorResponse(BaseModel):
    """
    Standard error response
    Used for 4xx and 5xx responses
    """
    success: bool = False
    error: str
    error_code: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "error creating floating IP: Quota exceeded for resources: ['floatingip']",
                "error_code": "REMOTE_API_ERROR",
                "details": {"status_code": 409},
                "timestamp": "2026-10-19T10:00:00Z"
            }
        }


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = "healthy"
    service: str = "fip-control-plane"
    version: str = "1.0.0"
    uptime_seconds: Optional[float] = None
    database: str = "connected"
    timestamp: datetime = Field(default_factory=datetime.utcnow)
