# fip_control_plane/schemas/__init__.py
"""
Pydantic Schemas for the Floating IP Control Plane
"""

from .base import ErrorResponse, HealthResponse
from .floating_ip import (
    FloatingIPStatus,
    FloatingIP,
    FloatingIPCreate,
    BindRequest,
    FloatingIPEnsureRequest,
    AssociateRequest,
    FloatingIPResponse,
    AuditEventResponse,
    AuditEventListResponse,
)

__all__ = [
    # Base
    "ErrorResponse",
    "HealthResponse",
    # Floating IP
    "FloatingIPStatus",
    "FloatingIP",
    "FloatingIPCreate",
    "BindRequest",
    "FloatingIPEnsureRequest",
    "AssociateRequest",
    "FloatingIPResponse",
    "AuditEventResponse",
    "AuditEventListResponse",
]
