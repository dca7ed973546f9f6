# fip_control_plane/schemas/floating_ip.py
"""
Floating IP Pydantic schemas
"""

import ipaddress
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


class FloatingIPStatus(str, Enum):
    """Floating IP status as reported by the networking service"""
    ACTIVE = "ACTIVE"    # Bound and forwarding
    DOWN = "DOWN"        # Allocated, not forwarding
    ERROR = "ERROR"


def _validate_address(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        return None
    try:
        ipaddress.ip_address(v)
    except ValueError:
        raise ValueError(f"Invalid IP address: {v}")
    return v


# === Domain Models ===

class FloatingIP(BaseModel):
    """
    Snapshot of a remote floating IP

    Owned by the networking service; this copy may be stale as soon as
    it is returned.
    """
    id: str
    floating_ip_address: str
    floating_network_id: Optional[str] = None
    port_id: Optional[str] = None
    status: str = FloatingIPStatus.DOWN.value
    fixed_ip_address: Optional[str] = None
    router_id: Optional[str] = None
    project_id: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_active(self) -> bool:
        return self.status == FloatingIPStatus.ACTIVE.value


class FloatingIPCreate(BaseModel):
    """
    Creation payload for a floating IP

    floating_ip_address stays None unless the caller pins an address;
    pinning is an admin-only operation on most clouds.
    """
    floating_network_id: str = Field(..., min_length=1)
    floating_ip_address: Optional[str] = None

    @field_validator('floating_ip_address')
    @classmethod
    def validate_floating_ip_address(cls, v: Optional[str]) -> Optional[str]:
        return _validate_address(v)


class BindRequest(BaseModel):
    """Floating IP to port association request"""
    floating_ip_id: str = Field(..., min_length=1)
    port_id: str = Field(..., min_length=1)


# === API Request Schemas ===

class FloatingIPEnsureRequest(BaseModel):
    """
    Schema for get-or-create
    Omit floating_ip_address to accept any freshly issued address
    """
    floating_ip_address: Optional[str] = Field(
        None,
        description="Address to resolve or pin on creation",
        examples=["203.0.113.10"]
    )
    floating_network_id: Optional[str] = Field(
        None,
        description="External network to allocate from (defaults to EXTERNAL_NETWORK_ID)"
    )
    owner: Optional[str] = Field(
        None,
        max_length=100,
        description="Subject recorded on audit events, e.g. the cluster name",
        examples=["cluster-prod-01"]
    )

    @field_validator('floating_ip_address')
    @classmethod
    def validate_floating_ip_address(cls, v: Optional[str]) -> Optional[str]:
        return _validate_address(v)


class AssociateRequest(BaseModel):
    """Schema for binding a floating IP to a port"""
    port_id: str = Field(..., min_length=1, examples=["5e1d9c2e-7a4b-4c1e-9d1f-0b6c2a3e4f5a"])


# === API Response Schemas ===

class FloatingIPResponse(BaseModel):
    """Floating IP returned by the API"""
    id: str
    floating_ip_address: str
    floating_network_id: Optional[str] = None
    port_id: Optional[str] = None
    status: str
    fixed_ip_address: Optional[str] = None
    created: bool = False

    model_config = ConfigDict(from_attributes=True)


class AuditEventResponse(BaseModel):
    """Audit log entry"""
    id: int
    event_type: str
    subject: Optional[str] = None
    target_id: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuditEventListResponse(BaseModel):
    """List of audit events"""
    events: List[AuditEventResponse]
    total: int
