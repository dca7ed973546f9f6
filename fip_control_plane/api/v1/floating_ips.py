# fip_control_plane/api/v1/floating_ips.py
"""
Floating IP API Endpoints
Admin-only REST API over the floating IP lifecycle
"""

from fastapi import APIRouter, Depends, HTTPException, Header, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ...database.session import get_db
from ...database.models import AuditLog
from ...schemas.floating_ip import (
    FloatingIP,
    FloatingIPEnsureRequest,
    AssociateRequest,
    FloatingIPResponse,
    AuditEventResponse,
    AuditEventListResponse,
)
from ...schemas.base import ErrorResponse
from ...core.floating_ip_service import FloatingIPService, get_floating_ip_service
from ...config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


# === Authentication Dependency ===

async def verify_admin_token(x_admin_token: str = Header(..., alias="X-Admin-Token")):
    """
    Verify admin authentication token

    In production, replace with proper JWT/OAuth2 authentication
    """
    if x_admin_token != settings.ADMIN_SECRET:
        logger.warning("Invalid admin token attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing admin token",
                "error_code": "UNAUTHORIZED"
            },
            headers={"WWW-Authenticate": "Bearer"}
        )
    return True


def _to_response(fp: FloatingIP, created: bool = False) -> FloatingIPResponse:
    return FloatingIPResponse(
        id=fp.id,
        floating_ip_address=fp.floating_ip_address,
        floating_network_id=fp.floating_network_id,
        port_id=fp.port_id,
        status=fp.status,
        fixed_ip_address=fp.fixed_ip_address,
        created=created
    )


# === Floating IP Endpoints ===
# Plain `def` endpoints: they make blocking SDK calls and run in the threadpool

@router.post(
    "/floating-ips",
    response_model=FloatingIPResponse,
    responses={
        200: {"description": "Existing floating IP reused"},
        201: {"description": "Floating IP created"},
        403: {"description": "Address pinning refused", "model": ErrorResponse},
        502: {"description": "Networking service error", "model": ErrorResponse},
    },
    summary="Get or create floating IP",
    description="Resolve a floating IP by address and allocate it on the external network if missing"
)
def ensure_floating_ip(
    body: FloatingIPEnsureRequest,
    response: Response,
    service: FloatingIPService = Depends(get_floating_ip_service),
    _: bool = Depends(verify_admin_token)
):
    """Get or create a floating IP"""
    network_id = body.floating_network_id or settings.EXTERNAL_NETWORK_ID
    if not network_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "floating_network_id is required when EXTERNAL_NETWORK_ID is not configured",
                "error_code": "EXTERNAL_NETWORK_REQUIRED"
            }
        )

    fp, is_new = service.get_or_create(body.floating_ip_address, network_id, owner=body.owner)
    if is_new:
        response.status_code = status.HTTP_201_CREATED

    return _to_response(fp, created=is_new)


@router.get(
    "/floating-ips/{floating_ip_address}",
    response_model=FloatingIPResponse,
    responses={
        200: {"description": "Floating IP found"},
        404: {"description": "No floating IP holds this address", "model": ErrorResponse},
    },
    summary="Resolve floating IP by address"
)
def get_floating_ip(
    floating_ip_address: str,
    service: FloatingIPService = Depends(get_floating_ip_service),
    _: bool = Depends(verify_admin_token)
):
    """Get floating IP details by address"""
    fp = service.resolve(floating_ip_address)

    if not fp:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": f"Floating IP {floating_ip_address} not found",
                "error_code": "FLOATING_IP_NOT_FOUND"
            }
        )

    return _to_response(fp)


@router.post(
    "/floating-ips/{floating_ip_id}/associate",
    response_model=FloatingIPResponse,
    responses={
        200: {"description": "Floating IP bound and ACTIVE"},
        502: {"description": "Networking service error", "model": ErrorResponse},
        504: {"description": "Floating IP did not become ACTIVE in time", "model": ErrorResponse},
    },
    summary="Associate floating IP with a port",
    description="Bind the floating IP to a port and block until it reports ACTIVE"
)
def associate_floating_ip(
    floating_ip_id: str,
    body: AssociateRequest,
    service: FloatingIPService = Depends(get_floating_ip_service),
    _: bool = Depends(verify_admin_token)
):
    """Associate floating IP with a port"""
    fp = service.get(floating_ip_id)
    fp = service.associate(fp, body.port_id)

    logger.info(f"Floating IP {fp.floating_ip_address} bound to port {body.port_id}")

    return _to_response(fp)


@router.post(
    "/floating-ips/{floating_ip_id}/disassociate",
    response_model=FloatingIPResponse,
    summary="Disassociate floating IP from its port"
)
def disassociate_floating_ip(
    floating_ip_id: str,
    service: FloatingIPService = Depends(get_floating_ip_service),
    _: bool = Depends(verify_admin_token)
):
    """Unbind floating IP"""
    fp = service.get(floating_ip_id)
    return _to_response(service.disassociate(fp))


@router.delete(
    "/floating-ips/{floating_ip_address}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Release floating IP",
    description="Delete the floating IP holding this address. Succeeds if none exists."
)
def release_floating_ip(
    floating_ip_address: str,
    owner: Optional[str] = Query(None, description="Subject recorded on the audit event"),
    service: FloatingIPService = Depends(get_floating_ip_service),
    _: bool = Depends(verify_admin_token)
):
    """Release floating IP"""
    service.release(floating_ip_address, owner=owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === Audit ===

@router.get(
    "/audit-events",
    response_model=AuditEventListResponse,
    summary="List audit events",
    description="Most recent floating IP lifecycle events"
)
async def list_audit_events(
    limit: int = Query(50, ge=1, le=500),
    event_type: Optional[str] = Query(None, description="Filter by reason code"),
    db: Session = Depends(get_db),
    _: bool = Depends(verify_admin_token)
):
    """List audit events, newest first"""
    query = db.query(AuditLog)
    if event_type:
        query = query.filter(AuditLog.event_type == event_type)

    events = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()

    return AuditEventListResponse(
        events=[AuditEventResponse.model_validate(e) for e in events],
        total=len(events)
    )
