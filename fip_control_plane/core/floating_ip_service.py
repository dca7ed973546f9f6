# fip_control_plane/core/floating_ip_service.py
"""
Floating IP Service - lifecycle entry points used by the API

Composes resolver, provisioner and binder:
    get_or_create: resolve -> ensure
    associate:     update port -> wait for ACTIVE
    release:       resolve -> delete

Two callers racing get_or_create on the same pinned address can both
miss in resolve and both create. Whether the second create fails or
yields a duplicate is up to the networking service.
"""

import logging
import threading
from functools import lru_cache
from typing import Optional

from ..cloud.client import FloatingIPClient
from ..cloud.openstack_client import OpenStackFloatingIPClient
from ..config import settings
from ..database.session import SessionLocal
from ..schemas.floating_ip import FloatingIP
from .backoff import BackoffPolicy, DEFAULT_BACKOFF
from .binder import FloatingIPBinder
from .events import AuditLogRecorder, EventRecorder, EventReasons, NullRecorder, emit
from .provisioner import FloatingIPProvisioner
from .resolver import FloatingIPResolver

logger = logging.getLogger(__name__)


class FloatingIPService:
    """
    Floating IP lifecycle manager

    Responsibilities:
    1. Reuse an existing floating IP for an address, or allocate one
    2. Bind floating IPs to ports and wait for convergence
    3. Release floating IPs by address
    """

    def __init__(
        self,
        client: FloatingIPClient,
        recorder: Optional[EventRecorder] = None,
        policy: Optional[BackoffPolicy] = None,
    ):
        self.client = client
        self.recorder = recorder or NullRecorder()
        self.policy = policy or DEFAULT_BACKOFF
        self.resolver = FloatingIPResolver(client)
        self.provisioner = FloatingIPProvisioner(client, self.recorder)
        self.binder = FloatingIPBinder(client, self.policy)

    def resolve(self, floating_ip_address: Optional[str]) -> Optional[FloatingIP]:
        return self.resolver.resolve(floating_ip_address)

    def get(self, floating_ip_id: str) -> FloatingIP:
        return self.client.get(floating_ip_id)

    def get_or_create(
        self,
        floating_ip_address: Optional[str],
        external_network_id: str,
        owner: Optional[str] = None,
    ) -> tuple[FloatingIP, bool]:
        """
        Return the floating IP for an address, creating it if missing

        Returns:
            Tuple of (FloatingIP, is_new)
        """
        resolved = self.resolver.resolve(floating_ip_address)
        if resolved is not None:
            logger.info(f"Reusing floating IP address={resolved.floating_ip_address} id={resolved.id}")
            return resolved, False

        fp = self.provisioner.ensure(
            None,
            floating_ip_address,
            external_network_id,
            subject=owner or "floating-ip",
        )
        return fp, True

    def associate(
        self,
        floating_ip: FloatingIP,
        port_id: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> FloatingIP:
        return self.binder.associate(floating_ip, port_id, cancel_event=cancel_event)

    def disassociate(self, floating_ip: FloatingIP) -> FloatingIP:
        return self.binder.disassociate(floating_ip)

    def release(self, floating_ip_address: str, owner: Optional[str] = None) -> bool:
        """
        Delete the floating IP holding an address

        Returns:
            True if a floating IP was deleted, False if none existed
        """
        fp = self.resolver.resolve(floating_ip_address)
        if fp is None:
            logger.info(f"Floating IP already released address={floating_ip_address}")
            return False

        self.client.delete(fp.id)
        logger.info(f"Deleted floating IP address={fp.floating_ip_address} id={fp.id}")
        emit(
            self.recorder,
            owner or "floating-ip",
            EventReasons.DELETED,
            f"Deleted floating IP {fp.floating_ip_address} with id {fp.id}",
            target_id=fp.id,
        )
        return True


@lru_cache()
def get_floating_ip_service() -> FloatingIPService:
    """
    Process-wide service backed by OpenStack and the audit log
    Use as a FastAPI dependency: Depends(get_floating_ip_service)
    """
    return FloatingIPService(
        client=OpenStackFloatingIPClient(cloud=settings.OS_CLOUD),
        recorder=AuditLogRecorder(SessionLocal),
        policy=BackoffPolicy.from_settings(settings),
    )
