# fip_control_plane/core/provisioner.py
"""
Floating IP Provisioner - allocates a floating IP when none was resolved
"""

import logging
from typing import Optional

from ..cloud.client import FloatingIPClient
from ..schemas.floating_ip import FloatingIP, FloatingIPCreate
from .errors import FloatingIPPermissionError, TransportError
from .events import EventRecorder, EventReasons, emit

logger = logging.getLogger(__name__)


class FloatingIPProvisioner:
    """
    Creates floating IPs and records the outcome

    Not idempotent on its own: always resolve right before calling
    ensure(), and never retry a failed create without resolving again.
    """

    def __init__(self, client: FloatingIPClient, recorder: EventRecorder):
        self.client = client
        self.recorder = recorder

    def ensure(
        self,
        resolved: Optional[FloatingIP],
        floating_ip_address: Optional[str],
        external_network_id: str,
        subject: str = "floating-ip",
    ) -> FloatingIP:
        """
        Return `resolved`, or create a new floating IP on the external network

        Args:
            resolved: Result of the resolver for the same address
            floating_ip_address: Address to pin, empty for any address
            external_network_id: Network to allocate from
            subject: Object audit events are recorded against

        Raises:
            FloatingIPPermissionError: Pinned create refused by the service
            TransportError: Any other create failure
        """
        if resolved is not None:
            return resolved

        request = FloatingIPCreate(
            floating_network_id=external_network_id,
            # only admin can pin an address
            floating_ip_address=floating_ip_address or None,
        )

        try:
            fp = self.client.create(request)
        except TransportError as e:
            message = f"error creating floating IP: {e.message}"
            emit(self.recorder, subject, EventReasons.CREATE_FAILED, message)
            if request.floating_ip_address and e.status_code == 403:
                raise FloatingIPPermissionError(message, status_code=e.status_code) from e
            raise TransportError(message, status_code=e.status_code) from e

        logger.info(f"Created floating IP address={fp.floating_ip_address} id={fp.id}")
        emit(
            self.recorder,
            subject,
            EventReasons.CREATED,
            f"Created floating IP {fp.floating_ip_address} with id {fp.id}",
            target_id=fp.id,
        )
        return fp
