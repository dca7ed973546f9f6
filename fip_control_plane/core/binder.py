# fip_control_plane/core/binder.py
"""
Floating IP Binder - associates floating IPs with ports
"""

import logging
import random
import threading
from typing import Optional

from ..cloud.client import FloatingIPClient
from ..schemas.floating_ip import BindRequest, FloatingIP, FloatingIPStatus
from .backoff import BackoffPolicy, ConvergenceWait
from .errors import TransportError

logger = logging.getLogger(__name__)


class FloatingIPBinder:
    """
    Binds floating IPs to ports and waits for the binding to go ACTIVE

    associate() blocks the calling thread for up to policy.max_wait
    seconds. Pass a threading.Event to abandon the wait between polls.
    """

    def __init__(
        self,
        client: FloatingIPClient,
        policy: BackoffPolicy,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.policy = policy
        self.rng = rng

    def associate(
        self,
        floating_ip: FloatingIP,
        port_id: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> FloatingIP:
        """
        Bind `floating_ip` to `port_id` and wait until it is ACTIVE

        Returns:
            The last fetched snapshot, status ACTIVE

        Raises:
            TransportError: Update failed (prefixed), or a poll failed (as is)
            ConvergenceTimeout: Still not ACTIVE after policy.steps polls
            ConvergenceCancelled: cancel_event set between two polls
        """
        request = BindRequest(floating_ip_id=floating_ip.id, port_id=port_id)
        logger.info(f"Associating floating IP address={floating_ip.floating_ip_address} port={port_id}")

        try:
            updated = self.client.update(request.floating_ip_id, request.port_id)
        except TransportError as e:
            raise TransportError(
                f"error associating floating IP: {e.message}", status_code=e.status_code
            ) from e

        logger.info(
            f"Waiting for floating IP id={updated.id} "
            f"target_status={FloatingIPStatus.ACTIVE.value}"
        )

        latest = updated

        def is_active() -> bool:
            nonlocal latest
            latest = self.client.get(updated.id)
            return latest.is_active

        ConvergenceWait(self.policy, updated.id, cancel_event=cancel_event, rng=self.rng).run(is_active)
        return latest

    def disassociate(self, floating_ip: FloatingIP) -> FloatingIP:
        """Unbind `floating_ip` from its port; no convergence wait"""
        logger.info(f"Disassociating floating IP address={floating_ip.floating_ip_address}")
        try:
            return self.client.update(floating_ip.id, None)
        except TransportError as e:
            raise TransportError(
                f"error disassociating floating IP: {e.message}", status_code=e.status_code
            ) from e
