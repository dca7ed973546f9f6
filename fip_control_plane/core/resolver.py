# fip_control_plane/core/resolver.py
"""
Floating IP Resolver - looks up an existing floating IP by address
"""

import logging
from typing import Optional

from ..cloud.client import FloatingIPClient
from ..schemas.floating_ip import FloatingIP

logger = logging.getLogger(__name__)


class FloatingIPResolver:
    """Finds the floating IP currently holding an address"""

    def __init__(self, client: FloatingIPClient):
        self.client = client

    def resolve(self, floating_ip_address: Optional[str]) -> Optional[FloatingIP]:
        """
        Return the floating IP holding `floating_ip_address`, or None

        An empty address means "no preference" and is never sent to the
        listing endpoint. When the listing returns several entries the
        first one wins. Remote errors propagate unchanged.
        """
        if not floating_ip_address:
            return None

        matches = self.client.list(floating_ip_address)
        if not matches:
            logger.debug(f"No floating IP found address={floating_ip_address}")
            return None

        return matches[0]
