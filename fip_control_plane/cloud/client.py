# fip_control_plane/cloud/client.py
"""
Remote floating IP API contract
"""

from typing import List, Optional, Protocol

from ..schemas.floating_ip import FloatingIP, FloatingIPCreate


class FloatingIPClient(Protocol):
    """
    Operations the lifecycle core consumes from the networking service

    Every method raises TransportError on failure.
    """

    def list(self, floating_ip_address: str) -> List[FloatingIP]:
        ...

    def create(self, request: FloatingIPCreate) -> FloatingIP:
        ...

    def update(self, floating_ip_id: str, port_id: Optional[str]) -> FloatingIP:
        ...

    def get(self, floating_ip_id: str) -> FloatingIP:
        ...

    def delete(self, floating_ip_id: str) -> None:
        ...
