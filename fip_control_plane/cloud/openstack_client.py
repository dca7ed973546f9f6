# fip_control_plane/cloud/openstack_client.py
"""
OpenStack SDK implementation of the floating IP client
Talks to Neutron through openstacksdk's network proxy
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import List, Optional, ParamSpec, TypeVar

import openstack
from openstack.connection import Connection
from openstack.exceptions import HttpException, SDKException

from ..core.errors import TransportError
from ..schemas.floating_ip import FloatingIP, FloatingIPCreate

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def translate_errors(func: Callable[P, T]) -> Callable[P, T]:
    """Re-raise openstacksdk exceptions as TransportError"""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except HttpException as e:
            raise TransportError(str(e), status_code=e.status_code) from e
        except SDKException as e:
            raise TransportError(str(e)) from e

    return wrapper


def to_floating_ip(resource) -> FloatingIP:
    """Convert an openstacksdk FloatingIP resource into a snapshot"""
    return FloatingIP(
        id=resource.id,
        floating_ip_address=resource.floating_ip_address,
        floating_network_id=resource.floating_network_id,
        port_id=resource.port_id,
        status=resource.status or "",
        fixed_ip_address=resource.fixed_ip_address,
        router_id=resource.router_id,
        project_id=resource.project_id,
        description=resource.description,
    )


class OpenStackFloatingIPClient:
    """Floating IP operations over an openstacksdk connection"""

    def __init__(self, cloud: Optional[str] = None, conn: Optional[Connection] = None) -> None:
        """
        Args:
            cloud: Cloud name from clouds.yaml
            conn: Existing connection, mostly for tests
        """
        self.cloud_name = cloud
        self._conn = conn

    @property
    def conn(self) -> Connection:
        """Get or create OpenStack connection."""
        if self._conn is None:
            logger.info(f"Connecting to OpenStack cloud: {self.cloud_name}")
            self._conn = openstack.connect(cloud=self.cloud_name)
        return self._conn

    def close(self) -> None:
        """Close the OpenStack connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @translate_errors
    def list(self, floating_ip_address: str) -> List[FloatingIP]:
        return [
            to_floating_ip(ip)
            for ip in self.conn.network.ips(floating_ip_address=floating_ip_address)
        ]

    @translate_errors
    def create(self, request: FloatingIPCreate) -> FloatingIP:
        # Unpinned requests must not carry floating_ip_address at all
        attrs = request.model_dump(exclude_none=True)
        logger.debug(f"Creating floating IP attrs={attrs}")
        return to_floating_ip(self.conn.network.create_ip(**attrs))

    @translate_errors
    def update(self, floating_ip_id: str, port_id: Optional[str]) -> FloatingIP:
        return to_floating_ip(self.conn.network.update_ip(floating_ip_id, port_id=port_id))

    @translate_errors
    def get(self, floating_ip_id: str) -> FloatingIP:
        return to_floating_ip(self.conn.network.get_ip(floating_ip_id))

    @translate_errors
    def delete(self, floating_ip_id: str) -> None:
        self.conn.network.delete_ip(floating_ip_id, ignore_missing=False)
