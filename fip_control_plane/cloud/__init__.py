# fip_control_plane/cloud/__init__.py
"""
Remote networking service clients
"""

from .client import FloatingIPClient
from .openstack_client import OpenStackFloatingIPClient

__all__ = [
    "FloatingIPClient",
    "OpenStackFloatingIPClient",
]
