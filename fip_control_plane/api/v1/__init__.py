# fip_control_plane/api/v1/__init__.py
"""
API v1 modules
"""

from . import floating_ips

__all__ = ["floating_ips"]
