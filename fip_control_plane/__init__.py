# fip_control_plane/__init__.py
"""
Floating IP Control Plane
Lifecycle management for cloud floating IPs bound to network ports
"""

__version__ = "1.0.0"
