# fip_control_plane/api/__init__.py
"""
HTTP API
"""
