# fip_control_plane/core/errors.py
"""
Floating IP error taxonomy
"""

from typing import Optional


class FloatingIPError(Exception):
    """Base class for all floating IP lifecycle errors"""


class TransportError(FloatingIPError):
    """
    A call to the remote floating IP API failed

    status_code is the HTTP status returned by the remote service,
    None when the request never got an answer.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class FloatingIPPermissionError(TransportError):
    """Remote service refused an address-pinned creation (admin only)"""


class ConvergenceTimeout(FloatingIPError):
    """Floating IP never reached ACTIVE within the backoff budget"""

    def __init__(self, floating_ip_id: str, attempts: int):
        self.floating_ip_id = floating_ip_id
        self.attempts = attempts
        super().__init__(
            f"timed out waiting for floating IP {floating_ip_id} to become ACTIVE "
            f"after {attempts} attempts"
        )


class ConvergenceCancelled(FloatingIPError):
    """Convergence wait was abandoned between two polls"""

    def __init__(self, floating_ip_id: str, attempts: int):
        self.floating_ip_id = floating_ip_id
        self.attempts = attempts
        super().__init__(
            f"cancelled waiting for floating IP {floating_ip_id} after {attempts} attempts"
        )
