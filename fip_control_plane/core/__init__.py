# fip_control_plane/core/__init__.py
"""
Core floating IP lifecycle modules
"""

from .errors import (
    FloatingIPError,
    TransportError,
    FloatingIPPermissionError,
    ConvergenceTimeout,
    ConvergenceCancelled,
)
from .backoff import BackoffPolicy, ConvergenceState, ConvergenceWait, DEFAULT_BACKOFF
from .events import EventRecorder, EventReasons, AuditLogRecorder, NullRecorder, emit
from .resolver import FloatingIPResolver
from .provisioner import FloatingIPProvisioner
from .binder import FloatingIPBinder
from .floating_ip_service import FloatingIPService, get_floating_ip_service

__all__ = [
    # Errors
    "FloatingIPError",
    "TransportError",
    "FloatingIPPermissionError",
    "ConvergenceTimeout",
    "ConvergenceCancelled",
    # Backoff
    "BackoffPolicy",
    "ConvergenceState",
    "ConvergenceWait",
    "DEFAULT_BACKOFF",
    # Events
    "EventRecorder",
    "EventReasons",
    "AuditLogRecorder",
    "NullRecorder",
    "emit",
    # Lifecycle
    "FloatingIPResolver",
    "FloatingIPProvisioner",
    "FloatingIPBinder",
    "FloatingIPService",
    "get_floating_ip_service",
]
