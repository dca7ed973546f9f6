# fip_control_plane/core/events.py
"""
Audit event recording

The lifecycle core only knows the EventRecorder protocol. Recording is
fire-and-forget: callers go through emit(), which never raises.
"""

import logging
from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from ..database.models import AuditLog
from ..config import settings

logger = logging.getLogger(__name__)


class EventReasons:
    """Reason codes recorded for floating IP events"""
    CREATED = "SuccessfulCreateFloatingIP"
    CREATE_FAILED = "FailedCreateFloatingIP"
    DELETED = "SuccessfulDeleteFloatingIP"


_ACTIONS = {
    EventReasons.CREATED: "create",
    EventReasons.CREATE_FAILED: "create",
    EventReasons.DELETED: "delete",
}


class EventRecorder(Protocol):
    def record(self, subject: str, reason: str, message: str, target_id: Optional[str] = None) -> None:
        ...


class NullRecorder:
    """Recorder that drops every event"""

    def record(self, subject: str, reason: str, message: str, target_id: Optional[str] = None) -> None:
        pass


class AuditLogRecorder:
    """
    Persists events into the audit_logs table

    Opens a short-lived session per event so recording never shares a
    transaction with the caller.
    """

    def __init__(self, session_factory: Callable[[], Session], enabled: Optional[bool] = None):
        self.session_factory = session_factory
        self.enabled = settings.ENABLE_AUDIT_LOG if enabled is None else enabled

    def record(self, subject: str, reason: str, message: str, target_id: Optional[str] = None) -> None:
        if not self.enabled:
            return

        db = self.session_factory()
        try:
            db.add(AuditLog(
                event_type=reason,
                event_action=_ACTIONS.get(reason, "update"),
                actor_type="system",
                subject=subject,
                target_type="floating_ip",
                target_id=target_id,
                message=message,
                status="failure" if reason.startswith("Failed") else "success",
            ))
            db.commit()
        finally:
            db.close()


def emit(
    recorder: EventRecorder,
    subject: str,
    reason: str,
    message: str,
    target_id: Optional[str] = None
) -> None:
    """Record an event, logging instead of raising if the sink fails"""
    try:
        recorder.record(subject, reason, message, target_id=target_id)
    except Exception as e:
        logger.error(f"Failed to record event {reason} for {subject}: {e}")
