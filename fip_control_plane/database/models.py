# fip_control_plane/database/models.py
"""
SQLAlchemy Database Models for the Floating IP Control Plane
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Index
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class AuditLog(Base):
    """
    Audit Log table - records floating IP lifecycle events
    One row per (subject, reason, message) emitted by the core
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Event information
    event_type = Column(String(50), nullable=False, index=True,
                        comment="Reason code: SuccessfulCreateFloatingIP, FailedCreateFloatingIP, etc.")
    event_action = Column(String(20), nullable=False,
                          comment="Action: create, update, delete")

    # Actor
    actor_type = Column(String(20), nullable=False, default="system",
                        comment="Who performed: system, admin")

    # Subject / target
    subject = Column(String(100), nullable=True, index=True,
                     comment="Object the event is about, e.g. the owning cluster")
    target_type = Column(String(50), nullable=True,
                         comment="Target resource type")
    target_id = Column(String(100), nullable=True,
                       comment="Target resource identifier")

    # Details
    message = Column(Text, nullable=True,
                     comment="Human readable message")
    status = Column(String(20), default="success", nullable=False,
                    comment="Outcome: success, failure")

    # Timestamp
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        Index('ix_audit_event_created', 'event_type', 'created_at'),
        Index('ix_audit_subject_created', 'subject', 'created_at'),
    )

    def __repr__(self):
        return f"<AuditLog(id={self.id}, type={self.event_type}, target={self.target_id})>"
