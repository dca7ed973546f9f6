"""Tests for audit event recording."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fip_control_plane.core.events import AuditLogRecorder, EventReasons, NullRecorder, emit
from fip_control_plane.database.models import AuditLog, Base

from conftest import BrokenRecorder


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


class TestAuditLogRecorder:
    """Tests for AuditLogRecorder."""

    def test_records_row(self, session_factory) -> None:
        recorder = AuditLogRecorder(session_factory, enabled=True)

        recorder.record(
            "cluster-a",
            EventReasons.CREATED,
            "Created floating IP 203.0.113.5 with id fip-1",
            target_id="fip-1",
        )

        db = session_factory()
        try:
            row = db.query(AuditLog).one()
        finally:
            db.close()
        assert row.event_type == "SuccessfulCreateFloatingIP"
        assert row.event_action == "create"
        assert row.subject == "cluster-a"
        assert row.target_type == "floating_ip"
        assert row.target_id == "fip-1"
        assert row.status == "success"

    def test_failed_reason_is_marked_failure(self, session_factory) -> None:
        recorder = AuditLogRecorder(session_factory, enabled=True)

        recorder.record("cluster-a", EventReasons.CREATE_FAILED, "error creating floating IP: quota")

        db = session_factory()
        try:
            assert db.query(AuditLog).one().status == "failure"
        finally:
            db.close()

    def test_disabled_recorder_writes_nothing(self, session_factory) -> None:
        recorder = AuditLogRecorder(session_factory, enabled=False)

        recorder.record("cluster-a", EventReasons.DELETED, "Deleted floating IP")

        db = session_factory()
        try:
            assert db.query(AuditLog).count() == 0
        finally:
            db.close()


class TestEmit:
    """Tests for best-effort emission."""

    def test_sink_failure_is_swallowed(self, caplog) -> None:
        broken = BrokenRecorder()

        emit(broken, "cluster-a", EventReasons.CREATED, "Created floating IP")

        assert broken.attempts == 1
        assert "Failed to record event SuccessfulCreateFloatingIP" in caplog.text

    def test_null_recorder(self) -> None:
        emit(NullRecorder(), "cluster-a", EventReasons.CREATED, "Created floating IP")
