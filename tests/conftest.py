"""pytest configuration and shared fakes for floating IP tests."""

import os

# Must be set before fip_control_plane.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ADMIN_SECRET", "test-admin-secret")
os.environ.setdefault("EXTERNAL_NETWORK_ID", "ext-net")

import itertools
from typing import Dict, List, Optional

import pytest

from fip_control_plane.core.backoff import BackoffPolicy
from fip_control_plane.core.errors import TransportError
from fip_control_plane.schemas.floating_ip import FloatingIP, FloatingIPCreate


class FakeFloatingIPClient:
    """
    In-memory networking service

    get_statuses scripts the status returned by successive get() calls;
    the last entry repeats. fail_get_on makes the n-th get() raise.
    """

    def __init__(self):
        self.floating_ips: Dict[str, FloatingIP] = {}
        self.calls: Dict[str, int] = {"list": 0, "create": 0, "update": 0, "get": 0, "delete": 0}
        self.create_requests: List[FloatingIPCreate] = []
        self.deleted: List[str] = []
        self.get_statuses: List[str] = ["ACTIVE"]
        self.fail_get_on: Optional[int] = None
        self.fail_create: Optional[TransportError] = None
        self.fail_update: Optional[TransportError] = None
        self.fail_list: Optional[TransportError] = None
        self.fail_delete: Optional[TransportError] = None
        self._ids = itertools.count(1)
        self._addresses = itertools.count(10)

    def add(self, address: str, **kwargs) -> FloatingIP:
        fp = FloatingIP(
            id=kwargs.pop("id", f"fip-{next(self._ids)}"),
            floating_ip_address=address,
            floating_network_id=kwargs.pop("floating_network_id", "ext-net"),
            **kwargs
        )
        self.floating_ips[fp.id] = fp
        return fp

    def list(self, floating_ip_address: str) -> List[FloatingIP]:
        self.calls["list"] += 1
        if self.fail_list:
            raise self.fail_list
        return [fp for fp in self.floating_ips.values() if fp.floating_ip_address == floating_ip_address]

    def create(self, request: FloatingIPCreate) -> FloatingIP:
        self.calls["create"] += 1
        self.create_requests.append(request)
        if self.fail_create:
            raise self.fail_create
        address = request.floating_ip_address or f"203.0.113.{next(self._addresses)}"
        return self.add(address, floating_network_id=request.floating_network_id)

    def update(self, floating_ip_id: str, port_id: Optional[str]) -> FloatingIP:
        self.calls["update"] += 1
        if self.fail_update:
            raise self.fail_update
        fp = self._lookup(floating_ip_id).model_copy(update={"port_id": port_id})
        self.floating_ips[fp.id] = fp
        return fp

    def get(self, floating_ip_id: str) -> FloatingIP:
        self.calls["get"] += 1
        n = self.calls["get"]
        if self.fail_get_on is not None and n == self.fail_get_on:
            raise TransportError("connection reset by peer")
        status = self.get_statuses[min(n, len(self.get_statuses)) - 1]
        fp = self._lookup(floating_ip_id).model_copy(update={"status": status})
        self.floating_ips[fp.id] = fp
        return fp

    def delete(self, floating_ip_id: str) -> None:
        self.calls["delete"] += 1
        if self.fail_delete:
            raise self.fail_delete
        self._lookup(floating_ip_id)
        del self.floating_ips[floating_ip_id]
        self.deleted.append(floating_ip_id)

    def _lookup(self, floating_ip_id: str) -> FloatingIP:
        if floating_ip_id not in self.floating_ips:
            raise TransportError(f"Floating IP {floating_ip_id} could not be found", status_code=404)
        return self.floating_ips[floating_ip_id]


class RecordingRecorder:
    """Event sink that keeps every event in memory"""

    def __init__(self):
        self.events = []

    def record(self, subject, reason, message, target_id=None):
        self.events.append((subject, reason, message, target_id))


class BrokenRecorder:
    """Event sink that always fails"""

    def __init__(self):
        self.attempts = 0

    def record(self, subject, reason, message, target_id=None):
        self.attempts += 1
        raise RuntimeError("audit sink unavailable")


@pytest.fixture
def client():
    return FakeFloatingIPClient()


@pytest.fixture
def recorder():
    return RecordingRecorder()


@pytest.fixture
def fast_policy():
    """Default schedule shape without the 30 second waits"""
    return BackoffPolicy(steps=10, duration=0.0, factor=1.0, jitter=0.0)
