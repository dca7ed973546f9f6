"""Tests for the openstacksdk-backed floating IP client."""

from types import SimpleNamespace
from unittest import mock

import pytest
from openstack.exceptions import HttpException, SDKException

from fip_control_plane.cloud.openstack_client import OpenStackFloatingIPClient
from fip_control_plane.core.errors import TransportError
from fip_control_plane.schemas.floating_ip import FloatingIPCreate


def make_resource(**overrides):
    attrs = {
        "id": "fip-1",
        "floating_ip_address": "203.0.113.5",
        "floating_network_id": "ext-net",
        "port_id": None,
        "status": "DOWN",
        "fixed_ip_address": None,
        "router_id": None,
        "project_id": "project-1",
        "description": "",
    }
    attrs.update(overrides)
    return SimpleNamespace(**attrs)


@pytest.fixture
def conn():
    return mock.MagicMock()


@pytest.fixture
def os_client(conn):
    return OpenStackFloatingIPClient(conn=conn)


class TestOpenStackFloatingIPClient:
    """Tests for OpenStackFloatingIPClient."""

    def test_list_filters_by_address(self, os_client, conn) -> None:
        conn.network.ips.return_value = iter([make_resource()])

        result = os_client.list("203.0.113.5")

        conn.network.ips.assert_called_once_with(floating_ip_address="203.0.113.5")
        assert [fp.id for fp in result] == ["fip-1"]

    def test_create_unpinned_omits_address(self, os_client, conn) -> None:
        conn.network.create_ip.return_value = make_resource()

        os_client.create(FloatingIPCreate(floating_network_id="ext-net"))

        conn.network.create_ip.assert_called_once_with(floating_network_id="ext-net")

    def test_create_pinned_sends_address(self, os_client, conn) -> None:
        conn.network.create_ip.return_value = make_resource()

        os_client.create(FloatingIPCreate(floating_network_id="ext-net", floating_ip_address="203.0.113.5"))

        conn.network.create_ip.assert_called_once_with(
            floating_network_id="ext-net", floating_ip_address="203.0.113.5"
        )

    def test_update_sets_port(self, os_client, conn) -> None:
        conn.network.update_ip.return_value = make_resource(port_id="port-1")

        fp = os_client.update("fip-1", "port-1")

        conn.network.update_ip.assert_called_once_with("fip-1", port_id="port-1")
        assert fp.port_id == "port-1"

    def test_get_maps_status(self, os_client, conn) -> None:
        conn.network.get_ip.return_value = make_resource(status="ACTIVE")

        assert os_client.get("fip-1").is_active

    def test_delete_does_not_ignore_missing(self, os_client, conn) -> None:
        os_client.delete("fip-1")

        conn.network.delete_ip.assert_called_once_with("fip-1", ignore_missing=False)

    def test_http_error_keeps_status_code(self, os_client, conn) -> None:
        conn.network.create_ip.side_effect = HttpException(message="Forbidden", http_status=403)

        with pytest.raises(TransportError) as exc_info:
            os_client.create(FloatingIPCreate(floating_network_id="ext-net", floating_ip_address="203.0.113.5"))

        assert exc_info.value.status_code == 403
        assert isinstance(exc_info.value.__cause__, HttpException)

    def test_sdk_error_has_no_status_code(self, os_client, conn) -> None:
        conn.network.get_ip.side_effect = SDKException("endpoint not found")

        with pytest.raises(TransportError) as exc_info:
            os_client.get("fip-1")

        assert exc_info.value.status_code is None

    def test_connection_is_created_lazily(self) -> None:
        with mock.patch("fip_control_plane.cloud.openstack_client.openstack.connect") as connect:
            os_client = OpenStackFloatingIPClient(cloud="mycloud")
            connect.assert_not_called()

            assert os_client.conn is connect.return_value
            connect.assert_called_once_with(cloud="mycloud")

            os_client.close()
            connect.return_value.close.assert_called_once_with()
