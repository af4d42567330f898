"""Tests for the phpIPAM controllers and client."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from ipammigrate.base import BaseInventoryClient
from ipammigrate.exceptions import APIError, NotFoundError
from ipammigrate.hierarchy.resolver import ParentResolver
from ipammigrate.phpipam.client import PHPIPAMClient
from ipammigrate.phpipam.controllers import AddressController, SubnetController, VLANController
from ipammigrate.phpipam.models import VLAN, Address, Subnet


class TestVLANController:
    def test_create_vlan(self, mock_transport):
        mock_transport.post.return_value = {"code": 201, "success": True, "message": "Vlan created", "id": "12"}

        vlan_id = VLANController(mock_transport).create_vlan(VLAN(name="servers", number=10, description="srv"))

        assert vlan_id == 12
        mock_transport.post.assert_called_once_with("vlans", {"name": "servers", "number": 10, "description": "srv"})

    def test_create_without_id(self, mock_transport):
        mock_transport.post.return_value = {"code": 201, "success": True, "message": "Vlan created"}

        with pytest.raises(APIError, match="no ID"):
            VLANController(mock_transport).create_vlan(VLAN(number=10))

    def test_get_vlans_by_number(self, mock_transport):
        mock_transport.get.return_value = [{"vlanId": "4", "id": "4", "name": "servers", "number": "10"}]

        vlans = VLANController(mock_transport).get_vlans_by_number(10)

        mock_transport.get.assert_called_once_with("vlans/search/10")
        assert vlans == [VLAN(id=4, name="servers", number=10)]

    def test_not_found_propagates(self, mock_transport):
        mock_transport.get.side_effect = NotFoundError("Error from API (404): Vlans not found")

        with pytest.raises(NotFoundError):
            VLANController(mock_transport).get_vlans_by_number(10)

    def test_null_description_in_response(self, mock_transport):
        mock_transport.get.return_value = [{"id": "4", "name": "servers", "number": "10", "description": None}]

        assert VLANController(mock_transport).get_vlans_by_number(10) == [VLAN(id=4, name="servers", number=10)]


class TestSubnetController:
    def test_create_subnet(self, mock_transport):
        mock_transport.post.return_value = {"code": 201, "success": True, "id": "5"}
        subnet = Subnet(subnet_address="10.10.0.0", mask=16, section_id=1, master_subnet_id=2)

        assert SubnetController(mock_transport).create_subnet(subnet) == 5
        mock_transport.post.assert_called_once_with(
            "subnets",
            {"subnet": "10.10.0.0", "mask": 16, "description": "", "sectionId": 1, "masterSubnetId": 2},
        )

    def test_get_subnets_by_cidr(self, mock_transport):
        mock_transport.get.return_value = [
            {
                "id": "2",
                "subnet": "10.10.0.0",
                "mask": "16",
                "sectionId": "1",
                "masterSubnetId": "0",
                "vlanId": None,
                "description": "Business customers",
                "editDate": None,
            }
        ]

        subnets = SubnetController(mock_transport).get_subnets_by_cidr("10.10.0.0/16")

        mock_transport.get.assert_called_once_with("subnets/cidr/10.10.0.0/16")
        assert len(subnets) == 1
        assert subnets[0].id == 2
        assert subnets[0].mask == 16
        assert subnets[0].master_subnet_id is None
        assert subnets[0].cidr == "10.10.0.0/16"

    def test_single_object_response(self, mock_transport):
        mock_transport.get.return_value = {"id": "3", "subnet": "10.0.0.0", "mask": "8"}

        subnets = SubnetController(mock_transport).get_subnets_by_cidr("10.0.0.0/8")

        assert [s.id for s in subnets] == [3]

    def test_null_description_in_response(self, mock_transport):
        mock_transport.get.return_value = [
            {"id": "2", "subnet": "10.10.0.0", "mask": "16", "sectionId": "1", "description": None, "masterSubnetId": "0"}
        ]

        subnets = SubnetController(mock_transport).get_subnets_by_cidr("10.10.0.0/16")

        assert subnets[0].id == 2
        assert subnets[0].description == ""

    def test_malformed_record_is_api_error(self, mock_transport):
        mock_transport.get.return_value = [{"id": "2", "subnet": "10.10.0.0", "mask": "wide"}]

        with pytest.raises(APIError, match="Unexpected Subnet record from subnets/cidr/10.10.0.0/16"):
            SubnetController(mock_transport).get_subnets_by_cidr("10.10.0.0/16")


class TestAddressController:
    def test_create_address(self, mock_transport):
        mock_transport.post.return_value = {"code": 201, "success": True, "id": "77"}
        address = Address(ip_address="10.10.1.5", subnet_id=5, hostname="web01", note="n")

        assert AddressController(mock_transport).create_address(address) == 77
        mock_transport.post.assert_called_once_with(
            "addresses",
            {"ip": "10.10.1.5", "subnetId": 5, "description": "", "hostname": "web01", "note": "n"},
        )


class TestPHPIPAMClient:
    def test_is_inventory_client(self):
        client = PHPIPAMClient("https://x/api", "app", "u", "p")
        assert isinstance(client, BaseInventoryClient)

    def test_context_manager_owns_transport(self):
        with patch("ipammigrate.phpipam.client.PHPIPAMTransport") as transport_class:
            transport = transport_class.return_value
            with PHPIPAMClient("https://x/api", "app", "u", "p", verify_ssl=False):
                transport.connect.assert_called_once()
            transport.disconnect.assert_called_once()

        transport_class.assert_called_once_with(
            endpoint="https://x/api", app_id="app", username="u", password="p", verify_ssl=False
        )

    def test_delegates_to_controllers(self):
        with patch("ipammigrate.phpipam.client.PHPIPAMTransport") as transport_class:
            transport = transport_class.return_value
            transport.get.return_value = [{"id": "2", "subnet": "10.10.0.0", "mask": "16"}]
            client = PHPIPAMClient("https://x/api", "app", "u", "p")

            subnets = client.get_subnets_by_cidr("10.10.0.0/16")

        transport.get.assert_called_once_with("subnets/cidr/10.10.0.0/16")
        assert subnets[0].id == 2

    def test_parent_without_description_is_found(self):
        with patch("ipammigrate.phpipam.client.PHPIPAMTransport") as transport_class:
            transport = transport_class.return_value
            transport.get.return_value = [
                {
                    "id": "2",
                    "subnet": "10.10.0.0",
                    "mask": "16",
                    "sectionId": "1",
                    "description": None,
                    "masterSubnetId": "0",
                }
            ]
            client = PHPIPAMClient("https://x/api", "app", "u", "p")

            assert ParentResolver(client).resolve_parent("10.10.2.0", 24) == 2
