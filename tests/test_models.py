"""Tests for legacy and phpIPAM data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ipammigrate.legacy.models import LegacyAddress, LegacySubnet, LegacyVLAN
from ipammigrate.phpipam.models import VLAN, Address, Subnet


class TestLegacyModels:
    def test_subnet_cidr(self):
        assert LegacySubnet(address="10.10.1.0", mask=24).cidr == "10.10.1.0/24"

    def test_subnet_defaults(self):
        subnet = LegacySubnet(address="10.0.0.0", mask=8)
        assert subnet.description == ""
        assert subnet.vlan_number is None

    @pytest.mark.parametrize("mask", [-1, 33, 128])
    def test_mask_range(self, mask):
        with pytest.raises(ValidationError):
            LegacySubnet(address="10.0.0.0", mask=mask)

    def test_address_subnet_cidr(self):
        address = LegacyAddress(ip="10.10.1.5", subnet_address="10.10.1.0", subnet_mask="24")
        assert address.subnet_cidr == "10.10.1.0/24"

    def test_vlan_number_coerced(self):
        assert LegacyVLAN(name="x", number="10").number == 10


class TestPHPIPAMModels:
    def test_subnet_aliases(self):
        subnet = Subnet.model_validate({"id": "2", "subnet": "10.10.0.0", "mask": "16", "sectionId": "1"})
        assert subnet.id == 2
        assert subnet.subnet_address == "10.10.0.0"
        assert subnet.section_id == 1

    @pytest.mark.parametrize("raw", [None, "", "0", 0])
    def test_unset_references(self, raw):
        subnet = Subnet.model_validate({"subnet": "10.0.0.0", "mask": "8", "vlanId": raw, "masterSubnetId": raw})
        assert subnet.vlan_id is None
        assert subnet.master_subnet_id is None

    def test_subnet_payload_skips_unset(self):
        payload = Subnet(id=4, subnet_address="10.0.0.0", mask=8, section_id=1).payload()
        assert payload == {"subnet": "10.0.0.0", "mask": 8, "description": "", "sectionId": 1}

    def test_subnet_payload_with_references(self):
        payload = Subnet(subnet_address="10.10.0.0", mask=16, section_id=1, vlan_id=3, master_subnet_id=2).payload()
        assert payload["vlanId"] == 3
        assert payload["masterSubnetId"] == 2

    def test_address_payload(self):
        payload = Address(ip_address="10.0.0.1", subnet_id=2).payload()
        assert payload == {"ip": "10.0.0.1", "subnetId": 2, "description": "", "hostname": "", "note": ""}

    def test_vlan_payload(self):
        assert VLAN(id=1, name="a", number=5).payload() == {"name": "a", "number": 5, "description": ""}

    def test_extra_fields_ignored(self):
        vlan = VLAN.model_validate({"vlanId": "4", "number": "10", "domainId": "1", "editDate": None})
        assert vlan.number == 10

    def test_null_text_fields_read_as_empty(self):
        subnet = Subnet.model_validate({"id": "2", "subnet": "10.10.0.0", "mask": "16", "description": None})
        vlan = VLAN.model_validate({"number": "10", "name": None, "description": None})
        address = Address.model_validate(
            {"ip": "10.0.0.1", "subnetId": "2", "description": None, "hostname": None, "note": None}
        )

        assert subnet.description == ""
        assert (vlan.name, vlan.description) == ("", "")
        assert (address.description, address.hostname, address.note) == ("", "", "")
