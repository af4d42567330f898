"""Shared fixtures for the ipammigrate test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ipammigrate.base import BaseInventoryClient
from ipammigrate.exceptions import APIError, NotFoundError
from ipammigrate.legacy.models import LegacyAddress, LegacySubnet, LegacyVLAN
from ipammigrate.phpipam.models import VLAN, Address, Subnet

# ── in-memory target inventory ────────────────────────────────────────


class FakeInventory(BaseInventoryClient):
    """In-memory phpIPAM stand-in with exact-CIDR and VLAN-number lookups.

    Every call is appended to ``calls`` as ``(method, argument)``.
    """

    def __init__(self) -> None:
        self.vlans: dict[int, VLAN] = {}
        self.subnets: dict[str, Subnet] = {}
        self.addresses: list[Address] = []
        self.calls: list[tuple[str, object]] = []
        self._next_id = 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def add_existing_subnet(self, cidr: str) -> int:
        """Register a subnet as if it already existed in the target."""
        address, mask = cidr.split("/")
        subnet = Subnet(id=self._new_id(), subnet_address=address, mask=int(mask), section_id=1)
        self.subnets[cidr] = subnet
        return subnet.id

    def create_vlan(self, vlan: VLAN) -> int:
        self.calls.append(("create_vlan", vlan.number))
        if vlan.number in self.vlans:
            raise APIError("Error from API (409): VLAN number already exists", 409)
        stored = vlan.model_copy(update={"id": self._new_id()})
        self.vlans[vlan.number] = stored
        return stored.id

    def create_subnet(self, subnet: Subnet) -> int:
        self.calls.append(("create_subnet", subnet.cidr))
        stored = subnet.model_copy(update={"id": self._new_id()})
        self.subnets.setdefault(subnet.cidr, stored)
        return stored.id

    def create_address(self, address: Address) -> int:
        self.calls.append(("create_address", address.ip_address))
        stored = address.model_copy(update={"id": self._new_id()})
        self.addresses.append(stored)
        return stored.id

    def get_subnets_by_cidr(self, cidr: str) -> list[Subnet]:
        self.calls.append(("get_subnets_by_cidr", cidr))
        if cidr not in self.subnets:
            raise NotFoundError("Error from API (404): No subnets found")
        return [self.subnets[cidr]]

    def get_vlans_by_number(self, number: int) -> list[VLAN]:
        self.calls.append(("get_vlans_by_number", number))
        if number not in self.vlans:
            raise NotFoundError("Error from API (404): Vlans not found")
        return [self.vlans[number]]

    def calls_to(self, method: str) -> list[object]:
        return [arg for name, arg in self.calls if name == method]


@pytest.fixture()
def inventory():
    """Empty in-memory target inventory."""
    return FakeInventory()


@pytest.fixture()
def mock_transport():
    """MagicMock of PHPIPAMTransport with get/post."""
    transport = MagicMock()
    transport.get.return_value = []
    transport.post.return_value = {"code": 201, "success": True, "id": "1"}
    return transport


# ── legacy record factories ───────────────────────────────────────────


@pytest.fixture()
def make_subnet():
    """Factory fixture: make_subnet("10.0.0.0/8", vlan_number=10)."""

    def _make(cidr: str, **kwargs) -> LegacySubnet:
        address, mask = cidr.split("/")
        return LegacySubnet(address=address, mask=int(mask), **kwargs)

    return _make


@pytest.fixture()
def make_address():
    """Factory fixture: make_address("10.10.1.5", "10.10.1.0/24")."""

    def _make(ip: str, subnet_cidr: str, **kwargs) -> LegacyAddress:
        address, mask = subnet_cidr.split("/")
        return LegacyAddress(ip=ip, subnet_address=address, subnet_mask=int(mask), **kwargs)

    return _make


@pytest.fixture()
def sample_vlans():
    return [
        LegacyVLAN(name="servers", number=10, description="Server VLAN"),
        LegacyVLAN(name="clients", number=20, description=""),
    ]
