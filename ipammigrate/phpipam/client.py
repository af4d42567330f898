"""phpIPAM inventory client."""

from __future__ import annotations

from ipammigrate.base import BaseInventoryClient
from ipammigrate.phpipam.controllers import AddressController, SubnetController, VLANController
from ipammigrate.phpipam.models import VLAN, Address, Subnet
from ipammigrate.phpipam.transport import PHPIPAMTransport


class PHPIPAMClient(BaseInventoryClient):
    """phpIPAM 1.2+ client backed by the REST API.

    The client owns the transport: ``connect()`` logs in, ``disconnect()``
    closes the HTTP session. Use it as a context manager.
    """

    def __init__(
        self,
        endpoint: str,
        app_id: str,
        username: str,
        password: str,
        verify_ssl: bool = True,
    ) -> None:
        self._transport = PHPIPAMTransport(
            endpoint=endpoint,
            app_id=app_id,
            username=username,
            password=password,
            verify_ssl=verify_ssl,
        )
        self._vlans = VLANController(self._transport)
        self._subnets = SubnetController(self._transport)
        self._addresses = AddressController(self._transport)

    def connect(self) -> None:
        self._transport.connect()

    def disconnect(self) -> None:
        self._transport.disconnect()

    def create_vlan(self, vlan: VLAN) -> int:
        return self._vlans.create_vlan(vlan)

    def create_subnet(self, subnet: Subnet) -> int:
        return self._subnets.create_subnet(subnet)

    def create_address(self, address: Address) -> int:
        return self._addresses.create_address(address)

    def get_subnets_by_cidr(self, cidr: str) -> list[Subnet]:
        return self._subnets.get_subnets_by_cidr(cidr)

    def get_vlans_by_number(self, number: int) -> list[VLAN]:
        return self._vlans.get_vlans_by_number(number)
