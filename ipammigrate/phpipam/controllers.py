"""phpIPAM API controllers for VLANs, subnets and addresses."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ipammigrate.exceptions import APIError
from ipammigrate.phpipam.models import VLAN, Address, Subnet
from ipammigrate.phpipam.transport import PHPIPAMTransport


def _created_id(body: dict[str, Any], what: str) -> int:
    try:
        return int(body["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise APIError(f"Create {what} response carried no ID: {body.get('message', '')}") from e


def _as_list(data: Any) -> list[dict[str, Any]]:
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return list(data)


_M = TypeVar("_M", bound=BaseModel)


def _decode_list(model: type[_M], data: Any, path: str) -> list[_M]:
    try:
        return [model.model_validate(item) for item in _as_list(data)]
    except ValidationError as e:
        raise APIError(f"Unexpected {model.__name__} record from {path}: {e}") from e


class VLANController:
    """VLAN operations via the ``vlans`` controller."""

    def __init__(self, transport: PHPIPAMTransport):
        self._transport = transport

    def create_vlan(self, vlan: VLAN) -> int:
        body = self._transport.post("vlans", vlan.payload())
        return _created_id(body, f"VLAN {vlan.number}")

    def get_vlans_by_number(self, number: int) -> list[VLAN]:
        """Search VLANs by number; raises ``NotFoundError`` if none exist."""
        path = f"vlans/search/{number}"
        return _decode_list(VLAN, self._transport.get(path), path)


class SubnetController:
    """Subnet operations via the ``subnets`` controller."""

    def __init__(self, transport: PHPIPAMTransport):
        self._transport = transport

    def create_subnet(self, subnet: Subnet) -> int:
        body = self._transport.post("subnets", subnet.payload())
        return _created_id(body, f"subnet {subnet.cidr}")

    def get_subnets_by_cidr(self, cidr: str) -> list[Subnet]:
        """GET subnets via their CIDR (i.e. 10.10.1.0/24).

        The API returns a list, but an exact CIDR never matches more than
        one subnet per section in practice. A broader CIDR does not return
        the subnets it contains.
        """
        path = f"subnets/cidr/{cidr}"
        return _decode_list(Subnet, self._transport.get(path), path)


class AddressController:
    """IP address operations via the ``addresses`` controller."""

    def __init__(self, transport: PHPIPAMTransport):
        self._transport = transport

    def create_address(self, address: Address) -> int:
        body = self._transport.post("addresses", address.payload())
        return _created_id(body, f"address {address.ip_address}")
