"""Translate legacy references (VLAN numbers, subnet CIDRs) into target IDs."""

from __future__ import annotations

from loguru import logger

from ipammigrate.base import BaseInventoryClient
from ipammigrate.exceptions import NotFoundError, SubnetNotFoundError, VLANNotFoundError


def vlan_id_for_number(client: BaseInventoryClient, number: int) -> int:
    """Fetch the VLAN ID for a specific VLAN number.

    Raises:
        VLANNotFoundError: If no VLAN with that number exists.
    """
    try:
        vlans = client.get_vlans_by_number(number)
    except NotFoundError as e:
        raise VLANNotFoundError(number) from e
    if not vlans or vlans[0].id is None:
        raise VLANNotFoundError(number)

    logger.debug(f"Found VLAN ID {vlans[0].id} for VLAN number {number} in phpIPAM")
    return vlans[0].id


def subnet_id_for_cidr(client: BaseInventoryClient, cidr: str) -> int:
    """Fetch a subnet ID via its CIDR subnet address.

    Raises:
        SubnetNotFoundError: If no subnet with that exact CIDR exists.
    """
    try:
        subnets = client.get_subnets_by_cidr(cidr)
    except NotFoundError as e:
        raise SubnetNotFoundError(cidr) from e
    if not subnets or subnets[0].id is None:
        raise SubnetNotFoundError(cidr)

    logger.debug(f"Found subnet ID {subnets[0].id} for CIDR {cidr} in phpIPAM")
    return subnets[0].id
