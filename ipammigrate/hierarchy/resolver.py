"""Parent (master) subnet discovery against the target inventory."""

from __future__ import annotations

from loguru import logger

from ipammigrate.base import BaseInventoryClient
from ipammigrate.codec import network_cidr
from ipammigrate.exceptions import NotFoundError

# The widest block probed for a parent; /8 is the largest block allocation
# made by the IANA.
MIN_PARENT_MASK = 8


class ParentResolver:
    """Find the narrowest subnet already registered in the target that contains a block.

    Only the target's current state is consulted, so a parent is found only if
    it was created before the child.
    """

    def __init__(self, client: BaseInventoryClient) -> None:
        self._client = client

    def resolve_parent(self, address: str, mask: int) -> int | None:
        """Return the parent subnet ID for ``address/mask``, or None if none exists.

        The probe starts one bit wider than ``mask`` so the subnet never matches
        itself, then widens one bit at a time down to ``MIN_PARENT_MASK``.
        The first hit is therefore the narrowest ancestor.

        Raises:
            InvalidCIDRError: If ``address`` cannot form a CIDR block.
            APIError: On any lookup failure other than "not found".
        """
        logger.debug(f"Looking for parent subnet for CIDR {address}/{mask}")

        for n in range(mask - 1, MIN_PARENT_MASK - 1, -1):
            block = network_cidr(address, n)
            logger.debug(f"Looking for subnet CIDR {block} in phpIPAM")
            try:
                found = self._client.get_subnets_by_cidr(block)
            except NotFoundError:
                logger.debug(f"Subnet {block} not found in phpIPAM")
                continue
            if not found:
                continue
            parent_id = found[0].id
            logger.debug(f"Parent found: subnet ID {parent_id} for CIDR {block}")
            return parent_id

        return None
