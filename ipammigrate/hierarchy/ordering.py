"""Creation order for subnets, so that parents are added before children."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from ipammigrate.codec import cidr, encode_address
from ipammigrate.legacy.models import LegacySubnet


class OrderingStrategy(str, Enum):
    """How subnets are ordered before creation.

    LEXICOGRAPHIC compares the ``address/mask`` text byte by byte. It matches
    the legacy migrator, but octets compare as text, so ``10.10.0.0/16`` sorts
    before ``10.9.0.0/16`` and a ``10.9.x`` child can precede its parent.
    NUMERIC sorts by address value, then mask, which always puts a containing
    block first. FOREST builds the containment forest in memory and attaches
    parents locally (see ``ContainmentForest``).
    """

    LEXICOGRAPHIC = "lexicographic"
    NUMERIC = "numeric"
    FOREST = "forest"


def lexicographic_key(subnet: LegacySubnet) -> str:
    return cidr(subnet.address, subnet.mask)


def numeric_key(subnet: LegacySubnet) -> tuple[int, int]:
    return encode_address(subnet.address), subnet.mask


def order_subnets(
    subnets: Iterable[LegacySubnet],
    strategy: OrderingStrategy = OrderingStrategy.LEXICOGRAPHIC,
) -> list[LegacySubnet]:
    """Return ``subnets`` sorted for creation. The sort is stable.

    FOREST uses the numeric order, which is also the forest's pre-order.
    """
    if strategy is OrderingStrategy.LEXICOGRAPHIC:
        return sorted(subnets, key=lexicographic_key)
    return sorted(subnets, key=numeric_key)
