"""In-memory containment forest for a batch of subnets."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ipammigrate.codec import network_cidr
from ipammigrate.legacy.models import LegacySubnet


@dataclass(eq=False)
class ForestNode:
    """A subnet and its narrowest containing subnet within the same batch."""

    subnet: LegacySubnet
    network: ipaddress.IPv4Network
    parent: ForestNode | None = None
    children: list[ForestNode] = field(default_factory=list)

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def contains(self, other: ForestNode) -> bool:
        """True if ``other`` lies inside this block and is strictly narrower."""
        return self.network.prefixlen < other.network.prefixlen and other.network.subnet_of(self.network)


class ContainmentForest:
    """Subnet containment hierarchy computed without touching the target.

    Blocks are assumed not to overlap except by containment. Each subnet is
    attached to the narrowest block of the batch that contains it; subnets
    with no container in the batch are roots. Identical blocks are siblings.
    """

    def __init__(self, roots: list[ForestNode], nodes: list[ForestNode]) -> None:
        self.roots = roots
        self._nodes = nodes

    @classmethod
    def build(cls, subnets: Iterable[LegacySubnet]) -> ContainmentForest:
        """Build the forest from a flat batch.

        Raises:
            InvalidCIDRError: If a subnet does not form a valid CIDR block.
        """
        nodes = [ForestNode(s, ipaddress.IPv4Network(network_cidr(s.address, s.mask))) for s in subnets]
        # Address first, then mask: every container sorts before its contents.
        ordered = sorted(nodes, key=lambda n: (int(n.network.network_address), n.network.prefixlen))

        roots: list[ForestNode] = []
        stack: list[ForestNode] = []
        for node in ordered:
            while stack and not stack[-1].contains(node):
                stack.pop()
            if stack:
                node.parent = stack[-1]
                stack[-1].children.append(node)
            else:
                roots.append(node)
            stack.append(node)

        return cls(roots, ordered)

    def walk(self) -> Iterator[ForestNode]:
        """Yield nodes in pre-order: every parent before its children."""
        pending = list(reversed(self.roots))
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def __len__(self) -> int:
        return len(self._nodes)
