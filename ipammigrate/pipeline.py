"""Migration pipeline: VLANs, then subnets, then IP addresses."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from loguru import logger
from pydantic import BaseModel

from ipammigrate.base import BaseInventoryClient
from ipammigrate.codec import network_cidr
from ipammigrate.exceptions import MigrationError
from ipammigrate.hierarchy.forest import ContainmentForest, ForestNode
from ipammigrate.hierarchy.ordering import OrderingStrategy, order_subnets
from ipammigrate.hierarchy.resolver import MIN_PARENT_MASK, ParentResolver
from ipammigrate.legacy.models import LegacyAddress, LegacySubnet, LegacyVLAN
from ipammigrate.lookups import subnet_id_for_cidr, vlan_id_for_number
from ipammigrate.phpipam.models import VLAN, Address, Subnet


class LegacySource(Protocol):
    """Anything that yields the three legacy record batches."""

    def fetch_vlans(self) -> list[LegacyVLAN]: ...

    def fetch_subnets(self) -> list[LegacySubnet]: ...

    def fetch_addresses(self) -> list[LegacyAddress]: ...


class MigrationSummary(BaseModel):
    """Counts of records created by a run."""

    vlans: int = 0
    subnets: int = 0
    subnets_with_parent: int = 0
    addresses: int = 0


@dataclass
class PlannedSubnet:
    """One step of the subnet phase: the subnet and the parent it is expected to get."""

    subnet: LegacySubnet
    parent: LegacySubnet | None = None


def _ordered_with_nodes(
    subnets: Iterable[LegacySubnet], strategy: OrderingStrategy
) -> list[tuple[LegacySubnet, ForestNode | None]]:
    if strategy is OrderingStrategy.FOREST:
        return [(node.subnet, node) for node in ContainmentForest.build(subnets).walk()]
    return [(s, None) for s in order_subnets(subnets, strategy)]


def plan_subnets(
    subnets: Iterable[LegacySubnet],
    strategy: OrderingStrategy = OrderingStrategy.LEXICOGRAPHIC,
) -> list[PlannedSubnet]:
    """Compute the creation order and parents for a batch, assuming an empty target.

    Parents are found the same way the subnet phase finds them: FOREST uses
    the in-memory forest, the other strategies probe wider blocks among the
    subnets created earlier in the order. Nothing is written anywhere.
    """
    planned: list[PlannedSubnet] = []
    created: dict[str, LegacySubnet] = {}
    for subnet, node in _ordered_with_nodes(subnets, strategy):
        if node is not None:
            parent = node.parent.subnet if node.parent is not None else None
        else:
            parent = None
            for n in range(subnet.mask - 1, MIN_PARENT_MASK - 1, -1):
                parent = created.get(network_cidr(subnet.address, n))
                if parent is not None:
                    break
        created.setdefault(network_cidr(subnet.address, subnet.mask), subnet)
        planned.append(PlannedSubnet(subnet=subnet, parent=parent))
    return planned


class MigrationPipeline:
    """Migrate legacy records into the target inventory in three sequential phases.

    Each phase finishes before the next begins, and every write completes
    before the next lookup, because parent discovery reads back what earlier
    writes created. Any ``MigrationError`` propagates to the caller and
    stops the run; records already created are left in place.
    """

    def __init__(
        self,
        client: BaseInventoryClient,
        section_id: int = 1,
        strategy: OrderingStrategy = OrderingStrategy.LEXICOGRAPHIC,
    ) -> None:
        self._client = client
        self.section_id = section_id
        self.strategy = strategy
        self._resolver = ParentResolver(client)
        self.summary = MigrationSummary()

    def run(self, source: LegacySource) -> MigrationSummary:
        """Load and create VLANs, subnets and addresses, in that order."""
        logger.info("Migration starting.")
        self.migrate_vlans(source.fetch_vlans())
        self.migrate_subnets(source.fetch_subnets())
        self.migrate_addresses(source.fetch_addresses())
        logger.info(
            f"Migration completed: {self.summary.vlans} VLANs, {self.summary.subnets} subnets "
            f"({self.summary.subnets_with_parent} nested), {self.summary.addresses} addresses."
        )
        return self.summary

    def migrate_vlans(self, vlans: Iterable[LegacyVLAN]) -> list[int]:
        """Add the VLANs found into the new phpIPAM instance."""
        logger.info("Adding VLANs.")
        ids: list[int] = []
        for v in vlans:
            try:
                vlan_id = self._client.create_vlan(VLAN(name=v.name, number=v.number, description=v.description))
            except MigrationError as e:
                logger.error(f"Error adding VLAN number {v.number}: {e}")
                raise
            ids.append(vlan_id)
            self.summary.vlans += 1
            logger.info(f"VLAN number {v.number} added successfully")
        return ids

    def migrate_subnets(self, subnets: Iterable[LegacySubnet]) -> list[int]:
        """Add the subnets found into the new phpIPAM instance.

        Subnets are ordered first, and each one's parent is looked up just
        before it is created. Under the forest strategy a parent from the
        same batch is taken from the forest; roots are still probed so they
        can nest under blocks that already existed in the target.
        """
        ordered = _ordered_with_nodes(subnets, self.strategy)
        logger.info(f"Adding subnets ({self.strategy.value} order).")

        created: dict[ForestNode, int] = {}
        ids: list[int] = []
        for subnet, node in ordered:
            vlan_id = vlan_id_for_number(self._client, subnet.vlan_number) if subnet.vlan_number else None

            if node is not None and node.parent is not None:
                parent_id: int | None = created[node.parent]
            else:
                parent_id = self._resolver.resolve_parent(subnet.address, subnet.mask)

            record = Subnet(
                subnet_address=subnet.address,
                mask=subnet.mask,
                description=subnet.description,
                section_id=self.section_id,
                vlan_id=vlan_id,
                master_subnet_id=parent_id,
            )
            try:
                subnet_id = self._client.create_subnet(record)
            except MigrationError as e:
                logger.error(f"Error creating subnet {subnet.cidr}: {e}")
                raise

            if node is not None:
                created[node] = subnet_id
            ids.append(subnet_id)
            self.summary.subnets += 1
            if parent_id is not None:
                self.summary.subnets_with_parent += 1
                logger.info(f"Subnet address {subnet.cidr} added successfully (master subnet ID {parent_id})")
            else:
                logger.info(f"Subnet address {subnet.cidr} added successfully")
        return ids

    def migrate_addresses(self, addresses: Iterable[LegacyAddress]) -> list[int]:
        """Add the IP addresses found into the new phpIPAM instance."""
        logger.info("Adding IP addresses.")
        ids: list[int] = []
        for a in addresses:
            subnet_id = subnet_id_for_cidr(self._client, a.subnet_cidr)
            record = Address(
                ip_address=a.ip,
                subnet_id=subnet_id,
                description=a.description,
                hostname=a.hostname,
                note=a.note,
            )
            try:
                address_id = self._client.create_address(record)
            except MigrationError as e:
                logger.error(f"Error adding IP address {a.ip}: {e}")
                raise
            ids.append(address_id)
            self.summary.addresses += 1
            logger.info(f"IP address {a.ip} added successfully")
        return ids

    def plan(self, subnets: Iterable[LegacySubnet]) -> list[PlannedSubnet]:
        return plan_subnets(subnets, self.strategy)
