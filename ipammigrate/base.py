"""Abstract base class for the target inventory system."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from ipammigrate.phpipam.models import VLAN, Address, Subnet


class BaseInventoryClient(ABC):
    """Operations the migration needs from the target inventory.

    Lookups raise ``NotFoundError`` when nothing matches; any other failure
    raises a different ``MigrationError`` subclass.
    """

    @abstractmethod
    def create_vlan(self, vlan: VLAN) -> int:
        """Create a VLAN and return its new ID."""

    @abstractmethod
    def create_subnet(self, subnet: Subnet) -> int:
        """Create a subnet and return its new ID."""

    @abstractmethod
    def create_address(self, address: Address) -> int:
        """Create an IP address and return its new ID."""

    @abstractmethod
    def get_subnets_by_cidr(self, cidr: str) -> list[Subnet]:
        """Look up subnets by exact CIDR (i.e. 10.10.1.0/24)."""

    @abstractmethod
    def get_vlans_by_number(self, number: int) -> list[VLAN]:
        """Look up VLANs by VLAN number."""

    def connect(self) -> None:
        """Explicitly connect to the target."""

    def disconnect(self) -> None:
        """Disconnect from the target."""

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
