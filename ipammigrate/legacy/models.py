"""Pydantic models for rows read from the legacy phpIPAM database."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ipammigrate.codec import cidr


class LegacyVLAN(BaseModel):
    """A VLAN row. ``number`` is unique within the legacy database."""

    name: str = ""
    number: int
    description: str = ""


class LegacySubnet(BaseModel):
    """An IPv4 subnet row with its VLAN number (if any) joined in."""

    address: str
    mask: int = Field(ge=0, le=32)
    description: str = ""
    vlan_number: int | None = None

    @property
    def cidr(self) -> str:
        return cidr(self.address, self.mask)


class LegacyAddress(BaseModel):
    """An IPv4 address row, carrying the CIDR of the subnet it belongs to."""

    ip: str
    description: str = ""
    hostname: str = ""
    note: str = ""
    subnet_address: str
    subnet_mask: int = Field(ge=0, le=32)

    @property
    def subnet_cidr(self) -> str:
        return cidr(self.subnet_address, self.subnet_mask)
