"""Pydantic models for phpIPAM API objects.

Field aliases follow the JSON names used by the phpIPAM API. The API returns
numeric fields as strings ("id": "2"); pydantic coerces them on validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _empty_ref_to_none(value: Any) -> Any:
    # phpIPAM reports unset references as null, "" or "0".
    if value in (None, "", "0", 0):
        return None
    return value


def _null_to_empty(value: Any) -> Any:
    # Text columns left unset come back as null.
    return "" if value is None else value


class _PHPIPAMObject(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None

    def payload(self) -> dict[str, Any]:
        """Return the JSON body for a create request."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})


class VLAN(_PHPIPAMObject):
    """A phpIPAM VLAN."""

    name: str = ""
    number: int
    description: str = ""

    @field_validator("name", "description", mode="before")
    @classmethod
    def _unset_text(cls, value: Any) -> Any:
        return _null_to_empty(value)


class Subnet(_PHPIPAMObject):
    """A phpIPAM subnet; ``master_subnet_id`` links it to its parent block."""

    subnet_address: str = Field(alias="subnet")
    mask: int
    description: str = ""
    section_id: int | None = Field(default=None, alias="sectionId")
    vlan_id: int | None = Field(default=None, alias="vlanId")
    master_subnet_id: int | None = Field(default=None, alias="masterSubnetId")

    @field_validator("description", mode="before")
    @classmethod
    def _unset_text(cls, value: Any) -> Any:
        return _null_to_empty(value)

    @field_validator("vlan_id", "master_subnet_id", mode="before")
    @classmethod
    def _unset_reference(cls, value: Any) -> Any:
        return _empty_ref_to_none(value)

    @property
    def cidr(self) -> str:
        return f"{self.subnet_address}/{self.mask}"


class Address(_PHPIPAMObject):
    """A phpIPAM IP address."""

    ip_address: str = Field(alias="ip")
    subnet_id: int = Field(alias="subnetId")
    description: str = ""
    hostname: str = ""
    note: str = ""

    @field_validator("description", "hostname", "note", mode="before")
    @classmethod
    def _unset_text(cls, value: Any) -> Any:
        return _null_to_empty(value)
