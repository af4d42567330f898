"""Read VLANs, subnets and addresses out of a legacy (0.8) phpIPAM database."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import mysql.connector
from loguru import logger
from pydantic import ValidationError

from ipammigrate.codec import decode_address
from ipammigrate.exceptions import DatabaseError, InvalidAddressFormat
from ipammigrate.legacy.models import LegacyAddress, LegacySubnet, LegacyVLAN

if TYPE_CHECKING:
    from ipammigrate.config import DatabaseConfig

VLAN_QUERY = "select name, number, description from vlans"

# Joins vlans so each subnet carries its VLAN number; the number is what
# identifies the VLAN in the new instance.
SUBNET_QUERY = (
    "select subnets.subnet, subnets.mask, subnets.description, vlans.number "
    "from subnets left join vlans on subnets.vlanId = vlans.vlanId"
)

# Joins subnets so each address carries the CIDR of its subnet rather than a
# legacy subnet ID.
ADDRESS_QUERY = (
    "select ipaddresses.ip_addr, ipaddresses.description, ipaddresses.dns_name, ipaddresses.note, "
    "subnets.subnet, subnets.mask "
    "from ipaddresses left join subnets on ipaddresses.subnetId=subnets.id"
)


def connect_legacy_db(config: DatabaseConfig) -> Any:
    """Open a connection to the legacy MySQL database."""
    host = config.host or "localhost"
    logger.debug(f"Connecting to DB: {config.user}:[hidden]@{host}:{config.port}/{config.name}")
    try:
        return mysql.connector.connect(
            host=host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.name,
        )
    except mysql.connector.Error as e:
        raise DatabaseError(f"Error connecting to DB {config.user}:[hidden]@{host}/{config.name}: {e}") from e


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _address(value: Any) -> str:
    return decode_address(None if value is None else _text(value))


class LegacyExtractor:
    """Run the extraction queries against an open DB-API connection.

    The caller owns the connection. Rows whose addresses are not IPv4 are
    skipped with a debug message.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def _rows(self, query: str) -> list[tuple]:
        logger.debug(f"Running SQL query: {query}")
        try:
            cursor = self._connection.cursor()
            try:
                cursor.execute(query)
                return list(cursor.fetchall())
            finally:
                cursor.close()
        except mysql.connector.Error as e:
            raise DatabaseError(f"Error running SQL query: {e}") from e

    def fetch_vlans(self) -> list[LegacyVLAN]:
        """Get all the VLANs from the legacy DB."""
        logger.info("Fetching VLANs from legacy DB")
        out: list[LegacyVLAN] = []
        for name, number, description in self._rows(VLAN_QUERY):
            try:
                vlan = LegacyVLAN(name=_text(name), number=number, description=_text(description))
            except ValidationError as e:
                logger.warning(f"Ignoring malformed VLAN row {name!r}: {e}")
                continue
            logger.debug(f"Found VLAN - Name: {vlan.name}, Number: {vlan.number}, Description: {vlan.description}")
            out.append(vlan)
        logger.info(f"Found {len(out)} VLANs to migrate")
        return out

    def fetch_subnets(self) -> list[LegacySubnet]:
        """Get all of the IPv4 subnets from the legacy DB."""
        logger.info("Fetching subnets from legacy DB")
        out: list[LegacySubnet] = []
        for addr, mask, description, vlan_number in self._rows(SUBNET_QUERY):
            try:
                address = _address(addr)
            except InvalidAddressFormat as e:
                logger.debug(f"Ignoring inconvertible decimal address {addr} - possibly not an IPv4 address ({e})")
                continue

            try:
                subnet = LegacySubnet(
                    address=address,
                    mask=mask,
                    description=_text(description),
                    vlan_number=vlan_number,
                )
            except ValidationError as e:
                logger.warning(f"Ignoring malformed subnet row {address}/{mask}: {e}")
                continue
            logger.debug(
                f"Found subnet - Name: {subnet.address}, Mask: {subnet.mask}, "
                f"Description: {subnet.description}, VLAN: {subnet.vlan_number}"
            )
            out.append(subnet)
        logger.info(f"Found {len(out)} subnets to migrate")
        return out

    def fetch_addresses(self) -> list[LegacyAddress]:
        """Get all of the IPv4 addresses from the legacy DB."""
        logger.info("Fetching addresses from legacy DB")
        out: list[LegacyAddress] = []
        for ip_addr, description, dns_name, note, subnet_addr, subnet_mask in self._rows(ADDRESS_QUERY):
            try:
                ip = _address(ip_addr)
            except InvalidAddressFormat as e:
                logger.debug(f"Ignoring inconvertible decimal IP address {ip_addr} - possibly not an IPv4 address ({e})")
                continue
            try:
                subnet_address = _address(subnet_addr)
            except InvalidAddressFormat as e:
                logger.debug(
                    f"Ignoring IP address {ip}: inconvertible decimal subnet address {subnet_addr} "
                    f"- possibly not an IPv4 address ({e})"
                )
                continue

            try:
                address = LegacyAddress(
                    ip=ip,
                    description=_text(description),
                    hostname=_text(dns_name),
                    note=_text(note),
                    subnet_address=subnet_address,
                    subnet_mask=subnet_mask,
                )
            except ValidationError as e:
                logger.warning(f"Ignoring malformed IP address row {ip} in subnet {subnet_address}/{subnet_mask}: {e}")
                continue
            logger.debug(
                f"Found IP address - Address: {address.ip}, Description: {address.description}, "
                f"Hostname: {address.hostname}, Note: {address.note}, Subnet: {address.subnet_cidr}"
            )
            out.append(address)
        logger.info(f"Found {len(out)} addresses to migrate")
        return out
