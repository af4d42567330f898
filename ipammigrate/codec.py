"""Conversion between the legacy integer address encoding and dotted-quad text."""

from __future__ import annotations

import ipaddress

from ipammigrate.exceptions import InvalidAddressFormat, InvalidCIDRError

MAX_IPV4 = 2**32 - 1


def decode_address(raw: str | int | None) -> str:
    """Convert a decimal IPv4 address to a dotted-quad string, ie: 1.2.3.4.

    The legacy database stores addresses as unsigned decimal strings. IPv6
    addresses (and anything else outside the 32-bit range) raise
    ``InvalidAddressFormat``, which callers treat as "skip this row".
    """
    if raw is None:
        raise InvalidAddressFormat("empty address")
    text = str(raw).strip()
    if not text.isdigit() or not text.isascii():
        raise InvalidAddressFormat(f"not an unsigned decimal address: {raw!r}")
    value = int(text)
    if value > MAX_IPV4:
        raise InvalidAddressFormat(f"address {raw} exceeds the IPv4 range")
    return ".".join(str(b) for b in value.to_bytes(4, "big"))


def encode_address(dotted: str) -> int:
    """Convert a dotted-quad string back to its 32-bit integer value."""
    try:
        return int(ipaddress.IPv4Address(dotted))
    except ValueError as e:
        raise InvalidAddressFormat(f"not an IPv4 address: {dotted!r}") from e


def cidr(address: str, mask: int) -> str:
    return f"{address}/{mask}"


def network_cidr(address: str, mask: int) -> str:
    """Return the network block containing ``address`` at prefix length ``mask``.

    Host bits are cleared, so ``network_cidr("10.10.2.0", 16)`` is
    ``"10.10.0.0/16"``.
    """
    try:
        return str(ipaddress.IPv4Network(f"{address}/{mask}", strict=False))
    except ValueError as e:
        raise InvalidCIDRError(f"Error parsing subnet/CIDR {address}/{mask}: {e}") from e
