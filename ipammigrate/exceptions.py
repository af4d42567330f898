"""Exception hierarchy for the legacy phpIPAM migration."""


class MigrationError(Exception):
    """Base exception for all migration errors."""


class InvalidAddressFormat(MigrationError, ValueError):
    """A legacy address is not a valid unsigned 32-bit decimal (IPv6 or malformed)."""


class InvalidCIDRError(MigrationError, ValueError):
    """An address/mask pair does not form a valid IPv4 CIDR block."""


class DatabaseError(MigrationError):
    """Legacy database connection or query failed."""


class APIError(MigrationError):
    """phpIPAM REST API request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(APIError):
    """phpIPAM login failed or returned no token."""


class NotFoundError(APIError):
    """phpIPAM reported that the requested object does not exist."""

    def __init__(self, message: str, status_code: int | None = 404):
        super().__init__(message, status_code)


class LookupFailedError(MigrationError):
    """A required cross-reference could not be resolved in the target."""


class VLANNotFoundError(LookupFailedError):
    """No VLAN with the referenced number exists in the target."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"VLAN number {number} not found in phpIPAM")


class SubnetNotFoundError(LookupFailedError):
    """No subnet with the referenced CIDR exists in the target."""

    def __init__(self, cidr: str):
        self.cidr = cidr
        super().__init__(f"Subnet {cidr} not found in phpIPAM")
