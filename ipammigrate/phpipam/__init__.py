"""phpIPAM REST API client."""

from ipammigrate.phpipam.client import PHPIPAMClient
from ipammigrate.phpipam.models import VLAN, Address, Subnet
from ipammigrate.phpipam.transport import PHPIPAMTransport

__all__ = [
    "PHPIPAMClient",
    "PHPIPAMTransport",
    "VLAN",
    "Subnet",
    "Address",
]
