"""Extraction from the legacy phpIPAM database."""

from ipammigrate.legacy.extractor import LegacyExtractor, connect_legacy_db
from ipammigrate.legacy.models import LegacyAddress, LegacySubnet, LegacyVLAN

__all__ = [
    "LegacyExtractor",
    "connect_legacy_db",
    "LegacyVLAN",
    "LegacySubnet",
    "LegacyAddress",
]
