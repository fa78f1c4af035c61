"""
DNS Management

Zone and record access for the Hetzner DNS API.
"""

from .hetzner import HetznerDNSClient
from .types import Record, RecordList, Target, Zone, ZoneList
from .utils import addresses_equal, find_record

__all__ = [
    "HetznerDNSClient",
    "Record",
    "RecordList",
    "Target",
    "Zone",
    "ZoneList",
    "addresses_equal",
    "find_record",
]
