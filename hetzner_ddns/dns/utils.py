"""
DNS utility functions for record matching
"""

import ipaddress
from typing import Optional

from .types import Record


def find_record(
    records: list[Record], name: str, record_type: str
) -> Optional[Record]:
    """
    Find the record for a leaf hostname and record type.

    Args:
        records: Records of a single zone
        name: Leaf hostname (e.g. "dyn" for "dyn.example.com")
        record_type: "A", "AAAA", ...

    Returns:
        The first exactly matching record, or None
    """
    for record in records:
        if record.name == name and record.record_type == record_type:
            return record
    return None


def addresses_equal(current: str, observed: str) -> bool:
    """
    Compare a stored record value with an observed address.

    Both values are compared as IP addresses when they parse as such, so
    "2001:db8::1" and "2001:0db8:0:0:0:0:0:1" are considered equal.
    """
    current = current.strip()
    observed = observed.strip()
    try:
        return ipaddress.ip_address(current) == ipaddress.ip_address(observed)
    except ValueError:
        return current == observed
