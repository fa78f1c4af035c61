"""
Dynamic DNS updater for Hetzner DNS.

Keeps the A (and optionally AAAA) record of one FQDN pointed at this
machine's public address.
"""

__version__ = "0.1.0"
