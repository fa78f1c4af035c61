"""
Error kinds raised by the DDNS updater.

Every failure the CLI can report is one of these. Each kind carries the exit
code the top-level handler returns for it.
"""


class DDNSError(Exception):
    """Base class for all updater errors"""

    exit_code = 1


class ConfigError(DDNSError):
    """Missing or malformed settings, raised before any network call"""

    exit_code = 2


class NetworkError(DDNSError):
    """Transport failure or non-2xx response on a required call"""

    exit_code = 3


class AuthError(DDNSError):
    """API token rejected by the DNS provider"""

    exit_code = 4


class NotFoundError(DDNSError):
    """Zone or record absent on the DNS provider"""

    exit_code = 5


class UpdateError(DDNSError):
    """Record update call failed"""

    exit_code = 6
