"""
DNS record reconciliation

Brings the A (and optionally AAAA) record of the managed FQDN in line with the
machine's public addresses. Every run is a fresh read-modify-write against the
provider; nothing is cached between runs.
"""

import logging
from enum import Enum
from typing import NamedTuple, Optional

from .config import Settings
from .dns.hetzner import HetznerDNSClient
from .dns.types import Record
from .dns.utils import addresses_equal, find_record
from .errors import UpdateError
from .ip import AddressResolver
from .logger import logger


class Outcome(Enum):
    """Terminal state of one record type's reconciliation"""

    UP_TO_DATE = "up-to-date"
    UPDATED = "updated"
    FAILED = "failed"
    SKIPPED_NOT_FOUND = "skipped: not found"
    SKIPPED_DISABLED = "skipped: disabled"
    SKIPPED_NO_ADDRESS = "skipped: no address"

    @property
    def is_failure(self) -> bool:
        return self is Outcome.FAILED


class RecordResult(NamedTuple):
    """Result of reconciling one record type"""

    record_type: str
    fqdn: str
    outcome: Outcome
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    error: Optional[str] = None

    def describe(self) -> str:
        match self.outcome:
            case Outcome.UP_TO_DATE:
                return f"{self.record_type} record already up to date: {self.new_value}"
            case Outcome.UPDATED:
                return (
                    f"{self.record_type} record updated from {self.old_value} "
                    f"to {self.new_value}"
                )
            case Outcome.FAILED:
                return f"{self.record_type} record update failed: {self.error}"
            case Outcome.SKIPPED_NOT_FOUND:
                return f"{self.record_type} record not found for {self.fqdn}"
            case Outcome.SKIPPED_DISABLED:
                return f"Skipping {self.record_type} update (use --ipv6 to enable)"
            case Outcome.SKIPPED_NO_ADDRESS:
                return (
                    f"No public address found for {self.record_type}. "
                    f"Skipping {self.record_type} update"
                )

    @property
    def log_level(self) -> int:
        if self.outcome is Outcome.FAILED:
            return logging.ERROR
        if self.outcome is Outcome.SKIPPED_NOT_FOUND:
            return logging.WARNING
        return logging.INFO


class Reconciler:
    """
    Reconciles the DNS records of one FQDN.

    The run:
    1. Resolves the public IPv4 address (and IPv6 when enabled)
    2. Looks up the zone holding the FQDN
    3. Lists the zone's records once
    4. Reconciles A, then AAAA, with the same routine
    """

    def __init__(
        self,
        settings: Settings,
        dns_client: HetznerDNSClient,
        resolver: AddressResolver,
    ) -> None:
        self._settings = settings
        self._target = settings.target
        self._fqdn = f"{self._target.record_name}.{self._target.zone_name}"
        self._dns_client = dns_client
        self._resolver = resolver

    async def run(self) -> list[RecordResult]:
        """
        Run one reconciliation.

        Raises:
            NetworkError: If the IPv4 lookup or a listing call fails
            AuthError: If the API token is rejected
            NotFoundError: If the zone does not exist
        """
        ipv4 = await self._resolver.get_ipv4()
        ipv6 = await self._resolver.get_ipv6() if self._settings.ipv6 else None

        zone = await self._dns_client.get_zone(self._target.zone_name)
        records = await self._dns_client.list_records(zone.id)
        logger.debug(f"Zone {zone.name} has {len(records)} records")

        results = [await self.reconcile(records, "A", ipv4)]

        if not self._settings.ipv6:
            results.append(self._skip("AAAA", Outcome.SKIPPED_DISABLED))
        elif ipv6 is None:
            results.append(self._skip("AAAA", Outcome.SKIPPED_NO_ADDRESS))
        else:
            results.append(await self.reconcile(records, "AAAA", ipv6))

        return results

    async def reconcile(
        self, records: list[Record], record_type: str, address: str
    ) -> RecordResult:
        """
        Reconcile a single record type against an observed address.

        An update failure is recorded as FAILED instead of being raised, so the
        other record type is still attempted.
        """
        record = find_record(records, self._target.record_name, record_type)
        if record is None:
            return self._report(
                RecordResult(record_type, self._fqdn, Outcome.SKIPPED_NOT_FOUND)
            )

        if addresses_equal(record.value, address):
            return self._report(
                RecordResult(
                    record_type,
                    self._fqdn,
                    Outcome.UP_TO_DATE,
                    old_value=record.value,
                    new_value=record.value,
                )
            )

        logger.info(f"Updating {record_type} record from {record.value} to {address}")
        updated = record.with_value(address, self._settings.update_ttl)
        try:
            await self._dns_client.update_record(updated)
        except UpdateError as e:
            return self._report(
                RecordResult(
                    record_type,
                    self._fqdn,
                    Outcome.FAILED,
                    old_value=record.value,
                    new_value=address,
                    error=str(e),
                )
            )

        return self._report(
            RecordResult(
                record_type,
                self._fqdn,
                Outcome.UPDATED,
                old_value=record.value,
                new_value=address,
            )
        )

    def _skip(self, record_type: str, outcome: Outcome) -> RecordResult:
        return self._report(
            RecordResult(record_type, self._fqdn, outcome), stacklevel=3
        )

    def _report(self, result: RecordResult, stacklevel: int = 2) -> RecordResult:
        # Attribute the status line to the caller, not to this helper
        logger.log(result.log_level, result.describe(), stacklevel=stacklevel)
        return result
