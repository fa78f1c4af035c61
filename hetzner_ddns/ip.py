"""Public address lookup through plain-text echo services."""

import ipaddress
import logging
from typing import Optional

import httpx

from .config import Settings
from .errors import NetworkError
from .logger import log_exception, logger


class AddressResolver:
    """
    Resolve the public IPv4 and IPv6 addresses of this machine.

    IPv4 is required: every failure raises NetworkError. IPv6 is best effort
    and resolves to None when unavailable.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._ipv4_url = settings.ipv4_lookup_url
        self._ipv6_url = settings.ipv6_lookup_url
        self._timeout = settings.request_timeout
        self._transport = transport

    async def _fetch(self, url: str) -> str:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text.strip()

    async def get_ipv4(self) -> str:
        """
        Fetch the public IPv4 address.

        Raises:
            NetworkError: If the lookup fails or does not return an IPv4 address
        """
        try:
            text = await self._fetch(self._ipv4_url)
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"IPv4 lookup {self._ipv4_url} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Could not fetch public IPv4 address from {self._ipv4_url}: "
                f"{type(e).__name__}: {e}"
            ) from e

        try:
            ipaddress.IPv4Address(text)
        except ValueError as e:
            raise NetworkError(
                f"IPv4 lookup {self._ipv4_url} returned unparsable content: {text[:64]!r}"
            ) from e

        logger.debug(f"Public IPv4 address: {text}")
        return text

    @log_exception("IPv6 lookup {self._ipv6_url}", level=logging.WARNING)
    async def get_ipv6(self) -> Optional[str]:
        """Fetch the public IPv6 address, or None when there is none"""
        text = await self._fetch(self._ipv6_url)
        try:
            ipaddress.IPv6Address(text)
        except ValueError:
            logger.warning(
                f"IPv6 lookup {self._ipv6_url} returned unparsable content: {text[:64]!r}"
            )
            return None

        logger.debug(f"Public IPv6 address: {text}")
        return text
