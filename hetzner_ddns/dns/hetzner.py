"""
Hetzner DNS API client

Direct client for the Hetzner DNS console REST API (zones and records).
"""

import asyncio
import json as jsonlib
from typing import Any, Literal, Optional

import aiohttp
from pydantic import ValidationError

from ..errors import AuthError, DDNSError, NetworkError, NotFoundError, UpdateError
from ..logger import logger
from .types import Record, RecordEnvelope, RecordList, Zone, ZoneList

PER_PAGE = 100


class HetznerDNSClient:
    """
    Hetzner DNS client bound to one API token.

    All calls are sequential. Any non-2xx status is raised as an error:
    401/403 as AuthError, everything else as NetworkError.
    """

    def __init__(self, api_token: str, base_url: str, timeout: float = 10) -> None:
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout)
        )

        self._api_token = api_token
        self._base_url = base_url

        if not self._base_url.endswith("/"):
            self._base_url += "/"

    async def __aenter__(self) -> "HetznerDNSClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _send_request(
        self,
        method: Literal["GET", "PUT"],
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Optional[dict[str, Any]]:
        url = self._base_url + path
        headers = {"Auth-API-Token": self._api_token}
        if json is not None:
            headers["Content-Type"] = "application/json"

        try:
            async with self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
            ) as response:
                status = response.status
                response_str = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"{method} {url} failed: {type(e).__name__}: {e}"
            ) from e
        except UnicodeDecodeError as e:
            raise NetworkError(f"{method} {url} returned an undecodable body") from e

        if status in (401, 403):
            raise AuthError(f"API token rejected by {url} (HTTP {status})")
        if not 200 <= status < 300:
            raise NetworkError(
                f"{method} {url} returned HTTP {status}: {response_str[:200]}"
            )

        if not response_str:
            return None
        try:
            data = jsonlib.loads(response_str)
        except ValueError as e:
            raise NetworkError(f"{method} {url} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise NetworkError(
                f"{method} {url} returned {type(data).__name__} instead of an object"
            )
        return data

    async def _get_pages(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> list[dict[str, Any]]:
        """Fetch every page of a paginated listing"""
        pages = []
        page = 1
        while True:
            page_params = {**(params or {}), "page": page, "per_page": PER_PAGE}
            response = await self._send_request("GET", path, params=page_params)
            if response is None:
                raise NetworkError(f"GET {self._base_url}{path} returned an empty body")
            pages.append(response)

            meta = response.get("meta")
            pagination = meta.get("pagination") if isinstance(meta, dict) else None
            last_page = (
                pagination.get("last_page") if isinstance(pagination, dict) else None
            )
            if not isinstance(last_page, int) or page >= last_page:
                return pages
            page += 1

    async def list_zones(self) -> list[Zone]:
        """List all zones visible to the API token"""
        zones = list[Zone]()
        for response in await self._get_pages("zones"):
            try:
                zones.extend(ZoneList.model_validate(response).zones)
            except ValidationError as e:
                raise NetworkError(f"Unexpected zone listing format: {e}") from e
        return zones

    async def get_zone(self, zone_name: str) -> Zone:
        """
        Find a zone by exact, case-sensitive name.

        Raises:
            NotFoundError: If no zone has that name
        """
        for zone in await self.list_zones():
            if zone.name == zone_name:
                logger.debug(f"Found zone {zone.name} with id {zone.id}")
                return zone
        raise NotFoundError(f"Zone not found: {zone_name}")

    async def list_records(self, zone_id: str) -> list[Record]:
        """List all records of a zone"""
        records = list[Record]()
        for response in await self._get_pages("records", params={"zone_id": zone_id}):
            try:
                records.extend(RecordList.model_validate(response).records)
            except ValidationError as e:
                raise NetworkError(f"Unexpected record listing format: {e}") from e
        return records

    async def update_record(self, record: Record) -> Record:
        """
        Replace a record with the given copy.

        Returns:
            The record echoed back by the provider, or the sent record when the
            response carries none

        Raises:
            UpdateError: If the call fails for any reason
        """
        try:
            response = await self._send_request(
                "PUT", f"records/{record.id}", json=record.to_payload()
            )
        except DDNSError as e:
            raise UpdateError(
                f"Failed to update {record.record_type} record {record.id}: {e}"
            ) from e

        if response and "record" in response:
            try:
                return RecordEnvelope.model_validate(response).record
            except ValidationError:
                logger.debug(f"Ignoring unexpected update response: {response}")
        return record

    async def close(self):
        """Clean up the session"""
        await self._session.close()
