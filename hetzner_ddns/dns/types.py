"""
DNS type definitions for the Hetzner DNS API
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


class Target(NamedTuple):
    """Record and zone derived from the managed FQDN"""

    record_name: str
    zone_name: str


class Zone(BaseModel):
    """Zone returned from the DNS provider"""

    id: str
    name: str


class ZoneList(BaseModel):
    zones: list[Zone]


class Record(BaseModel):
    """DNS record as exchanged with the DNS provider"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    record_type: str = Field(alias="type")
    name: str
    value: str
    zone_id: str
    ttl: Optional[int] = None

    def with_value(self, value: str, ttl: int) -> "Record":
        """Copy of this record pointing at a new value"""
        return self.model_copy(update={"value": value, "ttl": ttl})

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class RecordList(BaseModel):
    records: list[Record]


class RecordEnvelope(BaseModel):
    record: Record
