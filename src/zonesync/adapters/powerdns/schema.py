"""Pydantic models describing the PowerDNS HTTP API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PowerDnsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ZonePayload(PowerDnsBaseModel):
    """One entry of ``GET /servers/localhost/zones``."""

    id: str | None = None
    name: str
    kind: str | None = None
    url: str | None = None
    serial: int | None = None
    dnssec: bool = False

    @field_validator("dnssec", mode="before")
    @classmethod
    def _null_dnssec(cls, value: object) -> object:
        return False if value is None else value


class RecordPayload(PowerDnsBaseModel):
    """One entry of the API v3 ``records`` list."""

    name: str
    type: str
    content: str
    ttl: int | None = None
    disabled: bool = False


class RRSetRecordPayload(PowerDnsBaseModel):
    content: str
    disabled: bool = False


class CommentPayload(PowerDnsBaseModel):
    content: str
    account: str | None = None
    modified_at: int | None = None


class RRSetPayload(PowerDnsBaseModel):
    name: str
    type: str
    ttl: int | None = None
    records: list[RRSetRecordPayload] = Field(default_factory=list)
    comments: list[CommentPayload] = Field(default_factory=list)


class ZoneDetailPayload(PowerDnsBaseModel):
    """``GET {zone url}``; v3 servers fill ``records``, v4 servers fill ``rrsets``."""

    name: str | None = None
    serial: int | None = None
    records: list[RecordPayload] = Field(default_factory=list)
    rrsets: list[RRSetPayload] = Field(default_factory=list)


class ErrorPayload(PowerDnsBaseModel):
    error: str
