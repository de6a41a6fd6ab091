"""Locally cached DNS entities and their identity projections.

``Zone`` and ``ZoneRecord`` are mapped onto tables by the SQLAlchemy adapter;
they stay plain dataclasses here. Projections are the cheap read model used
for matching: identity fields only, never payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from .enums import IntegrationStatus, RecordSource, RefSource, ServiceVersion


@dataclass(eq=False, kw_only=True)
class Integration:
    """A configured PowerDNS server whose zones are mirrored locally."""

    name: str
    service_url: str
    service_version: ServiceVersion = ServiceVersion.V4
    create_pointers: bool = True
    domain_active: bool = True
    status: IntegrationStatus | None = None
    status_message: str | None = None
    status_date: datetime | None = None
    id: int | None = None

    def mark_status(
        self,
        status: IntegrationStatus,
        message: str | None = None,
        *,
        at: datetime | None = None,
    ) -> None:
        self.status = status
        self.status_message = message
        self.status_date = at or datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Zone:
    name: str
    fqdn: str
    integration_id: int | None = None
    external_id: str | None = None
    zone_type: str | None = None
    public_zone: bool = True
    active: bool = True
    domain_serial: int | None = None
    dnssec: bool = False
    ref_source: RefSource | None = None
    id: int | None = None


@dataclass(eq=False, kw_only=True)
class ZoneRecord:
    name: str
    type: str
    zone_id: int | None = None
    fqdn: str | None = None
    content: str | None = None
    ttl: int | None = None
    comments: str | None = None
    external_id: str | None = None
    source: RecordSource = RecordSource.SYNC
    id: int | None = None


@dataclass(frozen=True, slots=True)
class ZoneProjection:
    id: int
    integration_id: int
    external_id: str | None
    name: str


@dataclass(frozen=True, slots=True)
class RecordProjection:
    id: int
    zone_id: int
    external_id: str | None
    name: str
