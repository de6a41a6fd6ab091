"""Domain model for the local DNS cache."""

from __future__ import annotations

from .dns import Integration, RecordProjection, Zone, ZoneProjection, ZoneRecord
from .enums import FailureKind, IntegrationStatus, RecordSource, RefSource, ServiceVersion
from .remote import RemoteRecord, RemoteZone

__all__ = [
    "FailureKind",
    "Integration",
    "IntegrationStatus",
    "RecordProjection",
    "RecordSource",
    "RefSource",
    "RemoteRecord",
    "RemoteZone",
    "ServiceVersion",
    "Zone",
    "ZoneProjection",
    "ZoneRecord",
]
