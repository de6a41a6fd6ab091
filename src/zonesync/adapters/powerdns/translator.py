"""Translate PowerDNS payloads into remote items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from zonesync.domain.model import RemoteRecord, RemoteZone, ServiceVersion

if TYPE_CHECKING:
    from .schema import RecordPayload, RRSetPayload, ZoneDetailPayload, ZonePayload


def parse_zone(payload: ZonePayload) -> RemoteZone:
    return RemoteZone(
        name=payload.name,
        kind=payload.kind,
        url=payload.url,
        serial=payload.serial,
        dnssec=payload.dnssec,
        remote_id=payload.id,
    )


def parse_record(payload: RecordPayload) -> RemoteRecord:
    return RemoteRecord(
        name=payload.name,
        type=payload.type,
        ttl=payload.ttl,
        content=payload.content,
        contents=(payload.content,),
    )


def parse_rrset(payload: RRSetPayload) -> RemoteRecord:
    contents = tuple(record.content for record in payload.records)
    return RemoteRecord(
        name=payload.name,
        type=payload.type,
        ttl=payload.ttl,
        content=contents[0] if contents else None,
        contents=contents,
        comments=[comment.model_dump(exclude_none=True) for comment in payload.comments],
    )


def parse_zone_records(
    payload: ZoneDetailPayload,
    version: ServiceVersion,
) -> list[RemoteRecord]:
    if version == ServiceVersion.V3:
        return [parse_record(record) for record in payload.records]
    return [parse_rrset(rrset) for rrset in payload.rrsets]
