"""Record-level reconciliation rules.

Records are keyed by ``TYPE:NAME``. Rows written before that scheme carry the
bare record name as their external id, so the matcher chain falls back to a
name-only comparison; the next save rewrites the key to the compound form.
"""

from __future__ import annotations

import json
from functools import partial
from typing import TYPE_CHECKING, Final

from zonesync.domain.model import (
    RecordProjection,
    RecordSource,
    RemoteRecord,
    ServiceVersion,
    Zone,
    ZoneRecord,
)
from zonesync.domain.naming import (
    domain_record_name,
    fqdn_domain_name,
    keys_equal,
    record_external_id,
)
from zonesync.domain.reconciliation import MatcherChain, SyncTask

if TYPE_CHECKING:
    from zonesync.domain.ports.persistence import RecordRepository

# kept verbatim instead of being made zone-relative
ABSOLUTE_NAME_TYPES: Final[frozenset[str]] = frozenset({"SOA", "NS"})


def compound_key_matches(projection: RecordProjection, remote: RemoteRecord) -> bool:
    return keys_equal(projection.external_id, record_external_id(remote.type, remote.name))


def legacy_name_matches(projection: RecordProjection, remote: RemoteRecord) -> bool:
    return keys_equal(projection.external_id, remote.name)


RECORD_MATCHERS: MatcherChain[RecordProjection, RemoteRecord] = (
    MatcherChain()
    .then("type_and_name", compound_key_matches)
    .then("legacy_name", legacy_name_matches)
)


def record_content(remote: RemoteRecord, version: ServiceVersion) -> str | None:
    """Content as stored locally: one value (v3) or all rrset values joined by newlines (v4)."""

    if version == ServiceVersion.V3:
        return remote.content
    return "\n".join(remote.contents)


def clean_comments(comments: object) -> str | None:
    if isinstance(comments, (list, dict)):
        return json.dumps(comments, separators=(",", ":"))
    if isinstance(comments, str):
        return comments
    return None


def build_record(zone: Zone, remote: RemoteRecord, *, version: ServiceVersion) -> ZoneRecord:
    record_type = remote.type.upper()
    if record_type in ABSOLUTE_NAME_TYPES:
        name = remote.name
    else:
        name = domain_record_name(remote.name, zone.fqdn)
    return ZoneRecord(
        zone_id=zone.id,
        name=name,
        fqdn=fqdn_domain_name(remote.name),
        type=record_type,
        comments=clean_comments(remote.comments),
        ttl=remote.ttl,
        content=record_content(remote, version),
        external_id=record_external_id(remote.type, remote.name),
        source=RecordSource.SYNC,
    )


def desired_record_fields(
    _record: ZoneRecord,
    remote: RemoteRecord,
    *,
    version: ServiceVersion,
) -> dict[str, object]:
    return {
        "content": record_content(remote, version),
        "external_id": record_external_id(remote.type, remote.name),
    }


def record_sync_task(
    store: RecordRepository,
    *,
    version: ServiceVersion,
) -> SyncTask[Zone, RecordProjection, RemoteRecord, ZoneRecord]:
    return SyncTask(
        name="records",
        matchers=RECORD_MATCHERS,
        store=store,
        build=partial(build_record, version=version),
        desired_fields=partial(desired_record_fields, version=version),
    )
