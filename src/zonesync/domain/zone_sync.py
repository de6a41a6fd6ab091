"""Zone-level reconciliation rules.

Zones are matched on their friendly name only. Updates never rename a zone;
they backfill the remote url and ownership for zones that predate the
integration, and follow the remote serial.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zonesync.domain.model import Integration, RefSource, RemoteZone, Zone, ZoneProjection
from zonesync.domain.naming import friendly_domain_name, fqdn_domain_name, keys_equal
from zonesync.domain.reconciliation import MatcherChain, SyncTask

if TYPE_CHECKING:
    from zonesync.domain.ports.persistence import ZoneRepository


def zone_name_matches(projection: ZoneProjection, remote: RemoteZone) -> bool:
    return keys_equal(projection.name, friendly_domain_name(remote.name))


ZONE_MATCHERS: MatcherChain[ZoneProjection, RemoteZone] = MatcherChain().then(
    "zone_name", zone_name_matches
)


def build_zone(integration: Integration, remote: RemoteZone) -> Zone:
    return Zone(
        name=friendly_domain_name(remote.name),
        fqdn=fqdn_domain_name(remote.name),
        integration_id=integration.id,
        external_id=remote.url,
        zone_type=remote.kind,
        public_zone=True,
        active=integration.domain_active,
        domain_serial=remote.serial,
        dnssec=remote.dnssec,
        ref_source=RefSource.INTEGRATION,
    )


def desired_zone_fields(zone: Zone, remote: RemoteZone) -> dict[str, object]:
    desired: dict[str, object] = {}
    if not zone.external_id and remote.url:
        desired["external_id"] = remote.url
    if zone.ref_source is None:
        desired["ref_source"] = RefSource.INTEGRATION
    if remote.serial is not None:
        desired["domain_serial"] = remote.serial
    return desired


def zone_sync_task(
    store: ZoneRepository,
) -> SyncTask[Integration, ZoneProjection, RemoteZone, Zone]:
    return SyncTask(
        name="zones",
        matchers=ZONE_MATCHERS,
        store=store,
        build=build_zone,
        desired_fields=desired_zone_fields,
    )
