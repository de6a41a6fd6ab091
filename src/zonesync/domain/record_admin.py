"""Manual record administration: change the remote rrset, then the local cache.

The remote call happens first; the local store is only touched once PowerDNS
accepted the change, so a failed call leaves the cache as it was.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from zonesync.domain.errors import IntegrationNotFoundError, ZoneNotFoundError
from zonesync.domain.model import RecordSource, RemoteRecord, ZoneRecord
from zonesync.domain.naming import domain_record_name, keys_equal, record_fqdn
from zonesync.domain.record_sync import ABSOLUTE_NAME_TYPES, RECORD_MATCHERS

if TYPE_CHECKING:
    from collections.abc import Callable

    from zonesync.domain.model import Integration, RecordProjection, Zone
    from zonesync.domain.ports.editing import RemoteRecordEditor
    from zonesync.domain.ports.persistence import RecordRepository
    from zonesync.domain.ports.unit_of_work import DnsUnitOfWork

log = getLogger(__name__)


def _find_zone(uow: DnsUnitOfWork, integration: Integration, zone_name: str) -> Zone:
    zones = uow.repositories.zones
    for projection in zones.list_projections(integration):
        if keys_equal(projection.name, zone_name):
            for zone in zones.list_by_ids([projection.id]):
                return zone
    raise ZoneNotFoundError(f"Zone {zone_name} is not known for {integration.name}")


def _load_integration(uow: DnsUnitOfWork, integration_id: int) -> Integration:
    integration = uow.repositories.integrations.get(integration_id)
    if integration is None:
        raise IntegrationNotFoundError(f"No integration with id {integration_id}")
    return integration


def _of_type(
    records: RecordRepository,
    projections: list[RecordProjection],
    record_type: str,
) -> list[RecordProjection]:
    # legacy keys carry no type, so the cached row decides
    if not projections:
        return []
    same_type = {
        record.id
        for record in records.list_by_ids([projection.id for projection in projections])
        if record.type.upper() == record_type
    }
    return [projection for projection in projections if projection.id in same_type]


def add_record(
    *,
    integration_id: int,
    zone_name: str,
    record_type: str,
    name: str,
    content: str,
    ttl: int | None,
    editor: RemoteRecordEditor,
    unit_of_work_factory: Callable[[], DnsUnitOfWork],
) -> ZoneRecord:
    """Create ``name`` in ``zone_name`` remotely and cache it as a user record."""

    with unit_of_work_factory() as uow:
        integration = _load_integration(uow, integration_id)
        zone = _find_zone(uow, integration, zone_name)
        fqdn = record_fqdn(name, zone.fqdn)
        upper_type = record_type.upper()
        relative = domain_record_name(fqdn, zone.fqdn)
        record = ZoneRecord(
            zone_id=zone.id,
            name=fqdn if upper_type in ABSOLUTE_NAME_TYPES else relative,
            fqdn=fqdn,
            type=upper_type,
            content=content,
            ttl=ttl,
            source=RecordSource.USER,
        )
        record.external_id = editor.create_record(zone, record)
        log.info(f"Created {upper_type} {fqdn} in {zone.name}")
        uow.repositories.records.create(zone, [record])
        uow.commit()
        return record


def delete_record(
    *,
    integration_id: int,
    zone_name: str,
    record_type: str,
    name: str,
    content: str | None,
    editor: RemoteRecordEditor,
    unit_of_work_factory: Callable[[], DnsUnitOfWork],
) -> int:
    """Delete the rrset remotely and drop matching cached records; returns the local count."""

    with unit_of_work_factory() as uow:
        integration = _load_integration(uow, integration_id)
        zone = _find_zone(uow, integration, zone_name)
        fqdn = record_fqdn(name, zone.fqdn)
        upper_type = record_type.upper()
        key = RemoteRecord(name=fqdn, type=upper_type)

        records = uow.repositories.records
        candidates = [
            projection
            for projection in records.list_projections(zone)
            if RECORD_MATCHERS.matches(projection, key)
        ]
        matching = _of_type(records, candidates, upper_type)
        editor.delete_record(
            zone,
            ZoneRecord(
                zone_id=zone.id,
                name=domain_record_name(fqdn, zone.fqdn),
                fqdn=fqdn,
                type=upper_type,
                content=content,
            ),
        )
        log.info(f"Deleted {upper_type} {fqdn} in {zone.name}")
        records.remove(zone, matching)
        uow.commit()
        return len(matching)
