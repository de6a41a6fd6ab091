"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from zonesync.adapters.powerdns import PowerDnsSource
from zonesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDnsUnitOfWork,
    is_started,
    startup,
)
from zonesync.config import get_powerdns_config, get_sync_config
from zonesync.domain.data_integration import RefreshResult, refresh_integration
from zonesync.domain.model import Integration
from zonesync.domain.ports.unit_of_work import DnsUnitOfWork
from zonesync.domain.record_admin import add_record, delete_record

if TYPE_CHECKING:
    from zonesync.config import PowerDnsConfig
    from zonesync.domain.model import ZoneRecord
    from zonesync.domain.ports.editing import RemoteRecordEditor
    from zonesync.domain.ports.fetching import RemoteDnsSource

UnitOfWorkFactory = Callable[[], DnsUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def ensure_integration(
    config: PowerDnsConfig,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> int:
    """Return the id of the integration named in ``config``, creating or updating it."""

    with unit_of_work_factory() as uow:
        integrations = uow.repositories.integrations
        integration = integrations.get_by_name(config.integration_name)
        if integration is None:
            integration = Integration(
                name=config.integration_name,
                service_url=config.base_url,
                service_version=config.service_version,
                create_pointers=config.create_pointers,
                domain_active=config.domain_active,
            )
            integrations.add(integration)
            log.info(f"Registered integration {integration.name} ({integration.service_url})")
        else:
            integration.service_url = config.base_url
            integration.service_version = config.service_version
            integration.create_pointers = config.create_pointers
            integration.domain_active = config.domain_active
        uow.commit()
        if integration.id is None:
            raise RuntimeError(f"Integration {integration.name} was not assigned an id")
        return integration.id


def refresh_powerdns(
    *,
    config: PowerDnsConfig | None = None,
    source: RemoteDnsSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    zone_batch_size: int | None = None,
    timeout: timedelta | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> RefreshResult:
    """Mirror the configured PowerDNS server into the local cache."""

    _ensure_started()
    effective_config = config or get_powerdns_config()
    effective_source = source or PowerDnsSource(effective_config)
    effective_uow = unit_of_work_factory or SqlAlchemyDnsUnitOfWork
    sync_config = get_sync_config()
    batch_size = zone_batch_size or sync_config.zone_batch_size
    if timeout is None and sync_config.timeout_seconds:
        timeout = timedelta(seconds=sync_config.timeout_seconds)

    integration_id = ensure_integration(effective_config, unit_of_work_factory=effective_uow)
    log.info(
        "Starting PowerDNS refresh: integration=%s, version=%s, zone_batch_size=%s, timeout=%s",
        effective_config.integration_name,
        effective_config.service_version,
        batch_size,
        timeout,
    )

    result = refresh_integration(
        integration_id=integration_id,
        source=effective_source,
        unit_of_work_factory=effective_uow,
        zone_batch_size=batch_size,
        timeout=timeout,
        should_stop=should_stop,
    )

    log.info(
        f"Finished PowerDNS refresh: status={result.status}, zones={result.zones}, "
        f"record_scopes={len(result.records)}, failures={len(result.failures)}, "
        f"cancelled={result.cancelled}"
    )
    return result


def create_remote_record(
    *,
    zone_name: str,
    record_type: str,
    name: str,
    content: str,
    ttl: int | None = None,
    config: PowerDnsConfig | None = None,
    editor: RemoteRecordEditor | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ZoneRecord:
    _ensure_started()
    effective_config = config or get_powerdns_config()
    effective_uow = unit_of_work_factory or SqlAlchemyDnsUnitOfWork
    integration_id = ensure_integration(effective_config, unit_of_work_factory=effective_uow)
    return add_record(
        integration_id=integration_id,
        zone_name=zone_name,
        record_type=record_type,
        name=name,
        content=content,
        ttl=ttl,
        editor=editor or PowerDnsSource(effective_config),
        unit_of_work_factory=effective_uow,
    )


def delete_remote_record(
    *,
    zone_name: str,
    record_type: str,
    name: str,
    content: str | None = None,
    config: PowerDnsConfig | None = None,
    editor: RemoteRecordEditor | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    _ensure_started()
    effective_config = config or get_powerdns_config()
    effective_uow = unit_of_work_factory or SqlAlchemyDnsUnitOfWork
    integration_id = ensure_integration(effective_config, unit_of_work_factory=effective_uow)
    return delete_record(
        integration_id=integration_id,
        zone_name=zone_name,
        record_type=record_type,
        name=name,
        content=content,
        editor=editor or PowerDnsSource(effective_config),
        unit_of_work_factory=effective_uow,
    )
