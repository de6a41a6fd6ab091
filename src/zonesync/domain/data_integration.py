"""Refresh orchestration: zones first, then the records of every zone.

A refresh holds one unit of work. Each scope (the zone listing, then each
zone's records) is committed on its own before the next one starts, so a
failure in one zone never rolls back or blocks its siblings.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from zonesync.domain.errors import (
    ConnectivityError,
    IntegrationNotFoundError,
    MutationError,
    PersistenceError,
)
from zonesync.domain.model import FailureKind, IntegrationStatus
from zonesync.domain.reconciliation import SyncOutcome, iter_batches
from zonesync.domain.record_sync import record_sync_task
from zonesync.domain.zone_sync import zone_sync_task

if TYPE_CHECKING:
    from collections.abc import Callable

    from zonesync.domain.model import (
        Integration,
        RecordProjection,
        RemoteRecord,
        Zone,
        ZoneRecord,
    )
    from zonesync.domain.ports.fetching import RemoteDnsSource
    from zonesync.domain.ports.unit_of_work import DnsUnitOfWork
    from zonesync.domain.reconciliation import SyncTask

DEFAULT_ZONE_BATCH_SIZE = 50
UNREACHABLE_MESSAGE = "PowerDNS not reachable"

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScopeFailure:
    scope: str
    kind: FailureKind
    message: str


@dataclass(slots=True)
class RefreshResult:
    """Outcome of one refresh of an integration."""

    integration_id: int
    status: IntegrationStatus
    message: str | None = None
    zones: SyncOutcome | None = None
    records: dict[int, SyncOutcome] = field(default_factory=dict)
    failures: list[ScopeFailure] = field(default_factory=list)
    cancelled: bool = False
    elapsed: timedelta = field(default_factory=timedelta)

    @property
    def partial(self) -> bool:
        return bool(self.failures) or self.cancelled


@dataclass(slots=True)
class _StopGuard:
    deadline: float | None
    should_stop: Callable[[], bool] | None
    clock: Callable[[], float]

    def tripped(self) -> bool:
        if self.should_stop is not None and self.should_stop():
            return True
        return self.deadline is not None and self.clock() >= self.deadline


def refresh_integration(
    *,
    integration_id: int,
    source: RemoteDnsSource,
    unit_of_work_factory: Callable[[], DnsUnitOfWork],
    zone_batch_size: int = DEFAULT_ZONE_BATCH_SIZE,
    timeout: timedelta | None = None,
    should_stop: Callable[[], bool] | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> RefreshResult:
    """Mirror the remote zones and records of one integration into the local store.

    ``timeout`` and ``should_stop`` are checked between scopes only; a scope
    that has started is always finished and committed.
    """

    started = clock()
    guard = _StopGuard(
        deadline=started + timeout.total_seconds() if timeout is not None else None,
        should_stop=should_stop,
        clock=clock,
    )

    with unit_of_work_factory() as uow:
        integrations = uow.repositories.integrations
        integration = integrations.get(integration_id)
        if integration is None:
            raise IntegrationNotFoundError(f"No integration with id {integration_id}")

        log.info(f"Refreshing {integration.name} ({integration.service_url})")
        result = RefreshResult(integration_id=integration_id, status=IntegrationStatus.OK)

        try:
            source.ensure_reachable()
        except ConnectivityError as exc:
            log.error(f"{integration.name} is unreachable: {exc}")
            integrations.update_status(integration, IntegrationStatus.ERROR, UNREACHABLE_MESSAGE)
            uow.commit()
            result.status = IntegrationStatus.ERROR
            result.message = UNREACHABLE_MESSAGE
            result.elapsed = timedelta(seconds=clock() - started)
            return result

        if guard.tripped():
            result.cancelled = True
        else:
            _refresh_zones(uow, integration, source, result)
            _refresh_records(uow, integration, source, result, zone_batch_size, guard)

        result.message = _summarize(result)
        integrations.update_status(integration, IntegrationStatus.OK, result.message)
        uow.commit()

    result.elapsed = timedelta(seconds=clock() - started)
    log.info(f"Sync completed in {int(result.elapsed.total_seconds() * 1000)}ms")
    return result


def _refresh_zones(
    uow: DnsUnitOfWork,
    integration: Integration,
    source: RemoteDnsSource,
    result: RefreshResult,
) -> None:
    scope = f"zones of {integration.name}"
    listing = source.list_zones()
    if not listing.success:
        _record_failure(result, scope, FailureKind.FETCH, listing.error)
        return

    task = zone_sync_task(uow.repositories.zones)
    try:
        result.zones = task.run(integration, listing.items, label=scope)
        uow.commit()
    except MutationError as exc:
        uow.rollback()
        _record_failure(result, scope, FailureKind.MUTATION, str(exc))
    except PersistenceError as exc:
        uow.rollback()
        _record_failure(result, scope, FailureKind.STORE, str(exc))


def _refresh_records(
    uow: DnsUnitOfWork,
    integration: Integration,
    source: RemoteDnsSource,
    result: RefreshResult,
    zone_batch_size: int,
    guard: _StopGuard,
) -> None:
    zones = uow.repositories.zones
    task = record_sync_task(uow.repositories.records, version=integration.service_version)
    try:
        projections = list(zones.list_projections(integration))
    except PersistenceError as exc:
        _record_failure(result, f"zones of {integration.name}", FailureKind.STORE, str(exc))
        return

    for group in iter_batches(projections, zone_batch_size):
        try:
            loaded = {zone.id: zone for zone in zones.list_by_ids([p.id for p in group])}
        except PersistenceError as exc:
            _record_failure(
                result, f"{len(group)} zones of {integration.name}", FailureKind.STORE, str(exc)
            )
            continue
        for projection in group:
            zone = loaded.get(projection.id)
            if zone is None:
                continue
            if guard.tripped():
                log.warning("Refresh stopped before all zones were processed")
                result.cancelled = True
                return
            _refresh_zone_records(uow, zone, source, result, task)


def _refresh_zone_records(
    uow: DnsUnitOfWork,
    zone: Zone,
    source: RemoteDnsSource,
    result: RefreshResult,
    task: SyncTask[Zone, RecordProjection, RemoteRecord, ZoneRecord],
) -> None:
    zone_id = zone.id
    scope = f"records of {zone.name}"
    listing = source.list_records(zone)
    if not listing.success:
        _record_failure(result, scope, FailureKind.FETCH, listing.error)
        return

    try:
        outcome = task.run(zone, listing.items, label=scope)
        uow.commit()
    except MutationError as exc:
        uow.rollback()
        _record_failure(result, scope, FailureKind.MUTATION, str(exc))
        return
    except PersistenceError as exc:
        uow.rollback()
        _record_failure(result, scope, FailureKind.STORE, str(exc))
        return
    if zone_id is not None:
        result.records[zone_id] = outcome


def _record_failure(
    result: RefreshResult,
    scope: str,
    kind: FailureKind,
    message: str | None,
) -> None:
    text = message or "unknown error"
    log.error(f"Skipping {scope}: {kind} failed: {text}")
    result.failures.append(ScopeFailure(scope=scope, kind=kind, message=text))


def _summarize(result: RefreshResult) -> str | None:
    parts: list[str] = []
    if result.failures:
        parts.append(f"{len(result.failures)} scope(s) failed")
    if result.cancelled:
        parts.append("refresh stopped before completion")
    return "; ".join(parts) or None
