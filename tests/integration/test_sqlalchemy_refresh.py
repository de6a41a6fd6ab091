from __future__ import annotations

from typing import TYPE_CHECKING

from tests.helpers.dns import FakeDnsSource, remote_rrset, remote_zone
from zonesync.domain.data_integration import refresh_integration
from zonesync.domain.model import Integration, IntegrationStatus, RemoteRecord, ServiceVersion

if TYPE_CHECKING:
    from collections.abc import Callable

    from zonesync.adapters.sqlalchemy.unit_of_work import SqlAlchemyDnsUnitOfWork


def _register(factory: Callable[[], SqlAlchemyDnsUnitOfWork], version: ServiceVersion) -> int:
    with factory() as uow:
        integration = Integration(
            name="powerdns",
            service_url="https://dns.example.net:8081",
            service_version=version,
        )
        uow.repositories.integrations.add(integration)
        uow.commit()
        assert integration.id is not None
        return integration.id


def _snapshot(
    factory: Callable[[], SqlAlchemyDnsUnitOfWork], integration_id: int
) -> dict[str, dict[str, str | None]]:
    snapshot: dict[str, dict[str, str | None]] = {}
    with factory() as uow:
        integration = uow.repositories.integrations.get(integration_id)
        assert integration is not None
        zones = uow.repositories.zones
        records = uow.repositories.records
        projections = list(zones.list_projections(integration))
        for zone in zones.list_by_ids([p.id for p in projections]):
            record_ids = [p.id for p in records.list_projections(zone)]
            snapshot[zone.name] = {
                record.external_id or "": record.content
                for record in records.list_by_ids(record_ids)
            }
    return snapshot


def test_refresh_mirrors_remote_and_is_idempotent(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDnsUnitOfWork],
) -> None:
    integration_id = _register(sqlite_unit_of_work, ServiceVersion.V4)
    source = FakeDnsSource(
        [remote_zone("example.com.", serial=5), remote_zone("example.org.", serial=9)],
        {
            "example.com": [
                remote_rrset("www.example.com.", "A", "192.0.2.1", "192.0.2.2"),
                remote_rrset("example.com.", "MX", "10 mail.example.com."),
            ],
            "example.org": [remote_rrset("example.org.", "NS", "ns1.example.org.")],
        },
    )

    first = refresh_integration(
        integration_id=integration_id,
        source=source,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    second = refresh_integration(
        integration_id=integration_id,
        source=source,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert first.zones is not None and first.zones.added == 2
    assert second.zones is not None and second.zones.total_changes == 0
    assert all(outcome.total_changes == 0 for outcome in second.records.values())
    assert _snapshot(sqlite_unit_of_work, integration_id) == {
        "example.com": {
            "A:www.example.com.": "192.0.2.1\n192.0.2.2",
            "MX:example.com.": "10 mail.example.com.",
        },
        "example.org": {"NS:example.org.": "ns1.example.org."},
    }


def test_refresh_applies_remote_changes_and_deletions(
    sqlite_unit_of_work: Callable[[], SqlAlchemyDnsUnitOfWork],
) -> None:
    integration_id = _register(sqlite_unit_of_work, ServiceVersion.V3)
    initial = FakeDnsSource(
        [remote_zone("example.com", serial=1), remote_zone("gone.example", serial=1)],
        {
            "example.com": [
                RemoteRecord(name="foo.example.com", type="A", content="9.9.9.9"),
                RemoteRecord(name="old.example.com", type="A", content="192.0.2.50"),
            ],
            "gone.example": [RemoteRecord(name="gone.example", type="SOA", content="x")],
        },
    )
    refresh_integration(
        integration_id=integration_id,
        source=initial,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    changed = FakeDnsSource(
        [remote_zone("example.com", serial=2)],
        {"example.com": [RemoteRecord(name="foo.example.com", type="A", content="1.2.3.4")]},
    )
    result = refresh_integration(
        integration_id=integration_id,
        source=changed,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert result.zones is not None
    assert (result.zones.updated, result.zones.removed) == (1, 1)
    (outcome,) = result.records.values()
    assert (outcome.updated, outcome.removed) == (1, 1)
    assert _snapshot(sqlite_unit_of_work, integration_id) == {
        "example.com": {"A:foo.example.com": "1.2.3.4"},
    }
    with sqlite_unit_of_work() as uow:
        integration = uow.repositories.integrations.get(integration_id)
        assert integration is not None
        assert integration.status is IntegrationStatus.OK
