from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from zonesync.adapters.sqlalchemy.repositories import (
    SqlAlchemyIntegrationRepository,
    SqlAlchemyRecordRepository,
    SqlAlchemyZoneRepository,
)
from zonesync.domain.errors import PersistenceError
from zonesync.domain.model import (
    Integration,
    IntegrationStatus,
    RecordSource,
    RefSource,
    ServiceVersion,
    Zone,
    ZoneRecord,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def _integration(session: Session, name: str = "powerdns") -> Integration:
    integration = Integration(
        name=name,
        service_url="https://dns.example.net",
        service_version=ServiceVersion.V4,
    )
    SqlAlchemyIntegrationRepository(session).add(integration)
    return integration


def _zones(session: Session, integration: Integration, *names: str) -> list[Zone]:
    zones = [Zone(name=name, fqdn=f"{name}.", ref_source=RefSource.INTEGRATION) for name in names]
    SqlAlchemyZoneRepository(session).create(integration, zones)
    return zones


def test_integration_repository_round_trip(sqlite_session: Session) -> None:
    repo = SqlAlchemyIntegrationRepository(sqlite_session)
    integration = _integration(sqlite_session)

    repo.update_status(integration, IntegrationStatus.ERROR, "PowerDNS not reachable")
    sqlite_session.commit()

    assert integration.id is not None
    loaded = repo.get_by_name("powerdns")
    assert loaded is integration
    assert loaded.status is IntegrationStatus.ERROR
    assert loaded.status_date is not None
    assert loaded.status_date.tzinfo is not None
    assert repo.get(integration.id) is integration
    assert repo.get_by_name("other") is None


def test_zone_projections_are_scoped_and_ordered(sqlite_session: Session) -> None:
    first = _integration(sqlite_session, "first")
    second = _integration(sqlite_session, "second")
    a, b = _zones(sqlite_session, first, "a.example", "b.example")
    _zones(sqlite_session, second, "c.example")

    projections = list(SqlAlchemyZoneRepository(sqlite_session).list_projections(first))

    assert [(p.id, p.name) for p in projections] == [(a.id, "a.example"), (b.id, "b.example")]
    assert all(p.integration_id == first.id for p in projections)


def test_list_by_ids_loads_full_entities(sqlite_session: Session) -> None:
    integration = _integration(sqlite_session)
    zones = _zones(sqlite_session, integration, "a.example", "b.example", "c.example")
    repo = SqlAlchemyZoneRepository(sqlite_session)

    loaded = list(repo.list_by_ids([zones[0].id or 0, zones[2].id or 0]))

    assert {zone.name for zone in loaded} == {"a.example", "c.example"}
    assert list(repo.list_by_ids([])) == []


def test_save_persists_field_changes(sqlite_session: Session) -> None:
    integration = _integration(sqlite_session)
    (zone,) = _zones(sqlite_session, integration, "a.example")
    sqlite_session.commit()

    zone.domain_serial = 42
    SqlAlchemyZoneRepository(sqlite_session).save([zone])
    sqlite_session.commit()
    sqlite_session.expire_all()

    (reloaded,) = SqlAlchemyZoneRepository(sqlite_session).list_by_ids([zone.id or 0])
    assert reloaded.domain_serial == 42


def test_zone_removal_takes_records_along(sqlite_session: Session) -> None:
    integration = _integration(sqlite_session)
    doomed, kept = _zones(sqlite_session, integration, "doomed.example", "kept.example")
    records = SqlAlchemyRecordRepository(sqlite_session)
    records.create(doomed, [ZoneRecord(name="www", type="A", source=RecordSource.SYNC)])
    records.create(kept, [ZoneRecord(name="www", type="A", source=RecordSource.SYNC)])
    zones = SqlAlchemyZoneRepository(sqlite_session)

    (doomed_projection,) = [
        p for p in zones.list_projections(integration) if p.name == "doomed.example"
    ]
    zones.remove(integration, [doomed_projection])
    sqlite_session.commit()

    assert [p.name for p in zones.list_projections(integration)] == ["kept.example"]
    assert list(records.list_projections(doomed)) == []
    assert len(list(records.list_projections(kept))) == 1


def test_remove_is_restricted_to_scope(sqlite_session: Session) -> None:
    integration = _integration(sqlite_session)
    a, b = _zones(sqlite_session, integration, "a.example", "b.example")
    records = SqlAlchemyRecordRepository(sqlite_session)
    records.create(a, [ZoneRecord(name="www", type="A", external_id="A:www.a.example.")])
    (projection,) = records.list_projections(a)

    records.remove(b, [projection])

    assert len(list(records.list_projections(a))) == 1


def test_create_requires_persisted_scope(sqlite_session: Session) -> None:
    transient = Zone(name="x.example", fqdn="x.example.")

    with pytest.raises(PersistenceError):
        SqlAlchemyRecordRepository(sqlite_session).create(
            transient, [ZoneRecord(name="www", type="A")]
        )


def test_flush_failure_becomes_persistence_error(sqlite_session: Session) -> None:
    integration = _integration(sqlite_session)
    nameless = Zone(name=None, fqdn="x.", integration_id=integration.id)  # type: ignore[arg-type]

    with pytest.raises(PersistenceError):
        SqlAlchemyZoneRepository(sqlite_session).save([nameless])
