from __future__ import annotations

from datetime import timedelta

import pytest

from tests.helpers.dns import (
    FakeDnsSource,
    FakeDnsWorld,
    make_record,
    make_zone,
    remote_rrset,
    remote_zone,
)
from zonesync.domain.data_integration import (
    UNREACHABLE_MESSAGE,
    RefreshResult,
    refresh_integration,
)
from zonesync.domain.errors import IntegrationNotFoundError
from zonesync.domain.model import FailureKind, IntegrationStatus


def _refresh(world: FakeDnsWorld, source: FakeDnsSource, **kwargs: object) -> RefreshResult:
    return refresh_integration(
        integration_id=world.integration_id,
        source=source,
        unit_of_work_factory=world.unit_of_work,
        **kwargs,  # type: ignore[arg-type]
    )


def test_refresh_creates_zones_then_their_records() -> None:
    world = FakeDnsWorld()
    source = FakeDnsSource(
        [remote_zone("example.com.", serial=5)],
        {"example.com": [remote_rrset("www.example.com.", "A", "192.0.2.1")]},
    )

    result = _refresh(world, source)

    assert result.status is IntegrationStatus.OK
    assert result.message is None
    assert result.zones is not None and result.zones.added == 1
    assert world.outcomes_by_name(result)["example.com"].added == 1
    (zone,) = world.zones.entities.values()
    (record,) = world.records.entities.values()
    assert record.zone_id == zone.id
    assert world.integration.status is IntegrationStatus.OK
    assert world.uow.commits == 3


def test_unreachable_source_marks_error_without_mutation() -> None:
    world = FakeDnsWorld()
    world.zones.seed(make_zone("example.com", integration_id=world.integration_id))
    source = FakeDnsSource([], reachable=False)

    result = _refresh(world, source)

    assert result.status is IntegrationStatus.ERROR
    assert result.message == UNREACHABLE_MESSAGE
    assert world.integration.status is IntegrationStatus.ERROR
    assert world.integration.status_message == "PowerDNS not reachable"
    assert world.zones.calls == []
    assert len(world.zones.entities) == 1
    assert world.uow.commits == 1


def test_zone_listing_failure_skips_zone_pass_but_refreshes_known_zones() -> None:
    world = FakeDnsWorld()
    zone = make_zone("example.com", integration_id=world.integration_id)
    world.zones.seed(zone)
    source = FakeDnsSource(
        zone_error="HTTP 500",
        records={"example.com": [remote_rrset("www.example.com.")]},
    )

    result = _refresh(world, source)

    assert result.zones is None
    assert [failure.kind for failure in result.failures] == [FailureKind.FETCH]
    assert world.zones.calls == []
    assert world.outcomes_by_name(result)["example.com"].added == 1
    assert result.status is IntegrationStatus.OK
    assert result.message == "1 scope(s) failed"


def test_record_fetch_failure_skips_only_that_zone() -> None:
    world = FakeDnsWorld()
    source = FakeDnsSource(
        [remote_zone("a.example."), remote_zone("b.example.")],
        {"b.example": [remote_rrset("www.b.example.")]},
        record_errors={"a.example": "timeout"},
    )

    result = _refresh(world, source)

    assert "a.example" not in world.outcomes_by_name(result)
    assert world.outcomes_by_name(result)["b.example"].added == 1
    assert result.failures[0].scope == "records of a.example"
    assert result.partial


def test_mutation_error_rolls_back_scope_and_continues() -> None:
    world = FakeDnsWorld()
    first = make_zone("a.example", integration_id=world.integration_id)
    second = make_zone("b.example", integration_id=world.integration_id)
    world.zones.seed(first, second)
    world.records.seed(make_record("old", zone_id=first.id or 0))
    world.records.fail_on.add("remove")
    source = FakeDnsSource(
        [remote_zone("a.example."), remote_zone("b.example.")],
        {"b.example": [remote_rrset("www.b.example.")]},
    )

    result = _refresh(world, source)

    assert world.uow.rollbacks == 1
    assert [(f.scope, f.kind) for f in result.failures] == [
        ("records of a.example", FailureKind.MUTATION)
    ]
    assert world.outcomes_by_name(result)["b.example"].added == 1


def test_store_read_failure_rolls_back_scope_and_continues() -> None:
    world = FakeDnsWorld()
    first = make_zone("a.example", integration_id=world.integration_id)
    second = make_zone("b.example", integration_id=world.integration_id)
    world.zones.seed(first, second)
    world.records.unreadable_scopes.add(first.id or 0)
    source = FakeDnsSource(
        [remote_zone("a.example."), remote_zone("b.example.")],
        {
            "a.example": [remote_rrset("www.a.example.")],
            "b.example": [remote_rrset("www.b.example.")],
        },
    )

    result = _refresh(world, source)

    assert source.record_calls == ["a.example", "b.example"]
    assert world.uow.rollbacks == 1
    assert [(f.scope, f.kind) for f in result.failures] == [
        ("records of a.example", FailureKind.STORE)
    ]
    assert world.outcomes_by_name(result)["b.example"].added == 1
    assert world.integration.status is IntegrationStatus.OK
    assert world.integration.status_message == "1 scope(s) failed"

def test_record_outcomes_are_kept_per_zone_id() -> None:
    world = FakeDnsWorld()
    upper = make_zone("Example.com", integration_id=world.integration_id)
    lower = make_zone("example.com", integration_id=world.integration_id)
    world.zones.seed(upper, lower)
    source = FakeDnsSource(
        zone_error="HTTP 500",
        records={
            "Example.com": [remote_rrset("www.example.com.")],
            "example.com": [remote_rrset("www.example.com."), remote_rrset("mail.example.com.")],
        },
    )

    result = _refresh(world, source)

    assert result.records.keys() == {upper.id, lower.id}
    assert result.records[upper.id or 0].added == 1
    assert result.records[lower.id or 0].added == 2

def test_zone_projections_are_loaded_in_fixed_size_groups() -> None:
    world = FakeDnsWorld()
    zones = [
        make_zone(f"z{index:03d}.example", integration_id=world.integration_id)
        for index in range(120)
    ]
    world.zones.seed(*zones)
    source = FakeDnsSource([remote_zone(zone.fqdn, serial=None) for zone in zones])

    result = _refresh(world, source, zone_batch_size=50)

    assert [len(ids) for ids in world.zones.load_calls[-3:]] == [50, 50, 20]
    assert source.record_calls == [zone.name for zone in zones]
    assert len(result.records) == 120


def test_should_stop_cancels_between_zones() -> None:
    world = FakeDnsWorld()
    world.zones.seed(
        make_zone("a.example", integration_id=world.integration_id),
        make_zone("b.example", integration_id=world.integration_id),
    )
    source = FakeDnsSource([remote_zone("a.example."), remote_zone("b.example.")])

    def stop_after_first_zone() -> bool:
        return len(source.record_calls) >= 1

    result = _refresh(world, source, should_stop=stop_after_first_zone)

    assert source.record_calls == ["a.example"]
    assert result.cancelled
    assert result.message == "refresh stopped before completion"
    assert world.integration.status is IntegrationStatus.OK


def test_timeout_is_checked_against_clock() -> None:
    world = FakeDnsWorld()
    world.zones.seed(make_zone("a.example", integration_id=world.integration_id))
    source = FakeDnsSource([remote_zone("a.example.")])
    ticks = iter([0.0, 100.0, 100.0, 100.0])

    result = _refresh(world, source, timeout=timedelta(seconds=10), clock=lambda: next(ticks))

    assert result.cancelled
    assert source.record_calls == []
    assert world.zones.calls == []


def test_unknown_integration_raises() -> None:
    world = FakeDnsWorld()

    with pytest.raises(IntegrationNotFoundError):
        refresh_integration(
            integration_id=-1,
            source=FakeDnsSource(),
            unit_of_work_factory=world.unit_of_work,
        )
