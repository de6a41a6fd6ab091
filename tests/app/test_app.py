from __future__ import annotations

from datetime import timedelta

import pytest

from tests.helpers.dns import FakeDnsSource, FakeDnsWorld, remote_rrset, remote_zone
from zonesync import app as app_module
from zonesync.config import PowerDnsConfig
from zonesync.domain.model import IntegrationStatus, ServiceVersion


@pytest.fixture(autouse=True)
def _skip_database_startup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_module, "_ensure_started", lambda: None)
    monkeypatch.delenv("ZONESYNC_ZONE_BATCH_SIZE", raising=False)
    monkeypatch.delenv("ZONESYNC_REFRESH_TIMEOUT", raising=False)


def _config(**overrides: object) -> PowerDnsConfig:
    values: dict[str, object] = {
        "integration_name": "powerdns",
        "service_url": "https://dns.example.net:8081/api/v1",
        "api_key": "secret",
    }
    values.update(overrides)
    return PowerDnsConfig(**values)  # type: ignore[arg-type]


def test_ensure_integration_updates_existing_row() -> None:
    world = FakeDnsWorld()

    integration_id = app_module.ensure_integration(
        _config(service_version=ServiceVersion.V3, create_pointers=False),
        unit_of_work_factory=world.unit_of_work,
    )

    assert integration_id == world.integration_id
    assert world.integration.service_url == "https://dns.example.net:8081"
    assert world.integration.service_version is ServiceVersion.V3
    assert world.integration.create_pointers is False
    assert world.uow.commits == 1


def test_ensure_integration_registers_new_server() -> None:
    world = FakeDnsWorld()

    integration_id = app_module.ensure_integration(
        _config(integration_name="secondary"),
        unit_of_work_factory=world.unit_of_work,
    )

    assert integration_id != world.integration_id
    created = world.uow.repositories.integrations.get(integration_id)
    assert created is not None
    assert created.name == "secondary"


def test_refresh_powerdns_runs_full_refresh() -> None:
    world = FakeDnsWorld()
    source = FakeDnsSource(
        [remote_zone("example.com.")],
        {"example.com": [remote_rrset("www.example.com.", "A", "192.0.2.1")]},
    )

    result = app_module.refresh_powerdns(
        config=_config(),
        source=source,
        unit_of_work_factory=world.unit_of_work,
        zone_batch_size=10,
    )

    assert result.status is IntegrationStatus.OK
    assert result.zones is not None
    assert result.zones.added == 1
    assert world.outcomes_by_name(result)["example.com"].added == 1
    assert source.record_calls == ["example.com"]


def test_refresh_powerdns_uses_configured_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_refresh_integration(**kwargs: object) -> object:
        captured.update(kwargs)
        return app_module.RefreshResult(integration_id=1, status=IntegrationStatus.OK)

    monkeypatch.setattr(app_module, "refresh_integration", fake_refresh_integration)
    monkeypatch.setenv("ZONESYNC_REFRESH_TIMEOUT", "120")
    monkeypatch.setenv("ZONESYNC_ZONE_BATCH_SIZE", "7")
    world = FakeDnsWorld()

    app_module.refresh_powerdns(
        config=_config(),
        source=FakeDnsSource(),
        unit_of_work_factory=world.unit_of_work,
    )

    assert captured["timeout"] == timedelta(seconds=120)
    assert captured["zone_batch_size"] == 7


def test_refresh_powerdns_reports_unreachable_server() -> None:
    world = FakeDnsWorld()

    result = app_module.refresh_powerdns(
        config=_config(),
        source=FakeDnsSource(reachable=False),
        unit_of_work_factory=world.unit_of_work,
    )

    assert result.status is IntegrationStatus.ERROR
    assert world.integration.status is IntegrationStatus.ERROR
    assert world.integration.status_message == "PowerDNS not reachable"
