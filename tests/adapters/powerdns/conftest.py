"""Shared fixtures for PowerDNS adapter tests."""

from __future__ import annotations

import pytest

from zonesync.config import PowerDnsConfig
from zonesync.domain.model import ServiceVersion


@pytest.fixture
def v4_config() -> PowerDnsConfig:
    return PowerDnsConfig(
        integration_name="powerdns",
        service_url="https://dns.example.net:8081/api/v1/servers",
        api_key="secret",
        service_version=ServiceVersion.V4,
    )


@pytest.fixture
def v3_config() -> PowerDnsConfig:
    return PowerDnsConfig(
        integration_name="legacy",
        service_url="http://pdns3.example.net:8081",
        api_key="secret",
        service_version=ServiceVersion.V3,
        create_pointers=False,
    )
