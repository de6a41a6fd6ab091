"""PowerDNS integration configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from zonesync.domain.model.enums import ServiceVersion

from .env import env_flag, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_INTEGRATION_NAME = "powerdns"
POWERDNS_TIMEOUT_SECONDS = 15.0
API_KEY_HEADER = "X-API-KEY"


def clean_service_url(url: str) -> str:
    """Reduce a configured service URL to ``scheme://host[:port]``.

    Operators tend to paste the API URL including a path; the path prefix is
    derived from the service version instead.
    """

    stripped = url.strip()
    slash_index = stripped.find("/", 10)
    if slash_index > 10:
        stripped = stripped[:slash_index]
    return stripped


@dataclass(frozen=True)
class PowerDnsConfig:
    """Holds connection and behaviour settings for one PowerDNS server."""

    integration_name: str
    service_url: str
    api_key: str
    service_version: ServiceVersion = ServiceVersion.V4
    domain_active: bool = True
    create_pointers: bool = True
    verify_tls: bool = True

    @property
    def base_url(self) -> str:
        return clean_service_url(self.service_url)

    def resilience(self) -> ResilienceConfig:
        return ResilienceConfig(
            name="powerdns",
            base_url=self.base_url,
            timeout_seconds=POWERDNS_TIMEOUT_SECONDS,
            verify_tls=self.verify_tls,
            retry=RetryPolicy(total=2),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            default_headers={
                API_KEY_HEADER: self.api_key,
                "Content-Type": "application/json",
            },
        )


def parse_service_version(value: str) -> ServiceVersion:
    try:
        return ServiceVersion(value.strip())
    except ValueError as exc:
        allowed = ", ".join(version.value for version in ServiceVersion)
        raise ConfigurationError(
            f"Unsupported PowerDNS version {value!r} (expected one of: {allowed})"
        ) from exc


def get_powerdns_config() -> PowerDnsConfig:
    values = require_env_vars(("POWERDNS_URL", "POWERDNS_API_KEY"))
    integration_name = os.getenv("POWERDNS_INTEGRATION", "").strip() or DEFAULT_INTEGRATION_NAME
    return PowerDnsConfig(
        integration_name=integration_name,
        service_url=values["POWERDNS_URL"],
        api_key=values["POWERDNS_API_KEY"],
        service_version=parse_service_version(os.getenv("POWERDNS_VERSION") or "4"),
        domain_active=env_flag("POWERDNS_DOMAIN_ACTIVE", default=True),
        create_pointers=env_flag("POWERDNS_CREATE_POINTERS", default=True),
        verify_tls=env_flag("POWERDNS_VERIFY_TLS", default=True),
    )
