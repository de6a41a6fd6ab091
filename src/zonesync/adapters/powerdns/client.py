"""HTTP client for the PowerDNS authoritative server API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

import httpx
from pydantic import TypeAdapter

from zonesync.adapters.http_resilience import ResilienceConfig, ResilientClient
from zonesync.domain.errors import ConnectivityError, FetchError
from zonesync.domain.model import ServiceVersion
from zonesync.domain.naming import fqdn_domain_name, friendly_domain_name
from zonesync.domain.ports.fetching import FetchResult, RemoteDnsSource

from .schema import ErrorPayload, ZoneDetailPayload, ZonePayload
from .translator import parse_zone, parse_zone_records

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from zonesync.config.powerdns import PowerDnsConfig
    from zonesync.domain.model import RemoteRecord, RemoteZone, Zone, ZoneRecord

log = getLogger(__name__)

DEFAULT_RECORD_TTL = 86400
ZONES_PATH = "/servers/localhost/zones"
API_V1_PREFIX = "/api/v1"

type ChangeType = Literal["REPLACE", "DELETE"]

_ZONE_LIST = TypeAdapter(list[ZonePayload])


class PowerDnsAPIError(RuntimeError):
    """Raised when the PowerDNS API answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def api_path(version: ServiceVersion, path: str) -> str:
    """Prefix ``path`` for the API generation (v3 has no prefix)."""

    if version == ServiceVersion.V3:
        return path
    return f"{API_V1_PREFIX}{path}"


def clean_api_path(path: str) -> str:
    return path[1:] if path.startswith("//") else path


def zone_path(zone: Zone) -> str:
    if not zone.external_id:
        raise PowerDnsAPIError(f"Zone {zone.name} has no PowerDNS url")
    return clean_api_path(f"/{zone.external_id}")


def rrset_name(version: ServiceVersion, fqdn: str) -> str:
    if version == ServiceVersion.V3:
        return friendly_domain_name(fqdn)
    return fqdn_domain_name(fqdn)


def rrset_change_body(
    version: ServiceVersion,
    *,
    fqdn: str,
    record_type: str,
    content: str | None,
    changetype: ChangeType,
    ttl: int = DEFAULT_RECORD_TTL,
    create_pointer: bool = False,
) -> dict[str, object]:
    """Build the ``PATCH`` body replacing or deleting one rrset.

    v3 servers address the rrset by its name without the trailing dot and
    expect name, ttl and type repeated on every record; v4 servers take the
    fully-qualified name.
    """

    name = rrset_name(version, fqdn)
    if version == ServiceVersion.V3:
        record: dict[str, object] = {
            "content": content,
            "disabled": False,
            "name": name,
            "ttl": ttl,
            "type": record_type,
        }
        if changetype == "REPLACE":
            record["set-ptr"] = create_pointer
    else:
        record = {"content": content, "disabled": False}
    return {
        "rrsets": [
            {
                "name": name,
                "type": record_type,
                "ttl": ttl,
                "changetype": changetype,
                "records": [record],
            }
        ]
    }


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorPayload.model_validate(response.json()).error
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"


def _raise_for_error(response: httpx.Response) -> None:
    if not response.is_error:
        return
    message = _error_message(response)
    log.error(f"PowerDNS API error {response.status_code}: {message}")
    raise PowerDnsAPIError(message, status_code=response.status_code)


def _fetch[T](what: str, listing: Coroutine[Any, Any, T]) -> T:
    """Run one listing call, turning transport, API and payload errors into ``FetchError``."""

    try:
        return asyncio.run(listing)
    except (httpx.HTTPError, ValueError, PowerDnsAPIError) as exc:
        raise FetchError(f"{what} failed: {exc}") from exc


@dataclass(slots=True)
class PowerDnsSource:
    """Synchronous ``RemoteDnsSource`` backed by the async PowerDNS API client."""

    config: PowerDnsConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def version(self) -> ServiceVersion:
        return self.config.service_version

    def ensure_reachable(self) -> None:
        try:
            asyncio.run(self._ping())
        except httpx.TransportError as exc:
            log.warning(f"PowerDNS at {self.config.base_url} not reachable: {exc}")
            raise ConnectivityError(f"PowerDNS not reachable at {self.config.base_url}") from exc

    def list_zones(self) -> FetchResult[RemoteZone]:
        try:
            zones = _fetch("zone listing", self._list_zones())
        except FetchError as exc:
            log.warning(f"Listing PowerDNS zones failed: {exc}")
            return FetchResult.failure(str(exc))
        return FetchResult.ok(zones)

    def list_records(self, zone: Zone) -> FetchResult[RemoteRecord]:
        try:
            records = _fetch(f"record listing for {zone.name}", self._list_records(zone))
        except FetchError as exc:
            log.warning(f"Listing records of zone {zone.name} failed: {exc}")
            return FetchResult.failure(str(exc))
        return FetchResult.ok(records)

    def create_record(self, zone: Zone, record: ZoneRecord) -> str:
        """Replace the rrset of ``record`` on the server and return its external id."""

        body = self._record_body(record, changetype="REPLACE")
        asyncio.run(self._patch_zone(zone, body))
        return rrset_name(self.version, self._record_fqdn(record))

    def delete_record(self, zone: Zone, record: ZoneRecord) -> None:
        body = self._record_body(record, changetype="DELETE")
        asyncio.run(self._patch_zone(zone, body))

    @staticmethod
    def _record_fqdn(record: ZoneRecord) -> str:
        return fqdn_domain_name(record.fqdn or record.name)

    def _record_body(self, record: ZoneRecord, *, changetype: ChangeType) -> dict[str, object]:
        return rrset_change_body(
            self.version,
            fqdn=self._record_fqdn(record),
            record_type=record.type,
            content=record.content,
            changetype=changetype,
            ttl=DEFAULT_RECORD_TTL if changetype == "DELETE" else record.ttl or DEFAULT_RECORD_TTL,
            create_pointer=self.config.create_pointers,
        )

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    async def _ping(self) -> None:
        async with self.client_factory(self.config.resilience()) as client:
            response = await client.get(self._url("/"))
            log.debug(f"PowerDNS probe answered {response.status_code}")

    async def _list_zones(self) -> list[RemoteZone]:
        async with self.client_factory(self.config.resilience()) as client:
            response = await client.get(self._url(api_path(self.version, ZONES_PATH)))
            _raise_for_error(response)
            payloads = _ZONE_LIST.validate_python(response.json())
        return [parse_zone(payload) for payload in payloads]

    async def _list_records(self, zone: Zone) -> list[RemoteRecord]:
        async with self.client_factory(self.config.resilience()) as client:
            response = await client.get(self._url(zone_path(zone)))
            _raise_for_error(response)
            payload = ZoneDetailPayload.model_validate(response.json())
        return parse_zone_records(payload, self.version)

    async def _patch_zone(self, zone: Zone, body: dict[str, object]) -> None:
        async with self.client_factory(self.config.resilience()) as client:
            response = await client.patch(self._url(zone_path(zone)), json=body)
            log.info(f"PowerDNS rrset change on {zone.name} answered {response.status_code}")
            _raise_for_error(response)


if TYPE_CHECKING:
    _source_check: RemoteDnsSource = PowerDnsSource(
        PowerDnsConfig(integration_name="", service_url="", api_key="")
    )
