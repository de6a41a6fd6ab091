"""Items as reported by the authoritative DNS service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RemoteZone:
    name: str
    kind: str | None = None
    url: str | None = None
    serial: int | None = None
    dnssec: bool = False
    remote_id: str | None = None


@dataclass(frozen=True, slots=True)
class RemoteRecord:
    """One record set.

    ``content`` is filled by the single-record schema (API v3); ``contents``
    holds every value of an rrset (API v4). ``comments`` keeps whatever shape
    the service returned.
    """

    name: str
    type: str
    ttl: int | None = None
    content: str | None = None
    contents: tuple[str, ...] = ()
    comments: object = None
