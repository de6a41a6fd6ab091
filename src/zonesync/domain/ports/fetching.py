"""Ports for fetching the authoritative DNS listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from zonesync.domain.model import RemoteRecord, RemoteZone, Zone


@dataclass(frozen=True, slots=True)
class FetchResult[TItem]:
    """Outcome of one remote listing call; failures are values, not exceptions."""

    success: bool
    items: tuple[TItem, ...] = ()
    error: str | None = None

    @classmethod
    def ok(cls, items: Iterable[TItem]) -> FetchResult[TItem]:
        return cls(success=True, items=tuple(items))

    @classmethod
    def failure(cls, error: str) -> FetchResult[TItem]:
        return cls(success=False, error=error)


@runtime_checkable
class RemoteDnsSource(Protocol):
    """Read access to the zones and records of a remote DNS service."""

    def ensure_reachable(self) -> None:
        """Raise ``ConnectivityError`` when the service host cannot be reached."""
        ...

    def list_zones(self) -> FetchResult[RemoteZone]: ...

    def list_records(self, zone: Zone) -> FetchResult[RemoteRecord]: ...


__all__ = ["FetchResult", "RemoteDnsSource"]
