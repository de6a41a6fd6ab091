"""Port for manual record administration on the remote DNS service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from zonesync.domain.model import Zone, ZoneRecord


@runtime_checkable
class RemoteRecordEditor(Protocol):
    def create_record(self, zone: Zone, record: ZoneRecord) -> str:
        """Create or replace ``record`` remotely and return its external id."""
        ...

    def delete_record(self, zone: Zone, record: ZoneRecord) -> None: ...


__all__ = ["RemoteRecordEditor"]
