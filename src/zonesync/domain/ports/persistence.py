"""Ports for the local DNS cache.

Stores are scope-qualified: zones live under an integration, records under a
zone. All writes are bulk calls; adapters raise ``PersistenceError`` when one
fails.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from zonesync.domain.model import (
    Integration,
    IntegrationStatus,
    RecordProjection,
    Zone,
    ZoneProjection,
    ZoneRecord,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator, Sequence


@runtime_checkable
class ScopedStore[TScope, TProjection, TEntity](Protocol):
    """Projection listing, batched loading and bulk mutation for one entity kind."""

    def list_projections(self, scope: TScope) -> Iterator[TProjection]: ...

    def list_by_ids(self, ids: Collection[int]) -> Iterator[TEntity]: ...

    def create(self, scope: TScope, entities: Sequence[TEntity]) -> None: ...

    def save(self, entities: Sequence[TEntity]) -> None: ...

    def remove(self, scope: TScope, projections: Sequence[TProjection]) -> None: ...


@runtime_checkable
class ZoneRepository(ScopedStore[Integration, ZoneProjection, Zone], Protocol):
    """Zones cached for an integration."""


@runtime_checkable
class RecordRepository(ScopedStore[Zone, RecordProjection, ZoneRecord], Protocol):
    """Records cached for a zone."""


@runtime_checkable
class IntegrationRepository(Protocol):
    def get(self, integration_id: int) -> Integration | None: ...

    def get_by_name(self, name: str) -> Integration | None: ...

    def add(self, integration: Integration) -> None: ...

    def update_status(
        self,
        integration: Integration,
        status: IntegrationStatus,
        message: str | None = None,
    ) -> None: ...
