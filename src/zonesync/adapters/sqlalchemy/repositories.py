"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import Table, delete, select
from sqlalchemy.exc import SQLAlchemyError

from zonesync.adapters.sqlalchemy.mappings import (
    integration_table,
    zone_record_table,
    zone_table,
)
from zonesync.domain.errors import PersistenceError
from zonesync.domain.model import (
    Integration,
    IntegrationStatus,
    RecordProjection,
    Zone,
    ZoneProjection,
    ZoneRecord,
)
from zonesync.domain.ports.persistence import (
    IntegrationRepository,
    RecordRepository,
    ZoneRepository,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator, Sequence

    from sqlalchemy import Column
    from sqlalchemy.orm import Session

log = getLogger(__name__)


def _require_id(value: int | None, what: str) -> int:
    if value is None:
        raise PersistenceError(f"{what} has not been persisted yet")
    return value


class SqlAlchemyIntegrationRepository(IntegrationRepository):
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, integration_id: int) -> Integration | None:
        return self.session.get(Integration, integration_id)

    def get_by_name(self, name: str) -> Integration | None:
        stmt = select(Integration).where(integration_table.c.name == name).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def add(self, integration: Integration) -> None:
        self.session.add(integration)
        self.session.flush()

    def update_status(
        self,
        integration: Integration,
        status: IntegrationStatus,
        message: str | None = None,
    ) -> None:
        integration.mark_status(status, message)
        self.session.add(integration)


class SqlAlchemyScopedRepository[TScope, TProjection, TEntity](ABC):
    """Shared bulk operations for entities living under a parent scope.

    Projections are read as plain column tuples so matching never hydrates
    full entities; removals are bulk deletes restricted to the scope.
    """

    table: Table
    entity_cls: type[TEntity]
    scope_column: str

    def __init__(self, session: Session) -> None:
        self.session = session

    @abstractmethod
    def _projection(
        self, row_id: int, scope_id: int, external_id: str | None, name: str
    ) -> TProjection: ...

    @abstractmethod
    def _scope_id(self, scope: TScope) -> int: ...

    @abstractmethod
    def _attach(self, scope_id: int, entity: TEntity) -> None: ...

    @abstractmethod
    def _projection_id(self, projection: TProjection) -> int: ...

    @property
    def _scope_col(self) -> Column[int]:
        return self.table.c[self.scope_column]

    def list_projections(self, scope: TScope) -> Iterator[TProjection]:
        stmt = (
            select(
                self.table.c.id,
                self._scope_col,
                self.table.c.external_id,
                self.table.c.name,
            )
            .where(self._scope_col == self._scope_id(scope))
            .order_by(self.table.c.id)
        )
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Listing {self.table.name} projections failed") from exc
        for row_id, scope_id, external_id, name in rows:
            yield self._projection(row_id, scope_id, external_id, name)

    def list_by_ids(self, ids: Collection[int]) -> Iterator[TEntity]:
        if not ids:
            return iter(())
        stmt = select(self.entity_cls).where(self.table.c.id.in_(list(ids)))
        try:
            entities = list(self.session.scalars(stmt))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Loading {self.table.name} rows failed") from exc
        return iter(entities)

    def create(self, scope: TScope, entities: Sequence[TEntity]) -> None:
        scope_id = self._scope_id(scope)
        for entity in entities:
            self._attach(scope_id, entity)
        self._flush_all(entities, "create")

    def save(self, entities: Sequence[TEntity]) -> None:
        self._flush_all(entities, "save")

    def remove(self, scope: TScope, projections: Sequence[TProjection]) -> None:
        ids = [self._projection_id(projection) for projection in projections]
        if not ids:
            return
        try:
            self._remove_children(ids)
            stmt = (
                delete(self.entity_cls)
                .where(self._scope_col == self._scope_id(scope))
                .where(self.table.c.id.in_(ids))
                .execution_options(synchronize_session="fetch")
            )
            self.session.execute(stmt)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Removing {len(ids)} {self.table.name} rows failed") from exc

    def _remove_children(self, ids: Sequence[int]) -> None:
        _ = ids

    def _flush_all(self, entities: Sequence[TEntity], operation: str) -> None:
        try:
            self.session.add_all(entities)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Bulk {operation} of {len(entities)} {self.table.name} rows failed"
            ) from exc


class SqlAlchemyZoneRepository(
    SqlAlchemyScopedRepository[Integration, ZoneProjection, Zone],
    ZoneRepository,
):
    table = zone_table
    entity_cls = Zone
    scope_column = "integration_id"

    def _projection(
        self, row_id: int, scope_id: int, external_id: str | None, name: str
    ) -> ZoneProjection:
        return ZoneProjection(
            id=row_id, integration_id=scope_id, external_id=external_id, name=name
        )

    def _scope_id(self, scope: Integration) -> int:
        return _require_id(scope.id, f"Integration {scope.name}")

    def _attach(self, scope_id: int, entity: Zone) -> None:
        entity.integration_id = scope_id

    def _projection_id(self, projection: ZoneProjection) -> int:
        return projection.id

    def _remove_children(self, ids: Sequence[int]) -> None:
        log.debug(f"Removing records of {len(ids)} zones")
        stmt = (
            delete(ZoneRecord)
            .where(zone_record_table.c.zone_id.in_(list(ids)))
            .execution_options(synchronize_session="fetch")
        )
        self.session.execute(stmt)


class SqlAlchemyRecordRepository(
    SqlAlchemyScopedRepository[Zone, RecordProjection, ZoneRecord],
    RecordRepository,
):
    table = zone_record_table
    entity_cls = ZoneRecord
    scope_column = "zone_id"

    def _projection(
        self, row_id: int, scope_id: int, external_id: str | None, name: str
    ) -> RecordProjection:
        return RecordProjection(id=row_id, zone_id=scope_id, external_id=external_id, name=name)

    def _scope_id(self, scope: Zone) -> int:
        return _require_id(scope.id, f"Zone {scope.name}")

    def _attach(self, scope_id: int, entity: ZoneRecord) -> None:
        entity.zone_id = scope_id

    def _projection_id(self, projection: RecordProjection) -> int:
        return projection.id
