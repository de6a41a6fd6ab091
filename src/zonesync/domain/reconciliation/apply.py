"""Bulk mutation of the local store for one classified scope."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from zonesync.domain.errors import MutationError, PersistenceError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from zonesync.domain.ports.persistence import ScopedStore

log = getLogger(__name__)


@dataclass(slots=True)
class MutationApplier[TScope, TProjection, TEntity]:
    """Translate classification sets into scope-qualified bulk store calls.

    Every method issues at most one store call and none at all for an empty
    set. Store failures surface as ``MutationError`` carrying the scope label
    and the operation name.
    """

    store: ScopedStore[TScope, TProjection, TEntity]
    scope_label: str

    def create(self, scope: TScope, entities: Sequence[TEntity]) -> int:
        return self._bulk("create", entities, lambda: self.store.create(scope, entities))

    def save(self, entities: Sequence[TEntity]) -> int:
        return self._bulk("save", entities, lambda: self.store.save(entities))

    def remove(self, scope: TScope, projections: Sequence[TProjection]) -> int:
        return self._bulk("remove", projections, lambda: self.store.remove(scope, projections))

    def _bulk(self, operation: str, items: Sequence[object], call: Callable[[], None]) -> int:
        if not items:
            return 0
        try:
            call()
        except PersistenceError as exc:
            log.error(f"Bulk {operation} of {len(items)} item(s) failed for {self.scope_label}")
            raise MutationError(
                f"{operation} failed for {self.scope_label}: {exc}",
                scope=self.scope_label,
                operation=operation,
            ) from exc
        log.debug("Bulk %s of %s item(s) for %s", operation, len(items), self.scope_label)
        return len(items)
