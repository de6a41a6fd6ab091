"""One reconciliation pass over a single scope.

The engine composes the stages but knows nothing about DNS: callers supply
the matcher chain, the store, how to build an entity for a new remote item and
which field values a remote item implies for an existing entity. Zones and
records both run through ``SyncTask``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .apply import MutationApplier
from .classify import classify
from .contracts import SyncOutcome
from .fields import apply_field_changes
from .load import HasId, load_update_items

if TYPE_CHECKING:
    from collections.abc import Iterable

    from zonesync.domain.ports.persistence import ScopedStore

    from .contracts import Classification, UpdateItem
    from .matching import MatcherChain

log = getLogger(__name__)

type BuildEntity[TScope, TRemote, TEntity] = Callable[[TScope, TRemote], TEntity]
type DesiredFields[TEntity, TRemote] = Callable[[TEntity, TRemote], Mapping[str, object]]


@dataclass(slots=True)
class SyncTask[TScope, TProjection: HasId, TRemote, TEntity: HasId]:
    name: str
    matchers: MatcherChain[TProjection, TRemote]
    store: ScopedStore[TScope, TProjection, TEntity]
    build: BuildEntity[TScope, TRemote, TEntity]
    desired_fields: DesiredFields[TEntity, TRemote]

    def classify(
        self,
        scope: TScope,
        remote_items: Iterable[TRemote],
    ) -> Classification[TProjection, TRemote]:
        """Classify ``remote_items`` against the scope's projections without writing."""

        return classify(self.store.list_projections(scope), remote_items, self.matchers)

    def run(
        self,
        scope: TScope,
        remote_items: Iterable[TRemote],
        *,
        label: str | None = None,
    ) -> SyncOutcome:
        """Classify, then remove, create and update; each step completes before the next."""

        scope_label = label or self.name
        classification = self.classify(scope, remote_items)
        applier = MutationApplier(self.store, scope_label=scope_label)
        outcome = SyncOutcome()

        outcome.removed = applier.remove(scope, classification.to_delete)

        new_entities = [self.build(scope, remote) for remote in classification.to_add]
        outcome.added = applier.create(scope, new_entities)

        update_items = load_update_items(classification.to_update, self.store.list_by_ids)
        dirty = self._reconcile_fields(update_items, scope_label)
        outcome.updated = applier.save(dirty)
        outcome.unchanged = len(update_items) - len(dirty)

        log.info(f"{scope_label}: {outcome.summary()}")
        return outcome

    def _reconcile_fields(
        self,
        update_items: list[UpdateItem[TEntity, TRemote]],
        scope_label: str,
    ) -> list[TEntity]:
        dirty: list[TEntity] = []
        for item in update_items:
            changes = apply_field_changes(
                item.existing,
                self.desired_fields(item.existing, item.remote),
            )
            if not changes:
                continue
            log.debug(
                "%s: entity %s changed (%s)",
                scope_label,
                item.existing.id,
                ", ".join(str(change) for change in changes),
            )
            dirty.append(item.existing)
        return dirty
