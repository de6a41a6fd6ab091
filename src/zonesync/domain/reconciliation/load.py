"""Resolve matched projections to full entities with one batched lookup."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Sequence
from logging import getLogger
from typing import Protocol

from .contracts import MatchedPair, UpdateItem

log = getLogger(__name__)


class HasId(Protocol):
    @property
    def id(self) -> int | None: ...


type LoadByIds[TEntity] = Callable[[Collection[int]], Iterable[TEntity]]


def load_update_items[TLocal: HasId, TEntity: HasId, TRemote](
    pairs: Sequence[MatchedPair[TLocal, TRemote]],
    load_by_ids: LoadByIds[TEntity],
) -> list[UpdateItem[TEntity, TRemote]]:
    """Load the entities behind ``pairs`` and re-attach their remote items.

    ``load_by_ids`` is called exactly once for a non-empty ``pairs`` and not at
    all otherwise. Output follows the order of ``pairs``; projections whose
    entity disappeared in the meantime are dropped.
    """

    if not pairs:
        return []

    remote_by_id: dict[int, TRemote] = {}
    for pair in pairs:
        projection_id = pair.existing.id
        if projection_id is None:
            raise ValueError("Matched projection without an id")
        remote_by_id[projection_id] = pair.remote

    entities_by_id: dict[int, TEntity] = {}
    for entity in load_by_ids(list(remote_by_id)):
        if entity.id is not None:
            entities_by_id[entity.id] = entity

    items: list[UpdateItem[TEntity, TRemote]] = []
    for projection_id, remote in remote_by_id.items():
        entity = entities_by_id.get(projection_id)
        if entity is None:
            log.warning("Entity %s vanished before its update could be loaded", projection_id)
            continue
        items.append(UpdateItem(existing=entity, remote=remote))
    return items
