"""Shared reconciliation contract types.

``TLocal`` is a lightweight projection, ``TEntity`` the full local entity and
``TRemote`` an item from the authoritative listing.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class MatchedPair[TLocal, TRemote]:
    """A projection and the remote item it was matched to."""

    existing: TLocal
    remote: TRemote


@dataclass(frozen=True, slots=True)
class UpdateItem[TEntity, TRemote]:
    """A matched pair after the projection has been resolved to its full entity."""

    existing: TEntity
    remote: TRemote


@dataclass(slots=True)
class Classification[TLocal, TRemote]:
    """Partition of one scope's local projections and remote items."""

    to_add: list[TRemote] = field(default_factory=list)
    to_update: list[MatchedPair[TLocal, TRemote]] = field(default_factory=list)
    to_delete: list[TLocal] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_add or self.to_update or self.to_delete)


@dataclass(slots=True)
class SyncOutcome:
    """Counts of what one reconciliation pass changed."""

    added: int = 0
    updated: int = 0
    removed: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.updated + self.removed

    def summary(self) -> str:
        return (
            f"+{self.added} ~{self.updated} -{self.removed} ={self.unchanged}"
        )
