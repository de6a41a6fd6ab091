"""Pure classification of local projections against remote items."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import Classification, MatchedPair

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .matching import MatcherChain

log = getLogger(__name__)


def classify[TLocal, TRemote](
    local_items: Iterable[TLocal],
    remote_items: Iterable[TRemote],
    matchers: MatcherChain[TLocal, TRemote],
) -> Classification[TLocal, TRemote]:
    """Partition both collections into add / update / delete sets.

    Assignment is greedy: local items are visited in listing order and each
    takes the first still-unmatched remote item the chain accepts. Both sides
    of a pair leave the candidate pool, so a remote item that appears twice is
    matched at most once and its duplicate ends up in ``to_add``. No attempt
    is made at an optimal bipartite matching.
    """

    if not matchers:
        raise ValueError("Cannot classify without at least one matcher")

    pool: list[TRemote] = list(remote_items)
    result: Classification[TLocal, TRemote] = Classification()

    for local in local_items:
        match_index = _first_match(local, pool, matchers)
        if match_index is None:
            result.to_delete.append(local)
            continue
        result.to_update.append(MatchedPair(existing=local, remote=pool.pop(match_index)))

    result.to_add.extend(pool)
    log.debug(
        "Classified: add=%s update=%s delete=%s",
        len(result.to_add),
        len(result.to_update),
        len(result.to_delete),
    )
    return result


def _first_match[TLocal, TRemote](
    local: TLocal,
    pool: list[TRemote],
    matchers: MatcherChain[TLocal, TRemote],
) -> int | None:
    for index, remote in enumerate(pool):
        if matchers.matches(local, remote):
            return index
    return None
