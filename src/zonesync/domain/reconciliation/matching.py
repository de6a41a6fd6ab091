"""Ordered predicate chains deciding whether a local and a remote item are the same object.

Natural keys change over time (records moved from a bare ``NAME`` key to
``TYPE:NAME``), so a chain holds several equality predicates, most specific
first. A pair matches when any predicate accepts it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

type MatchPredicate[TLocal, TRemote] = Callable[[TLocal, TRemote], bool]


@dataclass(frozen=True, slots=True)
class Matcher[TLocal, TRemote]:
    """A named equality predicate."""

    name: str
    predicate: MatchPredicate[TLocal, TRemote]

    def __call__(self, local: TLocal, remote: TRemote) -> bool:
        return bool(self.predicate(local, remote))


@dataclass(frozen=True, slots=True)
class MatcherChain[TLocal, TRemote]:
    matchers: tuple[Matcher[TLocal, TRemote], ...] = ()

    def then(
        self,
        name: str,
        predicate: MatchPredicate[TLocal, TRemote],
    ) -> MatcherChain[TLocal, TRemote]:
        """Return a new chain with ``predicate`` appended at the lowest priority."""

        return MatcherChain((*self.matchers, Matcher(name, predicate)))

    def matches(self, local: TLocal, remote: TRemote) -> bool:
        return any(matcher(local, remote) for matcher in self.matchers)

    def matched_by(self, local: TLocal, remote: TRemote) -> str | None:
        for matcher in self.matchers:
            if matcher(local, remote):
                return matcher.name
        return None

    def __len__(self) -> int:
        return len(self.matchers)
