"""Fixed-size grouping of parent scopes."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


def iter_batches[T](items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive lists of at most ``size`` items, preserving order."""

    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for batch in batched(items, size):
        yield list(batch)
