from __future__ import annotations

import pytest

from zonesync.domain.reconciliation import iter_batches


def test_groups_of_fixed_size_with_short_tail() -> None:
    batches = list(iter_batches(range(120), 50))

    assert [len(batch) for batch in batches] == [50, 50, 20]
    assert batches[2][0] == 100


def test_empty_input_yields_nothing() -> None:
    assert list(iter_batches([], 50)) == []


def test_size_must_be_positive() -> None:
    with pytest.raises(ValueError, match="positive"):
        list(iter_batches([1], 0))
