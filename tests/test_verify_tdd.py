from __future__ import annotations

import pytest

from bingo_duel.grid import PlayerId, create_grid
from bingo_duel.rng import FixedLayoutSource
from bingo_duel.verify import (
    GridInvariantError,
    assert_valid_layout,
    check_index,
    check_layout,
    layout_hash,
)


def test_check_layout_accepts_permutation():
    rep = check_layout(list(range(25, 0, -1)))
    assert rep.ok is True
    assert rep.reasons == []


def test_check_layout_reports_duplicates_and_gaps():
    numbers = list(range(1, 25)) + [3]
    rep = check_layout(numbers)
    assert rep.ok is False
    assert any("duplicate" in r for r in rep.reasons)
    assert any("missing numbers: [25]" in r for r in rep.reasons)


def test_check_layout_reports_out_of_range_and_length():
    rep = check_layout([0] + list(range(2, 27)))
    assert any("outside" in r for r in rep.reasons)
    rep = check_layout(list(range(1, 10)))
    assert any("expected 25 cells" in r for r in rep.reasons)


def test_check_index_detects_stale_mapping():
    numbers = list(range(1, 26))
    index = {n: i for i, n in enumerate(numbers)}
    assert check_index(numbers, index).ok
    index[1], index[2] = index[2], index[1]
    assert not check_index(numbers, index).ok


def test_assert_valid_layout_fails_loudly():
    numbers = [1] * 25
    with pytest.raises(AssertionError):
        assert_valid_layout(numbers, {1: 0})


def test_create_grid_refuses_broken_layout():
    broken = list(range(1, 25)) + [24]
    with pytest.raises(GridInvariantError):
        create_grid(PlayerId.PLAYER_1, FixedLayoutSource([broken]))


def test_layout_hash_stable_and_distinct():
    a = [[1, 2], [3, 4]]
    b = [[1, 3], [2, 4]]
    assert layout_hash(a) == layout_hash([[1, 2], [3, 4]])
    assert layout_hash(a).startswith("sha256:")
    assert layout_hash(a) != layout_hash(b)
