import pickle

import numpy as np
import pytest

from areamesh.arena import INT64_MAX, INT64_MIN, PointArena


def test_indices_are_stable_across_growth():
    arena = PointArena(capacity=2)
    idx = [arena.add(i, -i) for i in range(100)]
    assert idx == list(range(100))
    assert len(arena) == 100
    assert arena[57] == (57, -57)
    assert arena[-1] == (99, -99)


def test_extend_returns_index_range():
    arena = PointArena([(0, 0)])
    r = arena.extend([(1, 1), (2, 2)])
    assert list(r) == [1, 2]
    assert arena.points(r) == [(1, 1), (2, 2)]


def test_extreme_coordinates_are_plain_ints():
    arena = PointArena()
    i = arena.add(INT64_MIN, INT64_MAX)
    x, y = arena[i]
    assert (x, y) == (INT64_MIN, INT64_MAX)
    assert type(x) is int and type(y) is int


@pytest.mark.parametrize("x", [2 ** 63, -(2 ** 63) - 1, 0.5])
def test_rejects_coordinates_outside_int64(x):
    with pytest.raises(ValueError):
        PointArena().add(x, 0)


def test_out_of_range_index():
    arena = PointArena([(0, 0)])
    with pytest.raises(IndexError):
        arena[1]
    with pytest.raises(IndexError):
        arena.points([0, 7])


def test_array_view_is_read_only():
    arena = PointArena([(1, 2), (3, 4)])
    arr = arena.as_array()
    assert arr.shape == (2, 2)
    assert arr.dtype == np.int64
    with pytest.raises(ValueError):
        arr[0, 0] = 9


def test_pickle_keeps_points_and_stays_appendable():
    arena = PointArena([(1, 2), (3, 4)])
    copy = pickle.loads(pickle.dumps(arena))
    assert list(copy) == [(1, 2), (3, 4)]
    assert copy.add(5, 6) == 2
    assert copy[2] == (5, 6)
