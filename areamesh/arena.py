"""
Append-only store of 2D integer points.

Points are signed 64-bit coordinate pairs (pre-projected map coordinates)
addressed by a stable index.  Storage is a numpy int64 buffer that grows by
doubling; lookups hand back plain Python ints so that every product computed
by the predicates is exact.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)

Point = Tuple[int, int]


def _check_coord(value) -> int:
    v = int(value)
    if v != value or not INT64_MIN <= v <= INT64_MAX:
        raise ValueError(f"coordinate {value!r} is not a signed 64-bit integer")
    return v


class PointArena:
    """Growable int64 point buffer; points are never moved or removed."""

    def __init__(self, points: Iterable[Sequence[int]] = (), capacity: int = 64):
        self._data = np.zeros((max(1, capacity), 2), dtype=np.int64)
        self._size = 0
        self.extend(points)

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, i: int) -> Point:
        if not -self._size <= i < self._size:
            raise IndexError(f"point index {i} out of range for arena of {self._size}")
        if i < 0:
            i += self._size
        x, y = self._data[i]
        return int(x), int(y)

    def __iter__(self):
        for i in range(self._size):
            yield self[i]

    def _reserve(self, n: int) -> None:
        if n <= len(self._data):
            return
        cap = len(self._data)
        while cap < n:
            cap *= 2
        grown = np.zeros((cap, 2), dtype=np.int64)
        grown[: self._size] = self._data[: self._size]
        self._data = grown

    def add(self, x: int, y: int) -> int:
        """Append one point, returning its index."""
        x, y = _check_coord(x), _check_coord(y)
        self._reserve(self._size + 1)
        self._data[self._size] = (x, y)
        self._size += 1
        return self._size - 1

    def extend(self, points: Iterable[Sequence[int]]) -> range:
        """Append many points, returning the range of their indices."""
        start = self._size
        for x, y in points:
            self.add(x, y)
        return range(start, self._size)

    def points(self, indices: Iterable[int]) -> List[Point]:
        """Coordinates of ``indices`` as Python int pairs, in order."""
        data = self._data
        size = self._size
        out = []
        for i in indices:
            if not 0 <= i < size:
                raise IndexError(f"point index {i} out of range for arena of {size}")
            out.append((int(data[i, 0]), int(data[i, 1])))
        return out

    def as_array(self) -> np.ndarray:
        """Read-only (N, 2) int64 view of the stored points."""
        view = self._data[: self._size]
        view = view.view()
        view.flags.writeable = False
        return view

    def __getstate__(self):
        return {"data": self._data[: self._size].copy()}

    def __setstate__(self, state):
        data = state["data"]
        self._data = data if len(data) else np.zeros((1, 2), dtype=np.int64)
        self._size = len(data)
