"""
Sweep-line triangulation of polygons with holes, in exact integer arithmetic.

The input is a flat list of points holding one or more outer rings followed by
their holes, with ``ends`` giving the cumulative end offset of every ring.

1. Monotone decomposition: every ring becomes a cyclic list of half-edges in a
   preallocated arena (outer rings counter-clockwise, holes clockwise, so the
   interior is always on the left).  Vertices are swept bottom to top and
   classified as start, end, split, merge or regular; the active edges form a
   sorted list searched by bisection with exact side-of-edge tests.  Split and
   merge vertices get diagonals, spliced into the cyclic lists at the face
   corner that contains them.  Faces are only emitted after the sweep, since a
   hole the sweep has not reached yet may still lie inside any of them.
2. Monotone triangulation: every remaining face is y-monotone and is
   triangulated with the two-chain stack scan.

No floating point is used anywhere.  Self-intersecting input is not supported;
when the sweep notices an impossible state it raises ``SweepError``.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from .arena import PointArena
from .errors import DegenerateRing, SweepError
from .predicates import below, cross, in_cone, signed_area, turns_left


class VertexType(Enum):
    START = auto()          # Local min, convex
    END = auto()            # Local max, convex
    SPLIT = auto()          # Local min, reflex
    MERGE = auto()          # Local max, reflex
    REGULAR_LEFT = auto()   # Boundary runs downward, interior to the right
    REGULAR_RIGHT = auto()  # Boundary runs upward, interior to the left


def ring_spans(ends: Sequence[int], n: int) -> List[Tuple[int, int]]:
    """``[(start, end), ...]`` for every ring; validates the ``ends`` array."""
    spans = []
    start = 0
    for end in ends:
        if end <= start:
            raise ValueError(f"ring ends must be strictly increasing: {list(ends)}")
        spans.append((start, end))
        start = end
    if start != n:
        raise ValueError(f"last ring ends at {start} but {n} points were given")
    return spans


def edge_capacity(n: int, rings: int, outer_count: int) -> int:
    """
    Half-edges needed to triangulate ``n`` points in ``rings`` rings.

    A triangulated polygon with h holes over V points has 3V + 6h - 6
    half-edges; summed over ``outer_count`` components this is
    3n + 6 * (rings - 2 * outer_count).
    """
    return max(n, 3 * n + 6 * (rings - 2 * outer_count))


def expected_triangle_count(ends: Sequence[int], outer_count: int = 1) -> int:
    """Triangles produced for valid input: V - 2K + 2H."""
    n = ends[-1] if ends else 0
    holes = len(ends) - outer_count
    return n - 2 * outer_count + 2 * holes


class EdgeArena:
    """
    Fixed-size pool of half-edges.

    Half-edge ``e`` points at ``target[e]``; ``prev[e]`` and ``next[e]`` link
    it into the cycle bounding the face on its left.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.target = [0] * capacity
        self.prev = [-1] * capacity
        self.next = [-1] * capacity
        self.size = 0

    def new(self, b: int) -> int:
        if self.size >= self.capacity:
            raise SweepError(f"edge arena exhausted ({self.capacity} half-edges); input is not simple")
        e = self.size
        self.target[e] = b
        self.size += 1
        return e

    def origin(self, e: int) -> int:
        return self.target[self.prev[e]]


class Triangulator:
    """Triangulate one polygon forest given as flat points plus ring ends."""

    def __init__(self, points: Sequence[Tuple[int, int]], ends: Optional[Sequence[int]] = None,
                 outer_count: int = 1, convex_fast_path: bool = True):
        self.pts = [(int(x), int(y)) for x, y in points]
        self.n = len(self.pts)
        self.ends = list(ends) if ends is not None else [self.n]
        if not 1 <= outer_count <= len(self.ends):
            raise ValueError(f"outer_count {outer_count} out of range for {len(self.ends)} rings")
        self.outer_count = outer_count
        self.spans = ring_spans(self.ends, self.n)
        self.convex_fast_path = convex_fast_path
        self.areas = [self._check_ring(r, s, e) for r, (s, e) in enumerate(self.spans)]

        self.succ = [0] * self.n
        self.pred = [0] * self.n
        self.types: List[VertexType] = [VertexType.REGULAR_LEFT] * self.n
        self.r = 0  # Reflex (split + merge) vertex count
        self.diagonals: List[Tuple[int, int]] = []
        self.edges: Optional[EdgeArena] = None
        self._out: List[int] = []

    def _check_ring(self, r: int, s: int, e: int) -> int:
        size = e - s
        if size < 3:
            raise DegenerateRing(f"ring {r} has {size} points", size=size, ring=r)
        ring = range(s, e)
        if len({self.pts[i] for i in ring}) < 3:
            raise DegenerateRing(f"ring {r} has fewer than 3 distinct points",
                                 size=size, ring=r)
        area = signed_area(self.pts, ring)
        if area == 0:
            raise DegenerateRing(f"ring {r} encloses no area", size=size, ring=r)
        return area

    def triangulate(self, out: Optional[List[int]] = None) -> List[int]:
        """Append counter-clockwise triangles (flat, local indices) to ``out``."""
        self._out = out if out is not None else []

        self._link_rings()
        self._classify_vertices()

        if len(self.spans) == 1:
            if self.n == 3:
                self._emit(0, 1, 2)
                return self._out
            if self.convex_fast_path and self.r == 0 and self._is_convex():
                start = 0
                v = self.succ[start]
                while self.succ[v] != start:
                    self._out.extend((start, v, self.succ[v]))
                    v = self.succ[v]
                return self._out

        self._build_edges()
        self._decompose()
        self._triangulate_faces()
        return self._out

    # -- setup ---------------------------------------------------------------

    def _link_rings(self) -> None:
        """Successor/predecessor per vertex with the interior on the left."""
        for r, (s, e) in enumerate(self.spans):
            want_ccw = r < self.outer_count
            forward = (self.areas[r] > 0) == want_ccw
            for v in range(s, e):
                nxt = v + 1 if v + 1 < e else s
                prv = v - 1 if v > s else e - 1
                if forward:
                    self.succ[v], self.pred[v] = nxt, prv
                else:
                    self.succ[v], self.pred[v] = prv, nxt

    def _classify_vertices(self) -> None:
        pts = self.pts
        self.r = 0
        for v in range(self.n):
            p, nx = self.pred[v], self.succ[v]
            p_after = below(pts, v, p)
            n_after = below(pts, v, nx)
            if p_after and n_after:
                if turns_left(pts, p, v, nx):
                    self.types[v] = VertexType.START
                else:
                    self.types[v] = VertexType.SPLIT
                    self.r += 1
            elif not p_after and not n_after:
                if turns_left(pts, p, v, nx):
                    self.types[v] = VertexType.END
                else:
                    self.types[v] = VertexType.MERGE
                    self.r += 1
            else:
                self.types[v] = VertexType.REGULAR_LEFT if p_after else VertexType.REGULAR_RIGHT

    def _is_convex(self) -> bool:
        return all(turns_left(self.pts, self.pred[v], v, self.succ[v]) for v in range(self.n))

    def _build_edges(self) -> None:
        """Boundary half-edge ``v`` runs from v to succ[v]."""
        self.edges = EdgeArena(edge_capacity(self.n, len(self.spans), self.outer_count))
        E = self.edges
        for v in range(self.n):
            E.new(self.succ[v])
        for v in range(self.n):
            E.next[v] = self.succ[v]
            E.prev[v] = self.pred[v]
        self.ins = [[self.pred[v]] for v in range(self.n)]

    # -- phase 1: monotone decomposition --------------------------------------

    def _decompose(self) -> None:
        pts = self.pts
        order = sorted(range(self.n), key=lambda i: (pts[i][1], pts[i][0], i))
        self.status: List[int] = []
        self.helper = [-1] * self.n

        for v in order:
            vtype = self.types[v]
            e_in = self.pred[v]

            if vtype == VertexType.START:
                self._insert(v, v)

            elif vtype == VertexType.END:
                self._fix_up(v, e_in)
                self._remove(e_in, v)

            elif vtype == VertexType.SPLIT:
                ej = self._right_edge(v)
                self._add_diagonal(v, self.helper[ej])
                self.helper[ej] = v
                self._insert(v, v)

            elif vtype == VertexType.MERGE:
                self._fix_up(v, e_in)
                self._remove(e_in, v)
                ej = self._right_edge(v)
                self._fix_up(v, ej)
                self.helper[ej] = v

            elif vtype == VertexType.REGULAR_RIGHT:
                self._fix_up(v, e_in)
                self._remove(e_in, v)
                self._insert(v, v)

            else:
                ej = self._right_edge(v)
                self._fix_up(v, ej)
                self.helper[ej] = v

    def _fix_up(self, v: int, e: int) -> None:
        """Connect v to the helper of edge e when that helper is a merge vertex."""
        h = self.helper[e]
        if h < 0:
            raise SweepError(f"edge ({e}, {self.succ[e]}) reached vertex {v} without a helper")
        if self.types[h] == VertexType.MERGE:
            self._add_diagonal(v, h)

    def _bisect(self, v: int) -> int:
        """Index of the first active edge that has ``v`` strictly on its left."""
        pts, succ, status = self.pts, self.succ, self.status
        p = pts[v]
        lo, hi = 0, len(status)
        while lo < hi:
            mid = (lo + hi) // 2
            e = status[mid]
            if cross(pts[e], pts[succ[e]], p) > 0:
                hi = mid
            else:
                lo = mid + 1
        return lo

    def _insert(self, e: int, v: int) -> None:
        self.status.insert(self._bisect(v), e)
        self.helper[e] = v

    def _remove(self, e: int, v: int) -> None:
        pos = self._bisect(v) - 1
        if pos < 0 or self.status[pos] != e:
            try:
                pos = self.status.index(e)
            except ValueError:
                raise SweepError(f"edge ({e}, {self.succ[e]}) is not active at vertex {v}") from None
        del self.status[pos]

    def _right_edge(self, v: int) -> int:
        pos = self._bisect(v)
        if pos == len(self.status):
            raise SweepError(f"no active edge to the right of vertex {v}")
        return self.status[pos]

    def _corner(self, v: int, t: int) -> int:
        """The half-edge into ``v`` whose face corner holds the direction to ``t``."""
        cands = self.ins[v]
        if len(cands) == 1:
            return cands[0]
        E, pts = self.edges, self.pts
        apex, p = pts[v], pts[t]
        for h in cands:
            first = pts[E.target[E.next[h]]]
            last = pts[E.origin(h)]
            if in_cone(apex, first, last, p):
                return h
        raise SweepError(f"diagonal ({v}, {t}) leaves every face corner at {v}")

    def _add_diagonal(self, u: int, w: int) -> None:
        """Split the face holding segment u-w with a pair of half-edges."""
        E = self.edges
        h1 = self._corner(u, w)
        h2 = self._corner(w, u)
        new1 = E.new(w)
        new2 = E.new(u)
        n1, n2 = E.next[h1], E.next[h2]
        E.next[h1], E.prev[new1] = new1, h1
        E.next[new1], E.prev[n2] = n2, new1
        E.next[h2], E.prev[new2] = new2, h2
        E.next[new2], E.prev[n1] = n1, new2
        self.ins[w].append(new1)
        self.ins[u].append(new2)
        self.diagonals.append((u, w))

    # -- phase 2: monotone faces ----------------------------------------------

    def _triangulate_faces(self) -> None:
        E = self.edges
        done = [False] * E.size
        for start in range(E.size):
            if done[start]:
                continue
            face = []
            e = start
            while True:
                done[e] = True
                face.append(E.target[e])
                e = E.next[e]
                if e == start:
                    break
                if len(face) > self.n:
                    raise SweepError(f"face through half-edge {start} does not close")
            self._triangulate_monotone(face)

    def _triangulate_monotone(self, face: List[int]) -> None:
        """Two-chain stack scan over a counter-clockwise y-monotone face."""
        m = len(face)
        if m < 3:
            raise SweepError(f"face {face} has fewer than 3 vertices")
        if m == 3:
            self._out.extend(face)
            return

        pts = self.pts
        key = lambda t: (pts[face[t]][1], pts[face[t]][0], face[t])
        lo = min(range(m), key=key)
        hi = max(range(m), key=key)

        # Counter-clockwise from the bottom runs up the right chain.
        right = [face[(lo + t) % m] for t in range(1, (hi - lo) % m)]
        left = [face[(lo - t) % m] for t in range(1, (lo - hi) % m)]

        order: List[Tuple[int, bool]] = [(face[lo], True)]
        i = j = 0
        while i < len(right) or j < len(left):
            if j == len(left) or (i < len(right) and below(pts, right[i], left[j])):
                order.append((right[i], True))
                i += 1
            else:
                order.append((left[j], False))
                j += 1
        order.append((face[hi], False))

        stack = [order[0], order[1]]
        for k in range(2, m - 1):
            v, is_right = order[k]
            if is_right != stack[-1][1]:
                for a in range(len(stack) - 1):
                    self._emit(v, stack[a][0], stack[a + 1][0])
                stack = [order[k - 1], order[k]]
            else:
                last = stack.pop()
                while stack:
                    w = stack[-1][0]
                    if is_right:
                        convex = turns_left(pts, w, last[0], v)
                    else:
                        convex = turns_left(pts, v, last[0], w)
                    if not convex:
                        break
                    self._emit(v, last[0], w)
                    last = stack.pop()
                stack.append(last)
                stack.append(order[k])

        v = order[m - 1][0]
        for a in range(len(stack) - 1):
            self._emit(v, stack[a][0], stack[a + 1][0])

    def _emit(self, a: int, b: int, c: int) -> None:
        if turns_left(self.pts, a, b, c):
            self._out.extend((a, b, c))
        else:
            self._out.extend((a, c, b))


def triangulate(points: Sequence[Tuple[int, int]], ends: Optional[Sequence[int]] = None,
                outer_count: int = 1, out: Optional[List[int]] = None) -> List[int]:
    """
    Triangulate rings given in local coordinates.

    Returns ``out`` (or a new list) extended with three local point indices per
    triangle, each triple counter-clockwise.
    """
    return Triangulator(points, ends, outer_count).triangulate(out)


def triangulate_indices(arena: PointArena, indices: Sequence[int],
                        ends: Optional[Sequence[int]] = None, outer_count: int = 1,
                        out: Optional[List[int]] = None) -> List[int]:
    """Like ``triangulate`` but reads points from ``arena`` and emits arena indices."""
    local = Triangulator(arena.points(indices), ends, outer_count).triangulate()
    if out is None:
        out = []
    out.extend(indices[i] for i in local)
    return out
