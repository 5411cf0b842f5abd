"""
Exact geometric predicates on integer points.

All functions take a sequence of ``(x, y)`` Python int pairs plus indices into
it.  Python ints never overflow, so products of 64-bit coordinates (and sums
of many of them) are exact; nothing here touches floating point.

Orientation convention, used everywhere in the package: ``signed_area`` is
positive for counter-clockwise rings, i.e. rings whose interior lies to the
left of the direction of travel with the y axis pointing up.
"""

from __future__ import annotations

from typing import Sequence, Tuple

Point = Tuple[int, int]


def cross(o: Point, a: Point, b: Point) -> int:
    """Cross product of (a - o) and (b - o)."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def turns_left(pts: Sequence[Point], i: int, j: int, k: int) -> bool:
    """True iff the path i -> j -> k turns counter-clockwise at j."""
    pi, pj, pk = pts[i], pts[j], pts[k]
    ax, ay = pj[0] - pi[0], pj[1] - pi[1]
    bx, by = pk[0] - pj[0], pk[1] - pj[1]
    return ax * by > ay * bx


def signed_area(pts: Sequence[Point], ring: Sequence[int]) -> int:
    """Twice the signed area of ``ring``; positive when counter-clockwise."""
    n = len(ring)
    area = 0
    for t in range(n):
        a = pts[ring[t]]
        b = pts[ring[t + 1 if t + 1 < n else 0]]
        area += (a[0] - b[0]) * (a[1] + b[1])
    return area


def point_key(pts: Sequence[Point], i: int) -> Tuple[int, int, int]:
    """Sweep order key: y, then x, then index."""
    p = pts[i]
    return p[1], p[0], i


def compare_point_order(pts: Sequence[Point], p: int, q: int) -> int:
    """-1, 0 or 1 as ``p`` sorts before, equal to, or after ``q``."""
    kp, kq = point_key(pts, p), point_key(pts, q)
    return (kp > kq) - (kp < kq)


def below(pts: Sequence[Point], p: int, q: int) -> bool:
    """True iff ``p`` is swept before ``q``."""
    a, b = pts[p], pts[q]
    if a[1] != b[1]:
        return a[1] < b[1]
    if a[0] != b[0]:
        return a[0] < b[0]
    return p < q


def point_on_segment(p: Point, a: Point, b: Point) -> bool:
    """True iff ``p`` lies on the closed segment a-b."""
    if cross(a, b, p) != 0:
        return False
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))


def segments_meet(a: Point, b: Point, c: Point, d: Point) -> bool:
    """True iff the closed segments a-b and c-d share at least one point."""
    d1, d2 = cross(c, d, a), cross(c, d, b)
    d3, d4 = cross(a, b, c), cross(a, b, d)
    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True
    return (point_on_segment(a, c, d) or point_on_segment(b, c, d)
            or point_on_segment(c, a, b) or point_on_segment(d, a, b))


def in_cone(apex: Point, first: Point, last: Point, p: Point) -> bool:
    """
    True iff ``p`` lies strictly inside the cone swept counter-clockwise from
    ray apex->first to ray apex->last.  A cone of exactly pi is the open half
    plane to the left of apex->first.
    """
    c_first = cross(apex, first, p)
    c_last = cross(apex, p, last)
    if cross(apex, first, last) > 0:
        return c_first > 0 and c_last > 0
    return c_first > 0 or c_last > 0


def winding_number(pts: Sequence[Point], ring: Sequence[int], p: Point) -> int:
    """
    Winding number of ``ring`` around ``p`` (Sunday's crossing rule).

    Upward edges with ``p`` strictly to their left count +1, downward edges
    with ``p`` strictly to their right count -1.  Callers that care about the
    boundary must test ``on_boundary`` first.
    """
    wn = 0
    n = len(ring)
    px, py = p
    for t in range(n):
        a = pts[ring[t]]
        b = pts[ring[t + 1 if t + 1 < n else 0]]
        if a[1] <= py:
            if b[1] > py and cross(a, b, p) > 0:
                wn += 1
        elif b[1] <= py and cross(a, b, p) < 0:
            wn -= 1
    return wn


def on_boundary(pts: Sequence[Point], ring: Sequence[int], p: Point) -> bool:
    n = len(ring)
    for t in range(n):
        if point_on_segment(p, pts[ring[t]], pts[ring[t + 1 if t + 1 < n else 0]]):
            return True
    return False


def contains(pts: Sequence[Point], ring: Sequence[int], p: Point) -> bool:
    """Point-in-ring test; points on the boundary count as inside."""
    return on_boundary(pts, ring, p) or winding_number(pts, ring, p) != 0
