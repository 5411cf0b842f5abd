"""
Deterministic integer polygon families for tests and benchmarks.

Every generator returns ``(points, ends)``: a flat list of integer points with
the outer ring first (counter-clockwise) and holes after it, plus the
cumulative ring end offsets expected by the triangulator.
"""

from __future__ import annotations

import math
import random
from typing import List, Sequence, Tuple

from .predicates import contains, on_boundary, segments_meet

Point = Tuple[int, int]
Polygon = Tuple[List[Point], List[int]]


def _single(points: List[Point]) -> Polygon:
    return points, [len(points)]


def rotate_points(points, angle_rad: float) -> List[Point]:
    ca = math.cos(angle_rad)
    sa = math.sin(angle_rad)
    return [(round(ca * x - sa * y), round(sa * x + ca * y)) for (x, y) in points]


def regular_polygon(n: int, radius: int = 10 ** 9) -> Polygon:
    return _single([
        (round(radius * math.cos(2 * math.pi * i / n)), round(radius * math.sin(2 * math.pi * i / n)))
        for i in range(n)
    ])


def star_polygon(points: int = 5, outer: int = 2000, inner: int = 800) -> Polygon:
    pts = []
    for i in range(points * 2):
        angle = math.pi / 2 + i * math.pi / points
        r = outer if i % 2 == 0 else inner
        pts.append((round(r * math.cos(angle)), round(r * math.sin(angle))))
    return _single(pts)


def comb_polygon(teeth: int = 3) -> Polygon:
    pts = [(0, 0), (teeth * 4, 0), (teeth * 4, 2)]
    for i in range(teeth - 1, -1, -1):
        x = i * 4 + 2
        pts.extend([(x + 1, 2), (x, 4), (x - 1, 2)])
    pts.append((0, 2))
    return _single(pts)


def l_shape() -> Polygon:
    return _single([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])


def arrow_shape() -> Polygon:
    return _single([(0, 2), (4, 2), (4, 0), (8, 3), (4, 6), (4, 4), (0, 4)])


def paper_example() -> Polygon:
    return _single([
        (0, 25), (12, 55), (25, 38), (40, 65),
        (55, 48), (70, 70), (80, 55), (65, 35),
        (80, 15), (50, 25), (30, 0), (15, 15),
    ])


def random_polygon(n: int, seed: int = 42, radius: int = 10 ** 9) -> Polygon:
    """Star-shaped polygon with random radii around sorted random angles."""
    rng = random.Random(seed + n)
    angles = sorted(rng.random() * 2 * math.pi for _ in range(n))
    pts = []
    for a in angles:
        r = radius * (0.4 + 0.6 * rng.random())
        pts.append((round(r * math.cos(a)), round(r * math.sin(a))))
    return _single(pts)


def square(x0: int, y0: int, size: int, ccw: bool = True) -> List[Point]:
    pts = [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]
    return pts if ccw else pts[::-1]


def square_with_holes(k: int = 1, cell: int = 4) -> Polygon:
    """A square of side ``k * cell`` with a k-by-k grid of unit-ish square holes."""
    side = k * cell
    points = square(0, 0, side)
    ends = [len(points)]
    hole = max(1, cell // 4)
    for i in range(k):
        for j in range(k):
            points.extend(square(i * cell + hole, j * cell + hole, hole, ccw=False))
            ends.append(len(points))
    return points, ends


def frame_with_diamond_holes(k: int = 3, cell: int = 10) -> Polygon:
    """Outer rectangle with a row of diamond-shaped holes, exercising split and merge vertices."""
    width = k * cell
    points = [(0, 0), (width, 0), (width, cell), (0, cell)]
    ends = [len(points)]
    half = cell // 2
    quarter = max(1, cell // 4)
    for i in range(k):
        cx = i * cell + half
        points.extend([(cx, half - quarter), (cx - quarter, half), (cx, half + quarter), (cx + quarter, half)])
        ends.append(len(points))
    return points, ends


def _jittered_ring(rng: random.Random, cx: int, cy: int, k: int, r_min: float, r_max: float) -> List[Point]:
    """Counter-clockwise ring around (cx, cy); angular gaps stay below pi, so it is simple."""
    pts = []
    for i in range(k):
        a = 2 * math.pi * (i + 0.3 * rng.random()) / k
        r = r_min + (r_max - r_min) * rng.random()
        pts.append((cx + round(r * math.cos(a)), cy + round(r * math.sin(a))))
    return pts


def _edges(ring: Sequence[Point]):
    for t in range(len(ring)):
        yield ring[t], ring[(t + 1) % len(ring)]


def _hole_fits(hole: List[Point], outer: List[Point], holes: List[List[Point]]) -> bool:
    ring = range(len(outer))
    if not all(contains(outer, ring, p) and not on_boundary(outer, ring, p) for p in hole):
        return False
    for other in [outer] + holes:
        for a, b in _edges(hole):
            if any(segments_meet(a, b, c, d) for c, d in _edges(other)):
                return False
        if other is not outer and (contains(hole, range(len(hole)), other[0])
                                   or contains(other, range(len(other)), hole[0])):
            return False
    return True


def random_polygon_with_holes(n: int, holes: int = 3, seed: int = 42, radius: int = 10 ** 6) -> Polygon:
    """
    Non-convex star-shaped outer ring with small holes placed near its vertices.

    Holes are dropped toward the centre from random outer vertices, so they
    often sit next to split and merge vertices.  Every hole is checked with
    exact predicates before it is kept; fewer than ``holes`` may fit.
    """
    rng = random.Random(seed * 7919 + n)
    outer = _jittered_ring(rng, 0, 0, max(3, n), 0.35 * radius, radius)
    placed: List[List[Point]] = []
    for _ in range(50 * holes):
        if len(placed) == holes:
            break
        vx, vy = rng.choice(outer)
        f = 0.05 + 0.5 * rng.random()
        size = radius * (0.01 + 0.04 * rng.random())
        hole = _jittered_ring(rng, round(vx * (1 - f)), round(vy * (1 - f)),
                              rng.choice((3, 4, 5)), 0.5 * size, size)
        if _hole_fits(hole, outer, placed):
            placed.append(hole)

    points = list(outer)
    ends = [len(points)]
    for hole in placed:
        points.extend(reversed(hole))
        ends.append(len(points))
    return points, ends



FAMILIES = {
    "convex": lambda n: regular_polygon(n),
    "random": lambda n: random_polygon(n),
    "star": lambda n: star_polygon(max(3, n // 2), outer=10 ** 6, inner=3 * 10 ** 5),
    "comb": lambda n: comb_polygon(max(1, (n - 4) // 3)),
    "holes": lambda n: square_with_holes(max(1, int(math.sqrt(max(1, n // 4)))), cell=16),
    "random_holes": lambda n: random_polygon_with_holes(n, max(1, n // 10)),
}
