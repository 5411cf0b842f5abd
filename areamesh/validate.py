"""
Correctness checks for a triangulation of rings with holes.

Checks:
1. Triangle count: V - 2K + 2H triangles
2. Valid indices: every triangle vertex is one of the input points
3. No degenerate triangles: all triangles are strictly counter-clockwise
4. Area preservation: sum of triangle areas == outer areas - hole areas, exactly
5. Vertex closure: every input point is used by some triangle
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .predicates import cross, signed_area
from .triangulate import expected_triangle_count, ring_spans

Point = Tuple[int, int]


def triangles_of(indices: Sequence[int]) -> List[Tuple[int, int, int]]:
    """Group a flat index list into triples."""
    if len(indices) % 3:
        raise ValueError(f"flat index list of length {len(indices)} is not a multiple of 3")
    return [tuple(indices[i:i + 3]) for i in range(0, len(indices), 3)]


def triangle_area2(pts: Sequence[Point], tri: Sequence[int]) -> int:
    """Twice the signed area of a triangle."""
    return cross(pts[tri[0]], pts[tri[1]], pts[tri[2]])


def polygon_area2(pts: Sequence[Point], ends: Sequence[int], outer_count: int = 1) -> int:
    """Twice the area covered by the outer rings minus their holes."""
    total = 0
    for r, (s, e) in enumerate(ring_spans(ends, len(pts))):
        a = abs(signed_area(pts, range(s, e)))
        total += a if r < outer_count else -a
    return total


def verify_triangulation(pts: Sequence[Point], indices: Sequence[int],
                         ends: Optional[Sequence[int]] = None,
                         outer_count: int = 1) -> Tuple[bool, str]:
    """Verify a flat local-index triangulation of ``pts``."""
    n = len(pts)
    if ends is None:
        ends = [n]
    tris = triangles_of(indices)

    expected = expected_triangle_count(ends, outer_count)
    if len(tris) != expected:
        return False, f"Wrong count: {len(tris)} != {expected}"

    for tri in tris:
        for v in tri:
            if v < 0 or v >= n:
                return False, f"Invalid vertex index: {v}"

    for tri in tris:
        if triangle_area2(pts, tri) <= 0:
            return False, f"Degenerate or clockwise triangle: {tri}"

    poly_a = polygon_area2(pts, ends, outer_count)
    tri_a = sum(triangle_area2(pts, tri) for tri in tris)
    if poly_a != tri_a:
        return False, f"Area mismatch: {poly_a / 2} vs {tri_a / 2}"

    used = set(indices)
    missing = [v for v in range(n) if v not in used]
    if missing:
        return False, f"Unused vertices: {missing[:10]}"

    return True, "OK"
