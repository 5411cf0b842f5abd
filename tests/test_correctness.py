"""
Correctness verification of the sweep triangulator over polygon families.

Checks (see ``areamesh.validate``):
1. Triangle count: V - 2 per outer ring plus 2 per hole
2. Area preservation, exactly
3. No degenerate or clockwise triangles
4. Valid indices, every vertex used
"""

import pytest

from areamesh.generators import (
    FAMILIES, arrow_shape, comb_polygon, frame_with_diamond_holes, l_shape, paper_example,
    random_polygon, random_polygon_with_holes, regular_polygon, rotate_points, square_with_holes, star_polygon,
)
from areamesh.triangulate import Triangulator
from areamesh.validate import verify_triangulation

CASES = [
    ("Triangle", ([(0, 0), (2, 0), (1, 2)], [3])),
    ("Square", ([(0, 0), (1, 0), (1, 1), (0, 1)], [4])),
    ("Pentagon (convex)", regular_polygon(5)),
    ("Hexagon (convex)", regular_polygon(6)),
    ("Decagon (convex)", regular_polygon(10)),
    ("L-shape", l_shape()),
    ("Arrow", arrow_shape()),
    ("Paper example", paper_example()),
    ("5-star", star_polygon(5)),
    ("6-star", star_polygon(6)),
    ("7-star", star_polygon(7)),
    ("10-star", star_polygon(10)),
    ("Comb-3", comb_polygon(3)),
    ("Comb-5", comb_polygon(5)),
    ("Comb-10", comb_polygon(10)),
    ("Convex 50", regular_polygon(50)),
    ("Convex 100", regular_polygon(100)),
    ("Random 50", random_polygon(50)),
    ("Random 100", random_polygon(100)),
    ("Random 500", random_polygon(500)),
    ("Square, 1 hole", square_with_holes(1)),
    ("Square, 3x3 holes", square_with_holes(3, cell=8)),
    ("Frame, diamond holes", frame_with_diamond_holes(3)),
    ("Frame, 10 diamond holes", frame_with_diamond_holes(10, cell=20)),
    ("Hole beside a split vertex", (
        [(18, 12), (36, 36), (30, 12), (6, 0), (0, 0), (0, 6), (6, 12), (0, 30),
         (12, 13), (12, 15), (13, 15), (14, 14)],
        [8, 12],
    )),
]


@pytest.mark.parametrize("name,polygon", CASES, ids=[c[0] for c in CASES])
def test_case(name, polygon):
    points, ends = polygon
    tris = Triangulator(points, ends).triangulate()
    ok, msg = verify_triangulation(points, tris, ends)
    assert ok, f"{name}: {msg}"


@pytest.mark.parametrize("angle", [0.3, 1.1, 2.5])
def test_rotated_random_polygon(angle):
    points, ends = random_polygon(200, seed=7)
    points = rotate_points(points, angle)
    tris = Triangulator(points, ends).triangulate()
    ok, msg = verify_triangulation(points, tris, ends)
    assert ok, msg


@pytest.mark.parametrize("family", sorted(FAMILIES))
@pytest.mark.parametrize("n", [16, 100])
def test_families(family, n):
    points, ends = FAMILIES[family](n)
    tris = Triangulator(points, ends).triangulate()
    ok, msg = verify_triangulation(points, tris, ends)
    assert ok, f"{family} n={n}: {msg}"


@pytest.mark.parametrize("seed", range(40))
def test_random_outer_with_holes(seed):
    points, ends = random_polygon_with_holes(24, holes=4, seed=seed)
    assert len(ends) > 1
    tris = Triangulator(points, ends).triangulate()
    assert len(tris) == 3 * (len(points) - 2 + 2 * (len(ends) - 1))
    ok, msg = verify_triangulation(points, tris, ends)
    assert ok, f"seed={seed}: {msg}"
