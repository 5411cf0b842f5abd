from areamesh.predicates import (
    below, compare_point_order, contains, cross, in_cone, on_boundary, point_on_segment,
    segments_meet, signed_area, turns_left, winding_number,
)

SQUARE = [(0, 0), (4, 0), (4, 4), (0, 4)]


def test_signed_area_is_twice_area_and_positive_ccw():
    assert signed_area(SQUARE, range(4)) == 32


def test_signed_area_rotation_and_reversal():
    ring = [0, 1, 2, 3]
    for k in range(4):
        rotated = ring[k:] + ring[:k]
        assert signed_area(SQUARE, rotated) == 32
        assert signed_area(SQUARE, rotated[::-1]) == -32


def test_cross_is_exact_for_64_bit_coordinates():
    big = 2 ** 62
    assert cross((-big, -big), (big, -big), (-big, big)) == 2 ** 126


def test_turns_left():
    pts = [(0, 0), (1, 0), (1, 1)]
    assert turns_left(pts, 0, 1, 2)
    assert not turns_left(pts, 2, 1, 0)

    line = [(0, 0), (1, 1), (2, 2)]
    assert not turns_left(line, 0, 1, 2)
    assert not turns_left(line, 2, 1, 0)


def test_sweep_order_breaks_ties_by_x_then_index():
    pts = [(0, 1), (5, 0), (3, 0), (3, 0)]
    assert below(pts, 1, 0)
    assert below(pts, 2, 1)
    assert below(pts, 2, 3)
    assert not below(pts, 3, 2)
    assert compare_point_order(pts, 2, 2) == 0
    assert compare_point_order(pts, 0, 1) == 1
    assert compare_point_order(pts, 2, 3) == -1


def test_point_on_segment():
    assert point_on_segment((2, 0), (0, 0), (4, 0))
    assert point_on_segment((4, 0), (0, 0), (4, 0))
    assert not point_on_segment((5, 0), (0, 0), (4, 0))
    assert not point_on_segment((2, 1), (0, 0), (4, 0))


def test_segments_meet():
    assert segments_meet((0, 0), (4, 4), (0, 4), (4, 0))
    assert segments_meet((0, 0), (2, 2), (2, 2), (5, 0))
    assert segments_meet((0, 0), (4, 0), (2, 0), (6, 0))
    assert not segments_meet((0, 0), (4, 0), (5, 0), (6, 0))
    assert not segments_meet((0, 0), (4, 4), (1, 0), (5, 4))
    assert not segments_meet((0, 0), (1, 1), (3, 0), (2, 5))


def test_in_cone_convex_corner():
    apex, first, last = (0, 0), (1, 0), (0, 1)
    assert in_cone(apex, first, last, (1, 1))
    assert not in_cone(apex, first, last, (-1, -1))
    assert not in_cone(apex, first, last, (2, 0))


def test_in_cone_reflex_corner():
    apex, first, last = (0, 0), (0, 1), (1, 0)
    assert in_cone(apex, first, last, (-1, -1))
    assert in_cone(apex, first, last, (-1, 1))
    assert not in_cone(apex, first, last, (1, 1))


def test_winding_number_sign_follows_orientation():
    assert winding_number(SQUARE, [0, 1, 2, 3], (2, 2)) == 1
    assert winding_number(SQUARE, [3, 2, 1, 0], (2, 2)) == -1
    assert winding_number(SQUARE, [0, 1, 2, 3], (6, 2)) == 0


def test_contains_counts_boundary_as_inside():
    ring = range(4)
    assert contains(SQUARE, ring, (2, 2))
    assert contains(SQUARE, ring, (4, 2))
    assert contains(SQUARE, ring, (0, 0))
    assert on_boundary(SQUARE, ring, (2, 4))
    assert not contains(SQUARE, ring, (5, 2))
    assert not contains(SQUARE, ring, (-1, -1))
