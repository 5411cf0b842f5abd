import logging

import pytest

from areamesh.arena import PointArena
from areamesh.config import MeshConfig
from areamesh.errors import UncontainedHole
from areamesh.pipeline import index_buffer_size, mesh_group, mesh_groups, mesh_rings
from areamesh.predicates import cross
from areamesh.types import Fragment, PolygonGroup, Role


@pytest.fixture
def arena():
    arena = PointArena()
    arena.extend([(0, 0), (10, 0), (10, 10), (0, 10)])      # 0..3 outer
    arena.extend([(2, 2), (4, 2), (4, 4), (2, 4)])          # 4..7 hole
    arena.extend([(50, 50), (52, 50), (52, 52), (50, 52)])  # 8..11 far away
    return arena


def outer_split(group_id="good"):
    return PolygonGroup(group_id, [
        Fragment((0, 1, 2), Role.OUTER, "w1"),
        Fragment((2, 3, 0), Role.OUTER, "w2"),
        Fragment((4, 5, 6, 7, 4), Role.INNER, "w3"),
    ])


def area2(arena, indices):
    return sum(cross(*arena.points(indices[i:i + 3])) for i in range(0, len(indices), 3))


def test_mesh_group_with_hole(arena):
    mesh = mesh_group(arena, outer_split())
    assert mesh.triangle_count == 8
    assert mesh.instances == 1
    assert mesh.rings == 2
    assert area2(arena, mesh.indices) == 2 * (100 - 4)
    for i in range(0, len(mesh.indices), 3):
        assert cross(*arena.points(mesh.indices[i:i + 3])) > 0


def test_two_outer_rings_are_separate_instances(arena):
    group = PolygonGroup("pair", [
        Fragment((0, 1, 2, 3, 0), Role.OUTER, "a"),
        Fragment((8, 9, 10, 11, 8), Role.OUTER, "b"),
    ])
    mesh = mesh_group(arena, group)
    assert mesh.instances == 2
    assert mesh.triangle_count == 4


def test_skip_and_continue(arena, caplog):
    broken = PolygonGroup("broken", [Fragment((0, 1, 2), Role.OUTER, "w4")])
    with caplog.at_level(logging.WARNING, logger="areamesh.pipeline"):
        result = mesh_groups(arena, [broken, outer_split()])
    assert result.meshed == 1
    assert result.skipped == 1
    assert len(result.indices) == 3 * 8
    assert result.triangles().shape == (8, 3)
    assert "skipping group broken" in caplog.text
    assert "w4" in caplog.text

    df = result.report()
    assert list(df["group_id"]) == ["broken", "good"]
    assert list(df["status"]) == ["skipped", "ok"]
    assert df.loc[0, "error_kind"] == "MalformedRing"
    assert df.loc[1, "triangles"] == 8


def test_output_list_is_appended(arena):
    out = [7, 7, 7]
    result = mesh_groups(arena, [outer_split()], out=out)
    assert result.indices is out
    assert out[:3] == [7, 7, 7]
    assert len(out) == 3 + 3 * 8


def far_hole_group():
    return PolygonGroup("far", [
        Fragment((0, 1, 2, 3, 0), Role.OUTER, "o"),
        Fragment((8, 9, 10, 11, 8), Role.INNER, "h"),
    ])


def test_uncontained_hole_skips_group_by_default(arena):
    result = mesh_groups(arena, [far_hole_group()])
    assert result.skipped == 1
    assert result.report().loc[0, "error_kind"] == "UncontainedHole"


def test_uncontained_hole_dropped(arena):
    result = mesh_groups(arena, [far_hole_group()], MeshConfig(hole_policy="drop_hole"))
    assert result.meshed == 1
    assert len(result.indices) == 3 * 2


def test_uncontained_hole_fails_run(arena):
    with pytest.raises(UncontainedHole) as info:
        mesh_groups(arena, [far_hole_group()], MeshConfig(hole_policy="fail"))
    assert info.value.group_id == "far"


def degenerate_hole_group():
    return PolygonGroup("thin", [
        Fragment((0, 1, 2, 3, 0), Role.OUTER, "o"),
        Fragment((4, 5, 4), Role.INNER, "sliver"),
    ])


def test_degenerate_ring_skips_group_by_default(arena):
    result = mesh_groups(arena, [degenerate_hole_group()])
    assert result.skipped == 1
    assert result.report().loc[0, "error_kind"] == "DegenerateRing"


def test_degenerate_ring_dropped(arena):
    mesh = mesh_group(arena, degenerate_hole_group(), MeshConfig(degenerate_policy="drop_ring"))
    assert mesh.dropped_rings == 1
    assert mesh.triangle_count == 2


def test_fork_policy_is_applied(arena):
    group = PolygonGroup("fork", [
        Fragment((0, 1, 2), Role.OUTER, "a"),
        Fragment((2, 3, 0), Role.OUTER, "b"),
        Fragment((2, 9, 8), Role.OUTER, "c"),
        Fragment((8, 2), Role.OUTER, "d"),
    ])
    assert mesh_groups(arena, [group]).meshed == 1
    result = mesh_groups(arena, [group], MeshConfig(fork_policy="reject"))
    assert result.skipped == 1


def test_empty_group(arena):
    result = mesh_groups(arena, [PolygonGroup("empty")])
    assert result.meshed == 1
    assert result.indices == []


def test_worker_pool_matches_serial(arena):
    groups = [outer_split(f"g{i}") for i in range(6)] + [far_hole_group()]
    serial = mesh_groups(arena, groups)
    parallel = mesh_groups(arena, groups, MeshConfig(workers=2, chunksize=2))
    assert parallel.indices == serial.indices
    assert list(parallel.report()["status"]) == list(serial.report()["status"])


def test_mesh_rings_skips_degenerate(arena, caplog):
    with caplog.at_level(logging.WARNING, logger="areamesh.pipeline"):
        out = mesh_rings(arena, [[0, 1, 2, 3, 0], [4, 5, 4], [8, 9, 10, 11]])
    assert len(out) == 3 * 4
    assert set(out) == {0, 1, 2, 3, 8, 9, 10, 11}
    assert "skipping closed ring 1" in caplog.text


def test_index_buffer_size():
    assert index_buffer_size([4, 8]) == 3 * 8
