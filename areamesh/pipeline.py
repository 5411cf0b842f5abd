"""
Batch driver: fragments of many polygon groups in, one flat index list out.

Each group is assembled, resolved and triangulated on its own.  Structural
problems (``MeshError``) only cost the group they occur in: the group is logged,
reported as skipped, and the rest of the dataset carries on.  Groups share
nothing but the read-only point arena, so they can be fanned out over a process
pool.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .arena import PointArena
from .assembler import assemble_rings
from .config import MeshConfig
from .errors import DegenerateRing, MalformedRing, MeshError, UncontainedHole
from .resolver import check_ring, resolve_group
from .triangulate import expected_triangle_count, triangulate_indices
from .types import PolygonGroup, Ring, Role

log = logging.getLogger(__name__)


@dataclass
class GroupMesh:
    group_id: Hashable
    indices: List[int]
    instances: int = 0
    rings: int = 0
    points: int = 0
    dropped_rings: int = 0

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3


@dataclass
class GroupReport:
    group_id: Hashable
    status: str
    instances: int = 0
    rings: int = 0
    points: int = 0
    triangles: int = 0
    dropped_rings: int = 0
    error_kind: str = ""
    error: str = ""


@dataclass
class MeshResult:
    indices: List[int] = field(default_factory=list)
    reports: List[GroupReport] = field(default_factory=list)

    @property
    def meshed(self) -> int:
        return sum(1 for r in self.reports if r.status == "ok")

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.reports if r.status == "skipped")

    def triangles(self) -> np.ndarray:
        """Triangles as an (M, 3) array of arena indices."""
        return np.asarray(self.indices, dtype=np.int64).reshape(-1, 3)

    def report(self) -> pd.DataFrame:
        """One row per group."""
        columns = list(GroupReport.__dataclass_fields__)
        return pd.DataFrame([asdict(r) for r in self.reports], columns=columns)


def index_buffer_size(ends: Sequence[int], outer_count: int = 1) -> int:
    """Number of indices the triangulation of these rings writes."""
    return 3 * expected_triangle_count(ends, outer_count)


def build_rings(arena: PointArena, group: PolygonGroup,
                config: MeshConfig) -> Tuple[List[Ring], int]:
    """Assemble outer and inner rings of ``group``; returns the rings and how many were dropped."""
    rings: List[Ring] = []
    for role in (Role.OUTER, Role.INNER):
        fragments = group.by_role(role)
        if fragments:
            rings.extend(assemble_rings(fragments, role, config.fork_policy))

    kept: List[Ring] = []
    dropped = 0
    for ring in rings:
        try:
            check_ring(arena, ring)
        except DegenerateRing as exc:
            if config.degenerate_policy != "drop_ring":
                raise
            dropped += 1
            log.warning("group %s: dropping degenerate %s ring %s: %s", group.group_id,
                        ring.role.value, ",".join(str(s) for s in ring.source_ids), exc)
            continue
        kept.append(ring)
    return kept, dropped


def mesh_group(arena: PointArena, group: PolygonGroup,
               config: Optional[MeshConfig] = None) -> GroupMesh:
    """
    Triangulate one polygon group, returning arena indices.

    Raises the ``MeshError`` subclass describing why the group cannot be meshed.
    """
    config = config or MeshConfig()
    rings, dropped = build_rings(arena, group, config)
    instances = resolve_group(arena, rings, group.group_id,
                              drop_uncontained=config.hole_policy == "drop_hole")
    mesh = GroupMesh(group.group_id, [], len(instances), dropped_rings=dropped)
    for inst in instances:
        flat, ends, outer_count = inst.flatten()
        triangulate_indices(arena, flat, ends, outer_count, out=mesh.indices)
        mesh.rings += len(ends)
        mesh.points += len(flat)
    log.debug("group %s: %d instances, %d rings, %d triangles", group.group_id,
              mesh.instances, mesh.rings, mesh.triangle_count)
    return mesh


def _mesh_or_skip(arena: PointArena, config: MeshConfig,
                  group: PolygonGroup) -> Tuple[Optional[GroupMesh], GroupReport]:
    try:
        mesh = mesh_group(arena, group, config)
    except MeshError as exc:
        if exc.group_id is None:
            exc.group_id = group.group_id
        if isinstance(exc, UncontainedHole) and config.hole_policy == "fail":
            raise
        extra = ""
        if isinstance(exc, MalformedRing):
            extra = f" ({exc.remaining} fragments unmatched)"
        log.warning("skipping group %s: %s%s", group.group_id, exc.describe(), extra)
        return None, GroupReport(group.group_id, "skipped", error_kind=type(exc).__name__,
                                 error=str(exc))
    return mesh, GroupReport(group.group_id, "ok", mesh.instances, mesh.rings, mesh.points,
                             mesh.triangle_count, mesh.dropped_rings)


_worker_arena: Optional[PointArena] = None
_worker_config: Optional[MeshConfig] = None


def _init_worker(arena: PointArena, config: MeshConfig) -> None:
    global _worker_arena, _worker_config
    _worker_arena = arena
    _worker_config = config


def _worker_mesh(group: PolygonGroup) -> Tuple[Optional[GroupMesh], GroupReport]:
    return _mesh_or_skip(_worker_arena, _worker_config, group)


def mesh_groups(arena: PointArena, groups: Iterable[PolygonGroup],
                config: Optional[MeshConfig] = None,
                out: Optional[List[int]] = None) -> MeshResult:
    """
    Mesh every group, skipping the ones that fail.

    Triangles are appended to ``out`` (or a fresh list) in group order.  With
    ``config.workers > 1`` the groups are spread over a process pool.
    """
    config = config or MeshConfig()
    result = MeshResult(out if out is not None else [])

    if config.workers > 1:
        with ProcessPoolExecutor(max_workers=config.workers, initializer=_init_worker,
                                 initargs=(arena, config)) as executor:
            outcomes = list(executor.map(_worker_mesh, groups, chunksize=config.chunksize))
    else:
        outcomes = (_mesh_or_skip(arena, config, g) for g in groups)

    for mesh, report in outcomes:
        if mesh is not None:
            result.indices.extend(mesh.indices)
        result.reports.append(report)

    log.info("meshed %d groups, skipped %d, %d triangles", result.meshed, result.skipped,
             len(result.indices) // 3)
    return result


def mesh_rings(arena: PointArena, rings: Iterable[Sequence[int]],
               out: Optional[List[int]] = None) -> List[int]:
    """
    Triangulate closed rings that need no assembly, e.g. closed area ways.

    A repeated closing point is dropped.  Rings that cannot be triangulated are
    logged and skipped.
    """
    if out is None:
        out = []
    for k, ring in enumerate(rings):
        ring = list(ring)
        if len(ring) > 1 and ring[0] == ring[-1]:
            ring.pop()
        try:
            triangulate_indices(arena, ring, [len(ring)], 1, out=out)
        except MeshError as exc:
            log.warning("skipping closed ring %d: %s", k, exc)
    return out
