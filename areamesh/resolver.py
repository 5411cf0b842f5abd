"""
Orientation and containment for the rings of one polygon group.

Outer rings are made counter-clockwise and holes clockwise, then every hole is
handed to the smallest outer ring that contains it.  Outer rings nested inside
each other stay separate polygon instances.
"""

from __future__ import annotations

import logging
from typing import Hashable, List, Sequence, Tuple

from .arena import PointArena
from .errors import DegenerateRing, UncontainedHole
from .predicates import contains, signed_area
from .types import PolygonInstance, Ring, Role

log = logging.getLogger(__name__)


def ring_area(arena: PointArena, ring: Ring) -> int:
    """Twice the signed area of ``ring`` (positive when counter-clockwise)."""
    pts = arena.points(ring.points)
    return signed_area(pts, range(len(pts)))


def check_ring(arena: PointArena, ring: Ring) -> int:
    """
    Raise ``DegenerateRing`` unless ``ring`` has three distinct points and a
    non-zero area.  Returns its signed area.
    """
    if len(ring.points) < 3:
        raise DegenerateRing(f"ring has {len(ring.points)} points",
                             source_ids=ring.source_ids, size=len(ring.points))
    pts = arena.points(ring.points)
    if len(set(pts)) < 3:
        raise DegenerateRing(f"ring has {len(set(pts))} distinct points",
                             source_ids=ring.source_ids, size=len(ring.points))
    area = signed_area(pts, range(len(pts)))
    if area == 0:
        raise DegenerateRing("ring encloses no area",
                             source_ids=ring.source_ids, size=len(ring.points))
    return area


def resolve_group(arena: PointArena, rings: Sequence[Ring], group_id: Hashable = None,
                  drop_uncontained: bool = False) -> List[PolygonInstance]:
    """
    Orient ``rings`` and assign each inner ring to its enclosing outer ring.

    Returns one ``PolygonInstance`` per outer ring, smallest first.  A hole
    that no outer ring contains raises ``UncontainedHole`` unless
    ``drop_uncontained`` is set, in which case it is logged and left out.
    """
    outers: List[Tuple[int, Ring]] = []
    inners: List[Ring] = []
    for ring in rings:
        area = check_ring(arena, ring)
        if ring.role is Role.OUTER:
            if area < 0:
                ring.reverse()
            outers.append((abs(area), ring))
        else:
            if area > 0:
                ring.reverse()
            inners.append(ring)

    outers.sort(key=lambda item: item[0])
    instances = [PolygonInstance(ring, [], group_id) for _, ring in outers]
    outer_pts = [arena.points(inst.outer.points) for inst in instances]

    for hole in inners:
        probe = arena[hole.points[0]]
        for inst, pts in zip(instances, outer_pts):
            if contains(pts, range(len(pts)), probe):
                inst.inners.append(hole)
                break
        else:
            if not drop_uncontained:
                raise UncontainedHole("inner ring lies outside every outer ring",
                                      source_ids=hole.source_ids, group_id=group_id)
            log.warning("group %s: dropping inner ring %s outside every outer ring",
                        group_id, ",".join(str(s) for s in hole.source_ids))

    return instances
