"""
Stitch open way fragments into closed rings.

Fragments of one polygon group and one role are joined end to end by shared
point indices.  A walk starts from the lowest unvisited fragment and follows
whichever fragment continues its tail, reversing it when the match is at its
far end, until the tail comes back to the starting point.

Forks (more than one unvisited fragment touching the tail) are not resolved
geometrically.  The default policy takes the fragment with the lowest ordinal,
which is deterministic but may pick the wrong branch at a true junction;
``fork_policy="reject"`` treats any fork as a malformed group instead.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from .errors import MalformedRing
from .types import Fragment, Ring, Role

log = logging.getLogger(__name__)

FORK_POLICIES = ("lowest_id", "reject")


def _endpoint_index(fragments: Sequence[Fragment], open_ids: List[int]) -> Dict[int, List[int]]:
    """Map each endpoint to the ordinals of the open fragments ending there."""
    index: Dict[int, List[int]] = defaultdict(list)
    for fid in open_ids:
        frag = fragments[fid]
        index[frag.head].append(fid)
        index[frag.tail].append(fid)
    return index


def assemble_rings(fragments: Sequence[Fragment], role: Role = None,
                   fork_policy: str = "lowest_id") -> List[Ring]:
    """
    Turn ``fragments`` into closed rings.

    Closed fragments become rings on their own.  Open ones are chained; a
    chain that cannot be closed raises ``MalformedRing`` naming the chain's
    source ids and how many fragments were still unmatched.
    """
    if fork_policy not in FORK_POLICIES:
        raise ValueError(f"unknown fork policy {fork_policy!r}")
    if role is None:
        role = fragments[0].role if fragments else Role.OUTER

    rings: List[Ring] = []
    open_ids: List[int] = []
    for fid, frag in enumerate(fragments):
        if frag.is_closed:
            rings.append(Ring(list(frag.points[:-1]), role, (frag.source_id,)))
        elif len(frag.points) == 1:
            rings.append(Ring([frag.head], role, (frag.source_id,)))
        else:
            open_ids.append(fid)

    if not open_ids:
        return rings

    index = _endpoint_index(fragments, open_ids)
    visited = set()

    for seed in open_ids:
        if seed in visited:
            continue
        visited.add(seed)
        frag = fragments[seed]
        chain = [frag.source_id]
        points = list(frag.points)
        head = frag.head
        tail = frag.tail

        while tail != head:
            candidates = [fid for fid in index[tail] if fid not in visited]
            if not candidates:
                remaining = len(open_ids) - len(visited)
                raise MalformedRing(
                    f"dangling endpoint {tail}: chain cannot be closed",
                    source_ids=chain, remaining=remaining,
                )
            if len(candidates) > 1:
                if fork_policy == "reject":
                    raise MalformedRing(
                        f"fork at point {tail}: {len(candidates)} fragments continue the chain",
                        source_ids=chain + [fragments[f].source_id for f in candidates],
                        remaining=len(open_ids) - len(visited),
                    )
                log.debug("fork at point %s, continuing with fragment %s of %s",
                          tail, min(candidates), candidates)
            nxt = min(candidates)
            visited.add(nxt)
            frag = fragments[nxt]
            chain.append(frag.source_id)
            if frag.head == tail:
                points.extend(frag.points[1:])
                tail = frag.tail
            else:
                points.extend(reversed(frag.points[:-1]))
                tail = frag.head

        points.pop()
        rings.append(Ring(points, role, tuple(chain)))

    return rings
