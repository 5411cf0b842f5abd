"""
Plain-text polygon files used by the scripts.

A file holds one or more rings, each written as a point count followed by one
``x y`` line per point.  A ``# ring outer`` or ``# ring inner`` line may
precede a ring; without one the first ring is outer and the rest are inner.
Other ``#`` lines are comments.

    # ring outer
    4
    0 0
    4 0
    4 4
    0 4
    # ring inner
    4
    ...
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from .arena import PointArena
from .types import Fragment, PolygonGroup, Role

Point = Tuple[int, int]


def write_poly(points: Sequence[Point], path: Path, ends: Sequence[int] = None,
               outer_count: int = 1) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if ends is None:
        ends = [len(points)]
    with open(path, "w", encoding="utf-8") as f:
        start = 0
        for r, end in enumerate(ends):
            role = "outer" if r < outer_count else "inner"
            f.write(f"# ring {role}\n")
            f.write(f"{end - start}\n")
            for x, y in points[start:end]:
                f.write(f"{int(x)} {int(y)}\n")
            start = end


def read_poly(path: Path) -> Tuple[List[Point], List[int], int]:
    """Return ``(points, ends, outer_count)``; outer rings are moved to the front."""
    lines = [ln.strip() for ln in Path(path).read_text(encoding="utf-8").splitlines()]
    rings: List[Tuple[str, List[Point]]] = []
    role = None
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line:
            continue
        if line.startswith("#"):
            parts = line[1:].split()
            if len(parts) == 2 and parts[0] == "ring":
                if parts[1] not in ("outer", "inner"):
                    raise RuntimeError(f"Unknown ring role {parts[1]!r} in {path}")
                role = parts[1]
            continue
        n = int(line)
        pts = []
        while len(pts) < n:
            if i >= len(lines):
                raise RuntimeError(f"Unexpected end of file in {path}: ring needs {n} points")
            row = lines[i]
            i += 1
            if not row or row.startswith("#"):
                continue
            x, y = row.split()
            pts.append((int(x), int(y)))
        if role is None:
            role = "outer" if not rings else "inner"
        rings.append((role, pts))
        role = None

    if not rings:
        raise RuntimeError(f"No rings found in {path}")

    ordered = [pts for role, pts in rings if role == "outer"] + \
              [pts for role, pts in rings if role == "inner"]
    points: List[Point] = []
    ends: List[int] = []
    for pts in ordered:
        points.extend(pts)
        ends.append(len(points))
    outer_count = sum(1 for role, _ in rings if role == "outer")
    return points, ends, outer_count


def read_poly_group(path: Path, arena: PointArena, group_id=None) -> PolygonGroup:
    """
    Load a ``.poly`` file into ``arena`` as one polygon group of closed fragments.

    Source ids are ``"<stem>:<ring number>"``.
    """
    path = Path(path)
    points, ends, outer_count = read_poly(path)
    base = arena.extend(points).start
    group = PolygonGroup(group_id if group_id is not None else path.stem)
    start = 0
    for r, end in enumerate(ends):
        ring = list(range(base + start, base + end))
        role = Role.OUTER if r < outer_count else Role.INNER
        group.fragments.append(Fragment(tuple(ring + ring[:1]), role, f"{path.stem}:{r}"))
        start = end
    return group
