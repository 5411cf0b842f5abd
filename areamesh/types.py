"""Data model shared by the assembler, resolver, triangulator and pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, List, Optional, Tuple


class Role(Enum):
    OUTER = "outer"
    INNER = "inner"


@dataclass(frozen=True)
class Fragment:
    """
    An ordered run of point indices taken from one source way.

    Closed when the first and last index coincide.
    """
    points: Tuple[int, ...]
    role: Role = Role.OUTER
    source_id: Hashable = None

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))
        if not self.points:
            raise ValueError(f"fragment {self.source_id!r} has no points")
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role(self.role))

    @property
    def head(self) -> int:
        return self.points[0]

    @property
    def tail(self) -> int:
        return self.points[-1]

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 1 and self.points[0] == self.points[-1]


@dataclass
class Ring:
    """A closed loop of point indices; the closing point is not repeated."""
    points: List[int]
    role: Role = Role.OUTER
    source_ids: Tuple = ()

    def __len__(self) -> int:
        return len(self.points)

    def reverse(self) -> None:
        self.points.reverse()


@dataclass
class PolygonGroup:
    """All fragments of one multipolygon, as handed over by ingestion."""
    group_id: Hashable
    fragments: List[Fragment] = field(default_factory=list)

    def by_role(self, role: Role) -> List[Fragment]:
        return [f for f in self.fragments if f.role is role]


@dataclass
class PolygonInstance:
    """One outer ring and the holes assigned to it."""
    outer: Ring
    inners: List[Ring] = field(default_factory=list)
    group_id: Optional[Hashable] = None

    @property
    def rings(self) -> List[Ring]:
        return [self.outer] + self.inners

    def flatten(self) -> Tuple[List[int], List[int], int]:
        """Point indices of all rings back to back, cumulative ring ends, outer count."""
        indices: List[int] = []
        ends: List[int] = []
        for ring in self.rings:
            indices.extend(ring.points)
            ends.append(len(indices))
        return indices, ends, 1
