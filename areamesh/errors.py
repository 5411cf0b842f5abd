"""
Structural errors raised while turning fragments into triangles.

Every error is local to one polygon group; the batch driver catches
``MeshError`` per group and keeps going with the rest of the dataset.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class MeshError(Exception):
    """Base class for failures that invalidate a single polygon group."""

    def __init__(self, message: str, source_ids: Sequence = (), group_id=None):
        super().__init__(message)
        self.source_ids: Tuple = tuple(source_ids)
        self.group_id = group_id

    def describe(self) -> str:
        parts = [str(self)]
        if self.group_id is not None:
            parts.append(f"group={self.group_id}")
        if self.source_ids:
            parts.append("sources=" + ",".join(str(s) for s in self.source_ids))
        return " ".join(parts)


class MalformedRing(MeshError):
    """Fragments could not be stitched into a closed loop."""

    def __init__(self, message: str, source_ids: Sequence = (), remaining: int = 0,
                 group_id=None):
        super().__init__(message, source_ids, group_id)
        self.remaining = remaining


class UncontainedHole(MeshError):
    """An inner ring lies outside every outer ring of its group."""


class DegenerateRing(MeshError):
    """
    A ring has fewer than three distinct points or encloses no area.

    ``ring`` is the ring ordinal within a triangulator call, when the ring
    was not built from identified fragments.
    """

    def __init__(self, message: str, source_ids: Sequence = (), size: Optional[int] = None,
                 group_id=None, ring: Optional[int] = None):
        super().__init__(message, source_ids, group_id)
        self.size = size
        self.ring = ring


class SweepError(MeshError):
    """The sweep reached a state that simple input can never produce."""
