"""Batch meshing options and their command-line wiring."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from .assembler import FORK_POLICIES

HOLE_POLICIES = ("skip_group", "drop_hole", "fail")
DEGENERATE_POLICIES = ("skip_group", "drop_ring")


@dataclass(frozen=True)
class MeshConfig:
    """
    fork_policy:       ``lowest_id`` follows the lowest fragment at a fork,
                       ``reject`` marks the group malformed.
    hole_policy:       what to do with a hole outside every outer ring:
                       skip the group, drop the hole, or abort the run.
    degenerate_policy: skip the group owning a degenerate ring, or drop the ring.
    workers:           processes used by ``mesh_groups``; 1 runs in-process.
    chunksize:         groups handed to a worker at a time.
    """
    fork_policy: str = "lowest_id"
    hole_policy: str = "skip_group"
    degenerate_policy: str = "skip_group"
    workers: int = 1
    chunksize: int = 16

    def __post_init__(self):
        if self.fork_policy not in FORK_POLICIES:
            raise ValueError(f"fork_policy must be one of {FORK_POLICIES}, got {self.fork_policy!r}")
        if self.hole_policy not in HOLE_POLICIES:
            raise ValueError(f"hole_policy must be one of {HOLE_POLICIES}, got {self.hole_policy!r}")
        if self.degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(
                f"degenerate_policy must be one of {DEGENERATE_POLICIES}, got {self.degenerate_policy!r}"
            )
        if int(self.workers) < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if int(self.chunksize) < 1:
            raise ValueError(f"chunksize must be >= 1, got {self.chunksize}")

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--fork-policy", choices=FORK_POLICIES, default="lowest_id")
        parser.add_argument("--hole-policy", choices=HOLE_POLICIES, default="skip_group")
        parser.add_argument("--degenerate-policy", choices=DEGENERATE_POLICIES, default="skip_group")
        parser.add_argument("--workers", type=int, default=1)
        parser.add_argument("--chunksize", type=int, default=16)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "MeshConfig":
        return cls(
            fork_policy=args.fork_policy,
            hole_policy=args.hole_policy,
            degenerate_policy=args.degenerate_policy,
            workers=args.workers,
            chunksize=args.chunksize,
        )
