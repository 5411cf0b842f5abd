"""
areamesh: exact integer triangulation of map polygons with holes.

Fragments are stitched into rings, rings are oriented and grouped into
polygons with holes, and every polygon is triangulated with a sweep-line
monotone decomposition.  All predicates run on Python integers.
"""

from .arena import PointArena
from .assembler import assemble_rings
from .config import MeshConfig
from .errors import DegenerateRing, MalformedRing, MeshError, SweepError, UncontainedHole
from .pipeline import GroupMesh, GroupReport, MeshResult, mesh_group, mesh_groups, mesh_rings
from .resolver import resolve_group
from .triangulate import Triangulator, expected_triangle_count, triangulate, triangulate_indices
from .types import Fragment, PolygonGroup, PolygonInstance, Ring, Role
from .validate import verify_triangulation

__version__ = "0.1.0"

__all__ = [
    "PointArena",
    "Fragment", "Ring", "Role", "PolygonGroup", "PolygonInstance",
    "assemble_rings", "resolve_group",
    "Triangulator", "triangulate", "triangulate_indices", "expected_triangle_count",
    "MeshConfig", "GroupMesh", "GroupReport", "MeshResult",
    "mesh_group", "mesh_groups", "mesh_rings",
    "MeshError", "MalformedRing", "UncontainedHole", "DegenerateRing", "SweepError",
    "verify_triangulation",
]
