"""
In-process benchmark of the triangulator over the generator families.

Every run is validated; a failing run raises instead of being timed.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Iterable, List, Optional

import pandas as pd

from .generators import FAMILIES, Polygon
from .triangulate import Triangulator
from .validate import verify_triangulation

log = logging.getLogger(__name__)


@dataclass
class RunResult:
    family: str
    num_vertices: int
    rings: int
    reflex_count: int
    triangles: int
    time_ms: float


def run_once(family: str, points, ends) -> RunResult:
    tri = Triangulator(points, ends)
    t0 = time.perf_counter()
    indices = tri.triangulate()
    elapsed = (time.perf_counter() - t0) * 1000.0
    ok, msg = verify_triangulation(points, indices, ends)
    if not ok:
        raise RuntimeError(f"{family} n={len(points)}: {msg}")
    return RunResult(family, len(points), len(ends), tri.r, len(indices) // 3, elapsed)


def run_benchmark(sizes: Iterable[int], families: Optional[Iterable[str]] = None,
                  repeats: int = 3,
                  generators: Optional[Dict[str, Callable[[int], Polygon]]] = None) -> pd.DataFrame:
    """One row per (family, size, repeat)."""
    generators = generators or FAMILIES
    families = list(families) if families is not None else list(generators)
    rows: List[dict] = []
    for family in families:
        gen = generators[family]
        for n in sizes:
            points, ends = gen(n)
            for _ in range(repeats):
                rows.append(asdict(run_once(family, points, ends)))
            log.info("%s n=%d: %.3f ms", family, len(points), rows[-1]["time_ms"])
    return pd.DataFrame(rows, columns=list(RunResult.__dataclass_fields__))


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Mean and standard deviation of the time per family and size."""
    return (
        df.groupby(['family', 'num_vertices'])
        .agg(reflex=('reflex_count', 'first'), triangles=('triangles', 'first'),
             time_ms_mean=('time_ms', 'mean'), time_ms_std=('time_ms', 'std'))
        .reset_index()
    )
