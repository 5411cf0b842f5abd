"""
Matplotlib helpers for looking at meshes and benchmark tables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.collections import PatchCollection
from matplotlib.patches import Polygon as MplPolygon

from .triangulate import ring_spans
from .validate import triangles_of

COLORS = {
    'convex': '#377eb8',
    'random': '#e41a1c',
    'star': '#4daf4a',
    'comb': '#984ea3',
    'holes': '#ff7f00',
    'random_holes': '#a65628',
}


def plot_mesh(points: Sequence[Tuple[int, int]], indices: Sequence[int], ax=None,
              ends: Optional[Sequence[int]] = None, title: str = "",
              color: str = '#377eb8', diagonals: Sequence[Tuple[int, int]] = ()):
    """
    Draw triangles with the ring outlines on top.

    ``points`` may be a list of pairs, an (N, 2) array or a ``PointArena``.
    ``indices`` is the flat triangle list; ``ends`` splits ``points`` into rings
    for the outline and defaults to a single ring.  Returns the axes.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))
    vertices = np.asarray([tuple(p) for p in points], dtype=float).reshape(-1, 2)

    patches = [MplPolygon(vertices[list(tri)], closed=True) for tri in triangles_of(indices)]
    p = PatchCollection(patches, alpha=0.4, facecolor=color, edgecolor='#333333', linewidth=0.5)
    ax.add_collection(p)

    if ends is None:
        ends = [len(vertices)]
    for s, e in ring_spans(ends, len(vertices)):
        ring = np.vstack([vertices[s:e], vertices[s]])
        ax.plot(ring[:, 0], ring[:, 1], 'k-', linewidth=1.5)

    for u, w in diagonals:
        ax.plot(vertices[[u, w], 0], vertices[[u, w], 1], '--', color='#e41a1c', linewidth=1.0)

    if len(vertices) <= 500:
        ax.scatter(vertices[:, 0], vertices[:, 1], c='black', s=12, zorder=5)

    ax.set_aspect('equal')
    ax.autoscale_view()
    if title:
        ax.set_title(title)
    return ax


def _per_vertex(df: pd.DataFrame) -> pd.DataFrame:
    runs = df.groupby(['family', 'num_vertices'], sort=True).agg(
        reflex=('reflex_count', 'first'), rings=('rings', 'first'), time_ms=('time_ms', 'mean'))
    runs = runs.reset_index()
    runs['us_per_vertex'] = 1000.0 * runs['time_ms'] / runs['num_vertices']
    return runs


def plot_benchmark(df: pd.DataFrame, path: Path) -> None:
    """
    Two panels from a ``run_benchmark`` table, saved to ``path``.

    Left: microseconds per input vertex against N, which stays flat while the
    sweep behaves like n log r.  Right: mean time against the reflex count r,
    with marker size growing with the number of rings.
    """
    runs = _per_vertex(df)
    fig, (left, right) = plt.subplots(1, 2, figsize=(12, 5))

    for family, data in runs.groupby('family'):
        color = COLORS.get(family, 'gray')
        left.plot(data['num_vertices'], data['us_per_vertex'], 'o-', label=family, color=color)
        right.scatter(data['reflex'], data['time_ms'], s=12 + 4 * data['rings'],
                      color=color, alpha=0.7, label=family)

    left.set_xscale('log')
    left.set_xlabel('vertices N')
    left.set_ylabel('time per vertex (us)')
    left.legend()
    right.set_xscale('symlog')
    right.set_yscale('log')
    right.set_xlabel('reflex vertices r')
    right.set_ylabel('time (ms)')
    for ax in (left, right):
        ax.grid(True, alpha=0.3)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def fit_scaling(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-family fit of mean time = a * N^b, one row per family with columns
    family, a, b, r2.  Families timed at fewer than two sizes are left out.
    """
    runs = _per_vertex(df)
    runs = runs[(runs['num_vertices'] > 0) & (runs['time_ms'] > 0)]
    rows = []
    for family, data in runs.groupby('family'):
        if len(data) < 2:
            continue
        log_n = np.log(data['num_vertices'].to_numpy(dtype=float))
        log_t = np.log(data['time_ms'].to_numpy(dtype=float))
        b, log_a = np.polyfit(log_n, log_t, 1)
        r2 = np.corrcoef(log_n, log_t)[0, 1] ** 2 if np.ptp(log_t) > 0 else 1.0
        rows.append({'family': family, 'a': float(np.exp(log_a)), 'b': float(b), 'r2': float(r2)})
    return pd.DataFrame(rows, columns=['family', 'a', 'b', 'r2'])
