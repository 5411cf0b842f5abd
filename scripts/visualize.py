#!/usr/bin/env python3
"""
Plot meshes of .poly files and the benchmark timings.

Polygon files go through the batch pipeline, so the meshing policies can be
set from the command line.
"""

import argparse
import logging
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from areamesh.arena import PointArena
from areamesh.config import MeshConfig
from areamesh.pipeline import mesh_groups
from areamesh.plotting import fit_scaling, plot_benchmark, plot_mesh
from areamesh.polyfile import read_poly, read_poly_group
from areamesh.triangulate import Triangulator

log = logging.getLogger("visualize")


def plot_poly_files(paths, output_dir: Path, config: MeshConfig, show_diagonals: bool) -> None:
    arena = PointArena()
    groups = [read_poly_group(path, arena) for path in paths]
    result = mesh_groups(arena, groups, config)
    print(result.report().to_string(index=False))

    offset = 0
    for path, group, report in zip(paths, groups, result.reports):
        count = 3 * report.triangles
        indices = result.indices[offset:offset + count]
        offset += count
        if report.status != "ok":
            log.warning("%s was skipped: %s", path, report.error)
            continue

        points, ends, outer_count = read_poly(path)
        base = group.fragments[0].head
        local = [i - base for i in indices]
        diagonals = ()
        if show_diagonals:
            tri = Triangulator(points, ends, outer_count)
            tri.triangulate()
            diagonals = tri.diagonals

        fig, ax = plt.subplots(figsize=(6, 6))
        plot_mesh(points, local, ax, ends=ends,
                  title=f"{path.stem} ({report.triangles} triangles)", diagonals=diagonals)
        out = output_dir / f"triangulation_{path.stem}.png"
        fig.tight_layout()
        fig.savefig(out, dpi=150, bbox_inches="tight")
        plt.close(fig)
        log.info("Saved %s", out)


def plot_results(csv_path: Path, output_dir: Path) -> None:
    df = pd.read_csv(csv_path)
    log.info("Loaded %d benchmark results", len(df))
    plot_benchmark(df, output_dir / "benchmark.png")
    for row in fit_scaling(df).itertuples(index=False):
        print(f"  {row.family:<12} T = {row.a:.4e} * n^{row.b:.3f}   R^2 = {row.r2:.4f}")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("polygons", nargs="*", type=Path, help=".poly files to draw")
    parser.add_argument("--results", type=Path, default=Path("results/benchmark_results.csv"))
    parser.add_argument("--output", type=Path, default=Path("figures"))
    parser.add_argument("--diagonals", action="store_true", help="highlight decomposition diagonals")
    parser.add_argument("--log-level", default="INFO")
    MeshConfig.add_arguments(parser)
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    args.output.mkdir(parents=True, exist_ok=True)

    if args.polygons:
        plot_poly_files(args.polygons, args.output, MeshConfig.from_args(args), args.diagonals)

    if args.results.exists():
        plot_results(args.results, args.output)
    elif not args.polygons:
        log.error("Benchmark results not found at %s", args.results)
        sys.exit(1)


if __name__ == "__main__":
    main()
