#!/usr/bin/env python3
"""
Time the triangulator on every generator family and write a CSV.

Each run is validated before its time is recorded.
"""

import argparse
import logging
from pathlib import Path

from areamesh.bench import run_benchmark, summarize
from areamesh.generators import FAMILIES

log = logging.getLogger("benchmark")


def main() -> None:
    ap = argparse.ArgumentParser(description="Benchmark the sweep triangulator.")
    ap.add_argument("--sizes", nargs="+", type=int, default=[100, 500, 1000, 2000, 5000])
    ap.add_argument("--families", nargs="+", choices=sorted(FAMILIES), default=sorted(FAMILIES))
    ap.add_argument("--repeats", type=int, default=3)
    ap.add_argument("--output", type=Path, default=Path("results/benchmark_results.csv"))
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    df = run_benchmark(args.sizes, args.families, repeats=args.repeats)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    log.info("Wrote %d runs to %s", len(df), args.output)
    print(summarize(df).to_string(index=False))


if __name__ == "__main__":
    main()
