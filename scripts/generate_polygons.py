#!/usr/bin/env python3
"""
Generate deterministic integer polygon datasets.

One ``.poly`` file per family and size; see ``areamesh.polyfile`` for the format.
"""

import argparse
import logging
from pathlib import Path

from areamesh.generators import FAMILIES
from areamesh.polyfile import write_poly

log = logging.getLogger("generate_polygons")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--output", default="polygons/generated", type=Path)
    parser.add_argument(
        "--sizes",
        nargs="+",
        type=int,
        default=[10, 50, 100, 500, 1000, 2000, 5000, 10000],
    )
    parser.add_argument("--families", nargs="+", choices=sorted(FAMILIES), default=sorted(FAMILIES))
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    for family in args.families:
        for n in args.sizes:
            points, ends = FAMILIES[family](n)
            path = args.output / f"{family}_{n}.poly"
            write_poly(points, path, ends)
            log.debug("wrote %s (%d points, %d rings)", path, len(points), len(ends))

    log.info("Generated polygons in %s", args.output)


if __name__ == "__main__":
    main()
