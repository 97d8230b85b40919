#!/usr/bin/env python3
"""
Cave generator command line

Seeds a random wall grid, runs the cellular automaton and prints the
result, one row per line.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional, TextIO

from cave_engine import DEFAULT_CONFIG, CaveGrid, ConfigError, GenerationConfig, generate
from cave_logging import setup_logging

logger = logging.getLogger("cavegen.cli")


def format_grid(grid: CaveGrid, wall_char: str = "#", open_char: str = ".") -> str:
    chars = (open_char, wall_char)
    return "\n".join("".join(chars[c] for c in row) for row in grid.rows())


def build_parser() -> argparse.ArgumentParser:
    d = DEFAULT_CONFIG
    parser = argparse.ArgumentParser(prog="cavegen", description="Generate a cellular-automaton cave.")
    parser.add_argument("--size", type=int, default=None,
                        help=f"square grid side; overrides --width/--height (default {d.width})")
    parser.add_argument("--width", type=int, default=d.width)
    parser.add_argument("--height", type=int, default=d.height)
    parser.add_argument("--density", type=float, default=d.wall_density,
                        help="initial wall percentage, 0-100")
    parser.add_argument("--threshold", type=int, default=d.neighbor_threshold,
                        help="wall neighbors needed to form a wall (walls persist at one less)")
    parser.add_argument("--iterations", type=int, default=d.iterations)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--wall-char", default="#")
    parser.add_argument("--open-char", default=".")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    width, height = args.width, args.height
    if args.size is not None:
        width = height = args.size
    return GenerationConfig(
        width=width,
        height=height,
        wall_density=args.density,
        neighbor_threshold=args.threshold,
        iterations=args.iterations,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    setup_logging(level)

    if len(args.wall_char) != 1 or len(args.open_char) != 1:
        parser.error("--wall-char and --open-char must be single characters")
    try:
        config = config_from_args(args)
    except ConfigError as e:
        parser.error(str(e))

    grid = generate(config)
    out = out if out is not None else sys.stdout
    out.write(format_grid(grid, args.wall_char, args.open_char) + "\n")
    logger.info("walls=%d/%d", grid.wall_count(), grid.width * grid.height)
    return 0


if __name__ == "__main__":
    sys.exit(main())
