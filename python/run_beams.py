"""
Command-line runner: load a grid, report coverage from the default entry
and the best coverage over every boundary entry.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ascii_render import render_overlay
from beams import ExecutorKind, SimulationOptions, best_entry, traverse
from grid_parser import load_grid
from grid_types import BeamGridError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beamgrid",
        description="Count cells energized by a light beam bouncing through a mirror grid.",
    )
    parser.add_argument("input", help="grid file, one row per line")
    parser.add_argument("--workers", type=int, default=1, help="worker pool size for task 2")
    parser.add_argument(
        "--executor",
        choices=[kind.value for kind in ExecutorKind],
        default=ExecutorKind.THREAD.value,
        help="worker pool type for task 2",
    )
    parser.add_argument("--show", action="store_true", help="print the covered cells")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    if args.workers < 1:
        console.print(Text(f"--workers must be at least 1, got {args.workers}", style="bold red"))
        return 1

    try:
        grid = load_grid(args.input)
    except (OSError, BeamGridError) as e:
        console.print(Text(f"Could not load {args.input}:", style="bold red"))
        console.print(Text(str(e)))
        return 1

    options = SimulationOptions(workers=args.workers, executor=ExecutorKind(args.executor))

    start = time.perf_counter()
    first = traverse(grid)
    task_1_time = time.perf_counter() - start

    start = time.perf_counter()
    entry, best = best_entry(grid, options)
    task_2_time = time.perf_counter() - start

    table = Table(title=f"{args.input} ({grid.rows}x{grid.cols})")
    table.add_column("Task")
    table.add_column("Result", justify="right")
    table.add_column("Time", justify="right")
    table.add_row("1: coverage from top-left", str(first.coverage), f"{task_1_time * 1000:.2f} ms")
    table.add_row("2: max coverage", str(best), f"{task_2_time * 1000:.2f} ms")
    console.print(table)

    if args.show:
        # Overlays already carry ANSI codes from chalk
        print(render_overlay(grid, first))
        print()
        print(
            f"Best entry: row {entry.position.row}, col {entry.position.col}, "
            f"heading {entry.direction.value}"
        )
        print(render_overlay(grid, traverse(grid, entry)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
