"""
ASCII rendering for beam traversals.

Provides two views of a traversal:
1. Coverage map - '#' for every covered cell, '.' elsewhere
2. Overlay - the grid's own symbols with covered cells coloured
"""

from __future__ import annotations

from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from beams import TraversalResult
from grid_types import EMPTY, Grid

COVERED = "#"
UNCOVERED = "."


def render_coverage_map(result: TraversalResult) -> str:
    """Render covered cells as '#' and the rest as '.', one line per row."""
    return "\n".join(
        "".join(COVERED if hit else UNCOVERED for hit in row) for row in result.coverage_grid
    )


def render_overlay(grid: Grid, result: TraversalResult) -> str:
    """
    Render the grid's symbols with the traversal's covered cells coloured.

    Covered deflectors are yellow, covered empty cells are red, the entry
    cell is white. Uncovered cells are blue.

    Args:
        grid: The grid the traversal ran on
        result: The traversal to overlay

    Returns:
        Rendered string with ANSI colour codes
    """
    if len(result.coverage_grid) != grid.rows:
        raise ValueError(
            f"Traversal has {len(result.coverage_grid)} rows but grid has {grid.rows}"
        )

    entry = result.entry.position
    lines: list[str] = []
    for r, (symbols, hits) in enumerate(zip(grid.cells, result.coverage_grid)):
        line: list[str] = []
        for c, (symbol, hit) in enumerate(zip(symbols, hits)):
            colorize: Callable[[str], str]
            if (r, c) == (entry.row, entry.col):
                colorize = chalk.white
            elif not hit:
                colorize = chalk.blue
            elif symbol == EMPTY:
                colorize = chalk.red
            else:
                colorize = chalk.yellow
            line.append(colorize(symbol))
        lines.append("".join(line))
    return "\n".join(lines)
