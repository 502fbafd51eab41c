"""
Grid parsing utilities for beamgrid.

Input format: one row per line, one cell per character. Valid characters
are '.', '/', '\\', '-' and '|'.
"""

from __future__ import annotations

import logging
from pathlib import Path

from grid_types import SYMBOLS, Grid, InvalidCell, MalformedGrid, Position

__all__ = ["parse_grid", "load_grid"]

logger = logging.getLogger(__name__)


def parse_grid(text: str) -> Grid:
    """
    Parse a grid from its text form.

    Leading/trailing blank lines and trailing whitespace on each line are
    ignored. Every remaining line is one row.

    Example:
        .|.
        /.\\
        Creates a 2x3 grid with rows ".|." and "/.\\".

    Args:
        text: The grid text

    Returns:
        Parsed Grid

    Raises:
        MalformedGrid: If the input is empty or rows have different lengths
        InvalidCell: If a character is not a known deflector symbol
    """
    row_strings = [line.rstrip() for line in text.strip("\n").split("\n")]
    while row_strings and not row_strings[-1]:
        row_strings.pop()
    while row_strings and not row_strings[0]:
        row_strings.pop(0)

    if not row_strings:
        raise MalformedGrid("Empty grid definition: at least one row is required")

    for row_idx, row_str in enumerate(row_strings):
        for col_idx, char in enumerate(row_str):
            if char not in SYMBOLS:
                raise InvalidCell(char, Position(row_idx, col_idx))

    cols = len(row_strings[0])
    mismatched = [(i, len(row)) for i, row in enumerate(row_strings) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in grid\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise MalformedGrid(error_msg)

    grid = Grid(tuple(row_strings))
    logger.debug("Parsed %dx%d grid", grid.rows, grid.cols)
    return grid


def load_grid(path: str | Path) -> Grid:
    """Read and parse a grid file."""
    return parse_grid(Path(path).read_text(encoding="utf-8"))
