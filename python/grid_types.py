"""
Shared type definitions for the beamgrid system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

EMPTY = "."
MIRROR_SLASH = "/"
MIRROR_BACKSLASH = "\\"
SPLITTER_HORIZONTAL = "-"
SPLITTER_VERTICAL = "|"

SYMBOLS = frozenset({EMPTY, MIRROR_SLASH, MIRROR_BACKSLASH, SPLITTER_HORIZONTAL, SPLITTER_VERTICAL})


class Direction(Enum):
    """Cardinal direction of travel."""

    N = "N"  # Up (decreasing row)
    S = "S"  # Down (increasing row)
    E = "E"  # Right (increasing col)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """Unit displacement as (row_delta, col_delta)."""
        return _DELTAS[self]


_DELTAS = {
    Direction.N: (-1, 0),
    Direction.S: (1, 0),
    Direction.E: (0, 1),
    Direction.W: (0, -1),
}


# =============================================================================
# Errors
# =============================================================================


class BeamGridError(ValueError):
    """Base class for grid and simulation errors."""


class MalformedGrid(BeamGridError):
    """Grid is empty or not rectangular."""


class InvalidCell(BeamGridError):
    """A cell holds a symbol that is not a known deflector."""

    def __init__(self, symbol: str, position: Position | None = None) -> None:
        self.symbol = symbol
        self.position = position
        where = f" at row {position.row}, column {position.col}" if position is not None else ""
        super().__init__(
            f"Invalid cell symbol {symbol!r}{where}\n"
            f"  Valid symbols: {', '.join(repr(s) for s in sorted(SYMBOLS))}"
        )


# =============================================================================
# Positions and beam states
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A (row, col) cell coordinate. May lie outside a grid; check with Grid.in_bounds."""

    row: int
    col: int

    def __add__(self, direction: Direction) -> Position:
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


@dataclass(frozen=True)
class BeamState:
    """A beam occupying a cell, having arrived while travelling in `direction`."""

    position: Position
    direction: Direction

    @classmethod
    def start(cls) -> BeamState:
        """Default entry: top-left cell heading East."""
        return cls(Position(0, 0), Direction.E)


# =============================================================================
# Grid
# =============================================================================


@dataclass(frozen=True)
class Grid:
    """A rectangular 2D grid of deflector symbols."""

    cells: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise MalformedGrid("Grid must have at least one row and one column")
        cols = len(self.cells[0])
        mismatched = [(i, len(row)) for i, row in enumerate(self.cells) if len(row) != cols]
        if mismatched:
            raise MalformedGrid(
                f"Inconsistent row lengths: expected {cols} columns, "
                f"got {', '.join(f'row {i}: {n}' for i, n in mismatched)}"
            )

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def symbol_at(self, pos: Position) -> str:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} outside grid of shape {self.shape}")
        return self.cells[pos.row][pos.col]
