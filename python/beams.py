"""
Beam propagation over a grid of mirrors and splitters.
Pipeline: deflect (symbol rules) -> advance (one step) -> traverse (whole beam graph)
-> coverage (one entry) -> max_coverage (every boundary entry).
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from functools import partial

from grid_types import (
    EMPTY,
    MIRROR_BACKSLASH,
    MIRROR_SLASH,
    SPLITTER_HORIZONTAL,
    SPLITTER_VERTICAL,
    BeamState,
    Direction,
    Grid,
    InvalidCell,
    Position,
)

logger = logging.getLogger(__name__)


class ExecutorKind(Enum):
    """Worker pool used by the maximization driver."""

    THREAD = "thread"
    PROCESS = "process"


@dataclass(frozen=True)
class SimulationOptions:
    """Options governing the maximization driver."""

    workers: int = 1  # 1 = run every entry on the calling thread
    executor: ExecutorKind = ExecutorKind.THREAD


# =============================================================================
# Deflection Rules
# =============================================================================


_REFLECTIONS: dict[tuple[Direction, str], Direction] = {
    (Direction.E, MIRROR_SLASH): Direction.N,
    (Direction.N, MIRROR_SLASH): Direction.E,
    (Direction.W, MIRROR_SLASH): Direction.S,
    (Direction.S, MIRROR_SLASH): Direction.W,
    (Direction.E, MIRROR_BACKSLASH): Direction.S,
    (Direction.S, MIRROR_BACKSLASH): Direction.E,
    (Direction.W, MIRROR_BACKSLASH): Direction.N,
    (Direction.N, MIRROR_BACKSLASH): Direction.W,
}

_HORIZONTAL = (Direction.E, Direction.W)
_VERTICAL = (Direction.N, Direction.S)


def deflect(incoming: Direction, symbol: str) -> tuple[Direction] | tuple[Direction, Direction]:
    """
    Outgoing direction(s) for a beam travelling `incoming` into a cell holding `symbol`.

    Returns a 1-tuple for pass-through or reflection, a 2-tuple for a split.

    Raises:
        InvalidCell: If symbol is not a known deflector
    """
    if symbol == EMPTY:
        return (incoming,)
    if symbol in (MIRROR_SLASH, MIRROR_BACKSLASH):
        return (_REFLECTIONS[(incoming, symbol)],)
    if symbol == SPLITTER_HORIZONTAL:
        if incoming in _HORIZONTAL:
            return (incoming,)
        return (Direction.W, Direction.E)
    if symbol == SPLITTER_VERTICAL:
        if incoming in _VERTICAL:
            return (incoming,)
        return (Direction.N, Direction.S)
    raise InvalidCell(symbol)


# =============================================================================
# Beam State & Traversal
# =============================================================================


def advance(grid: Grid, state: BeamState) -> tuple[BeamState, ...]:
    """
    Successor states of `state`: deflect, step one cell, drop anything that left the grid.

    Returns zero, one or two states.
    """
    symbol = grid.symbol_at(state.position)
    try:
        outgoing = deflect(state.direction, symbol)
    except InvalidCell as e:
        raise InvalidCell(e.symbol, state.position) from e

    if len(outgoing) == 1:
        nxt = BeamState(state.position + outgoing[0], outgoing[0])
        return (nxt,) if grid.in_bounds(nxt.position) else ()

    first = BeamState(state.position + outgoing[0], outgoing[0])
    second = BeamState(state.position + outgoing[1], outgoing[1])
    if grid.in_bounds(first.position):
        if grid.in_bounds(second.position):
            return (first, second)
        return (first,)
    if grid.in_bounds(second.position):
        return (second,)
    return ()


@dataclass
class TraversalResult:
    """
    Outcome of one traversal from a single entry state.

    Usage:
        result = traverse(grid, entry)
        print(result.coverage)     # Number of cells touched
        print(result.covered)      # Set of touched positions
    """

    entry: BeamState
    visited: set[BeamState] = field(default_factory=set)
    coverage_grid: list[list[bool]] = field(default_factory=list)

    @property
    def coverage(self) -> int:
        return sum(sum(row) for row in self.coverage_grid)

    @property
    def covered(self) -> set[Position]:
        return {
            Position(r, c)
            for r, row in enumerate(self.coverage_grid)
            for c, hit in enumerate(row)
            if hit
        }

    @property
    def steps(self) -> int:
        """Number of distinct beam states processed."""
        return len(self.visited)


def traverse(grid: Grid, entry: BeamState | None = None) -> TraversalResult:
    """
    Walk the beam graph from `entry`, processing each distinct beam state once.

    Cycles in the mirror arrangement are broken by the visited set: a state
    seen before is dropped. The state space is at most 4 * rows * cols, so
    the walk always terminates.

    Args:
        grid: The grid to traverse
        entry: Starting beam state (defaults to top-left heading East)

    Returns:
        TraversalResult with visited states and the coverage grid

    Raises:
        ValueError: If entry lies outside the grid
        InvalidCell: If the beam reaches an unknown symbol
    """
    if entry is None:
        entry = BeamState.start()
    if not grid.in_bounds(entry.position):
        raise ValueError(f"Entry {entry} lies outside grid of shape {grid.shape}")

    result = TraversalResult(entry, coverage_grid=[[False] * grid.cols for _ in range(grid.rows)])
    visited = result.visited
    covered = result.coverage_grid

    pending = [entry]
    while pending:
        state = pending.pop()
        if state in visited:
            continue
        visited.add(state)
        covered[state.position.row][state.position.col] = True
        pending.extend(advance(grid, state))

    logger.debug(
        "Traversal from (%d, %d) %s: %d states, %d cells",
        entry.position.row,
        entry.position.col,
        entry.direction.value,
        result.steps,
        result.coverage,
    )
    return result


# =============================================================================
# Coverage Engine
# =============================================================================


def coverage(grid: Grid, entry: BeamState | None = None) -> int:
    """Number of distinct cells touched by the beam entering at `entry`."""
    return traverse(grid, entry).coverage


# =============================================================================
# Maximization Driver
# =============================================================================


def boundary_entries(grid: Grid) -> list[BeamState]:
    """
    Every state from which a beam can enter the grid from outside.

    Rows are entered from both horizontal edges, columns from both vertical
    edges, giving 2 * rows + 2 * cols states. States sharing a corner cell
    differ in direction, so none coincide even on 1xN or 1x1 grids.
    """
    last_row = grid.rows - 1
    last_col = grid.cols - 1
    entries: list[BeamState] = []
    for r in range(grid.rows):
        entries.append(BeamState(Position(r, 0), Direction.E))
        entries.append(BeamState(Position(r, last_col), Direction.W))
    for c in range(grid.cols):
        entries.append(BeamState(Position(0, c), Direction.S))
        entries.append(BeamState(Position(last_row, c), Direction.N))
    return entries


def _make_executor(options: SimulationOptions) -> Executor:
    match options.executor:
        case ExecutorKind.THREAD:
            return ThreadPoolExecutor(max_workers=options.workers)
        case ExecutorKind.PROCESS:
            return ProcessPoolExecutor(max_workers=options.workers)


def _all_coverages(grid: Grid, entries: list[BeamState], options: SimulationOptions) -> list[int]:
    if options.workers < 1:
        raise ValueError(f"workers must be at least 1, got {options.workers}")
    if options.workers == 1:
        return [coverage(grid, entry) for entry in entries]
    with _make_executor(options) as pool:
        # map preserves entry order; exceptions re-raise on iteration
        return list(pool.map(partial(coverage, grid), entries))


def best_entry(grid: Grid, options: SimulationOptions | None = None) -> tuple[BeamState, int]:
    """
    The boundary entry with the highest coverage, and that coverage.

    Ties resolve to the first entry in boundary_entries order.
    """
    if options is None:
        options = SimulationOptions()

    entries = boundary_entries(grid)
    results = _all_coverages(grid, entries, options)
    best_idx = max(range(len(entries)), key=lambda i: results[i])
    logger.info(
        "Evaluated %d boundary entries on %dx%d grid with %d worker(s): best %s covers %d",
        len(entries),
        grid.rows,
        grid.cols,
        options.workers,
        entries[best_idx],
        results[best_idx],
    )
    return entries[best_idx], results[best_idx]


def max_coverage(grid: Grid, options: SimulationOptions | None = None) -> int:
    """Maximum coverage over every boundary entry."""
    return best_entry(grid, options)[1]
