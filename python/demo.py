"""
Demonstration layouts and a walkthrough of the beamgrid simulator.
"""

from ascii_render import render_coverage_map, render_overlay
from beams import best_entry, traverse
from grid_parser import parse_grid

LAYOUTS = {
    # The puzzle example: 46 cells from the top-left, 51 at best
    "example": r"""
.|...\....
|.-.\.....
.....|-...
........|.
..........
.........\
..../.\\..
.-.-/..|..
.|....-|.\
..//.|....
""",
    # A mirror ring; only a start inside the ring circles it
    "loop": r"""
/.\
...
\./
""",
    # Splitters feeding each other
    "splitters": r"""
.-.|.
.....
.|.-.
""",
}


def demo(name: str = "example") -> None:
    """Trace a layout from the top-left and from its best boundary entry."""
    grid = parse_grid(LAYOUTS[name])
    print(f"=== {name} ({grid.rows}x{grid.cols}) ===")

    result = traverse(grid)
    print(render_overlay(grid, result))
    print()
    print(render_coverage_map(result))
    print(f"Coverage from top-left: {result.coverage} cells, {result.steps} beam states")
    print()

    entry, best = best_entry(grid)
    print(
        f"Best entry: row {entry.position.row}, col {entry.position.col}, "
        f"heading {entry.direction.value} -> {best} cells"
    )
    print(render_overlay(grid, traverse(grid, entry)))
    print()


if __name__ == "__main__":
    for layout in LAYOUTS:
        demo(layout)
