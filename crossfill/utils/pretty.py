"""Pretty-print helpers for filled grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..core.constants import BLANK_CELL

if TYPE_CHECKING:
    from ..engine.filler import SolveResult
    from ..engine.grid import CrosswordGrid


BLOCK_SYMBOL = "#"
EMPTY_SYMBOL = "."


def cell_symbol(letter: str, is_open: bool) -> str:
    if letter != BLANK_CELL:
        return letter
    return EMPTY_SYMBOL if is_open else BLOCK_SYMBOL


def format_grid(grid: CrosswordGrid, letters: Optional[Sequence[Sequence[str]]] = None) -> str:
    """Render ``letters`` (or the bare pattern) with row and column indices."""

    width = grid.width
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.height):
        row_cells = [
            cell_symbol(letters[r][c] if letters else BLANK_CELL, grid.is_open(r, c))
            for c in range(width)
        ]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(
    grid: CrosswordGrid,
    letters: Optional[Sequence[Sequence[str]]] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid, letters), file=stream)


def print_fill_summary(result: SolveResult, *, stream=None) -> None:
    """Print grid + word and search statistics for a fill result."""

    stream = stream or sys.stdout
    grid = result.grid
    pretty_print_grid(grid, result.letters, stream=stream)

    open_cells = sum(1 for _ in grid.open_cells())
    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.height} x {grid.width} ({grid.height * grid.width} cells)", file=stream)
    print(f"  Open cells:    {open_cells}", file=stream)
    print(f"  Slots:         {len(grid.slots)}", file=stream)

    words: List[str] = [result.assignment[s] for s in grid.slots if s in result.assignment]
    if words:
        lengths = Counter(len(w) for w in words)
        dist_parts = [f"{length}:{count}" for length, count in sorted(lengths.items())]
        print(file=stream)
        print("--- Words ---", file=stream)
        for slot in grid.slots:
            print(f"  {slot.label:<18} {result.assignment.get(slot, '')}", file=stream)
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Status:        {result.status.value}", file=stream)
    print(f"  Strategy:      {result.strategy.value}", file=stream)
    print(f"  Nodes:         {result.stats.nodes}", file=stream)
    print(f"  Backtracks:    {result.stats.backtracks}", file=stream)
    print(f"  Elapsed:       {result.stats.elapsed:.3f}s", file=stream)
    if result.message:
        print(f"  Message:       {result.message}", file=stream)
