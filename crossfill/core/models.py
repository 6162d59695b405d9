"""Data models supporting the crossword filler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .constants import Direction

Cell = Tuple[int, int]
Overlap = Tuple[int, int]


@dataclass(frozen=True)
class Slot:
    """A maximal run of fillable cells that receives one word.

    Slots are value records: two slots with the same start, direction and
    length are equal and hash alike, so they serve directly as mapping keys.
    """

    row: int
    col: int
    direction: Direction
    length: int

    @property
    def cells(self) -> Tuple[Cell, ...]:
        dr, dc = self.direction.step
        return tuple((self.row + dr * k, self.col + dc * k) for k in range(self.length))

    @property
    def label(self) -> str:
        return f"{self.row},{self.col} {self.direction.value.lower()} ({self.length})"

    def offset_of(self, cell: Cell) -> int:
        """Return the index of ``cell`` within this slot's word."""

        return self.cells.index(cell)


Assignment = Dict[Slot, str]


@dataclass
class SearchStats:
    """Counters collected while searching for a fill."""

    nodes: int = 0
    backtracks: int = 0
    elapsed: float = 0.0
