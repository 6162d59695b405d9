"""Shared constants and enumerations for the crossword filler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)


class FillStrategy(str, Enum):
    """Search strategies available to :class:`CrosswordFiller`."""

    CSP = "csp"
    TRIE = "trie"
    CP_SAT = "cp_sat"


class SolveStatus(str, Enum):
    """Terminal outcome of a fill request."""

    SOLVED = "SOLVED"
    UNSATISFIABLE = "UNSATISFIABLE"
    EXHAUSTED = "EXHAUSTED"
    BUDGET_EXCEEDED = "BUDGET_EXCEEDED"


FILL_MARKER = "_"
BLOCK_MARKER = "#"
BLANK_CELL = ""
MIN_SLOT_LENGTH = 2


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
