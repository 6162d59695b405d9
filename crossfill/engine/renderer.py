"""Project an assignment back onto the 2-D grid."""

from __future__ import annotations

from typing import List, Mapping

from ..core.constants import BLANK_CELL
from ..core.models import Slot
from .grid import CrosswordGrid

LetterGrid = List[List[str]]


def render_letters(
    grid: CrosswordGrid,
    assignment: Mapping[Slot, str],
    blank: str = BLANK_CELL,
) -> LetterGrid:
    letters = [[blank for _ in range(grid.width)] for _ in range(grid.height)]
    for slot, word in assignment.items():
        for (row, col), letter in zip(slot.cells, word):
            letters[row][col] = letter
    return letters


def letters_to_rows(letters: LetterGrid, blank: str = "#") -> List[str]:
    """Join each row to a string, showing empty cells as ``blank``."""

    return ["".join(cell or blank for cell in row) for row in letters]


def assignment_from_letters(grid: CrosswordGrid, letters: LetterGrid) -> dict:
    """Read every slot's word off a filled letter grid."""

    return {
        slot: "".join(letters[row][col] for row, col in slot.cells)
        for slot in grid.slots
    }
