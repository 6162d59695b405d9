"""Grid representation: pattern parsing and slot derivation."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import BLOCK_MARKER, FILL_MARKER, MIN_SLOT_LENGTH, Bounds, Direction
from ..core.exceptions import StructuralError
from ..core.models import Cell, Slot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CrosswordGrid:
    """Immutable occupancy matrix plus the word slots derived from it."""

    def __init__(self, structure: Sequence[Sequence[bool]]) -> None:
        if not structure:
            raise StructuralError("Grid pattern has no rows")
        width = max(len(row) for row in structure)
        if width == 0:
            raise StructuralError("Grid pattern has no columns")
        # Ragged rows are padded with blocked cells.
        self.structure: Tuple[Tuple[bool, ...], ...] = tuple(
            tuple(bool(v) for v in row) + (False,) * (width - len(row))
            for row in structure
        )
        self.bounds = Bounds(rows=len(self.structure), cols=width)
        self.slots: Tuple[Slot, ...] = tuple(self._derive_slots())
        LOGGER.debug(
            "Parsed %sx%s grid with %s slots",
            self.height,
            self.width,
            len(self.slots),
        )

    @classmethod
    def from_pattern(cls, text: str, fill_marker: str = FILL_MARKER) -> "CrosswordGrid":
        """Parse a newline-delimited pattern; ``fill_marker`` cells are fillable."""

        lines = text.splitlines()
        while lines and not lines[-1]:
            lines.pop()
        if not lines:
            raise StructuralError("Grid pattern is empty")
        return cls([[char == fill_marker for char in line] for line in lines])

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def height(self) -> int:
        return self.bounds.rows

    @property
    def width(self) -> int:
        return self.bounds.cols

    def is_open(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col) and self.structure[row][col]

    def open_cells(self) -> Iterator[Cell]:
        for r in range(self.height):
            for c in range(self.width):
                if self.structure[r][c]:
                    yield (r, c)

    @property
    def is_fully_open(self) -> bool:
        return all(all(row) for row in self.structure)

    def slot_at(self, row: int, col: int, direction: Direction) -> Optional[Slot]:
        for slot in self.slots:
            if (slot.row, slot.col, slot.direction) == (row, col, direction):
                return slot
        return None

    def to_pattern(self, fill_marker: str = FILL_MARKER, block_marker: str = BLOCK_MARKER) -> str:
        return "\n".join(
            "".join(fill_marker if cell else block_marker for cell in row)
            for row in self.structure
        )

    # ------------------------------------------------------------------
    # Slot derivation
    # ------------------------------------------------------------------
    def _derive_slots(self) -> List[Slot]:
        slots: List[Slot] = []
        for r in range(self.height):
            for c in range(self.width):
                if not self.structure[r][c]:
                    continue
                for direction in (Direction.DOWN, Direction.ACROSS):
                    dr, dc = direction.step
                    if self.is_open(r - dr, c - dc):
                        continue
                    length = self._run_length(r, c, direction)
                    if length >= MIN_SLOT_LENGTH:
                        slots.append(Slot(r, c, direction, length))
        return slots

    def _run_length(self, row: int, col: int, direction: Direction) -> int:
        dr, dc = direction.step
        length = 0
        while self.is_open(row + dr * length, col + dc * length):
            length += 1
        return length

    def __repr__(self) -> str:
        return f"CrosswordGrid({self.height}x{self.width}, slots={len(self.slots)})"
