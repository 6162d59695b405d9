"""Deterministic validation of filled grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Container, List, Mapping, Optional, Set

from ..core.exceptions import ValidationError
from ..core.models import Slot
from ..utils.logger import get_logger
from .constraints import ConstraintGraph
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs the solution-validity checks over a complete assignment."""

    def __init__(
        self,
        vocabulary: Optional[Container[str]] = None,
        unique_words: bool = True,
    ) -> None:
        self.vocabulary = vocabulary
        self.unique_words = unique_words

    def validate(
        self,
        grid: CrosswordGrid,
        assignment: Mapping[Slot, str],
        graph: Optional[ConstraintGraph] = None,
    ) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_complete(grid, assignment)
            self._check_lengths(assignment)
            if self.unique_words:
                self._check_no_duplicate_words(assignment)
            if graph is None:
                graph = ConstraintGraph(grid.slots)
            self._check_crossings(graph, assignment)
            if self.vocabulary is not None:
                self._check_vocabulary(assignment)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_complete(self, grid: CrosswordGrid, assignment: Mapping[Slot, str]) -> None:
        for slot in grid.slots:
            if not assignment.get(slot):
                raise ValidationError(f"Slot {slot.label} has no word")
        extra = set(assignment) - set(grid.slots)
        if extra:
            labels = ", ".join(sorted(slot.label for slot in extra))
            raise ValidationError(f"Assignment names slots outside the grid: {labels}")

    def _check_lengths(self, assignment: Mapping[Slot, str]) -> None:
        for slot, word in assignment.items():
            if len(word) != slot.length:
                raise ValidationError(
                    f"Word '{word}' has length {len(word)} but slot {slot.label} needs {slot.length}"
                )

    def _check_no_duplicate_words(self, assignment: Mapping[Slot, str]) -> None:
        seen: Set[str] = set()
        for slot, word in assignment.items():
            if word in seen:
                raise ValidationError(f"Duplicate word '{word}' at {slot.label}")
            seen.add(word)

    def _check_crossings(self, graph: ConstraintGraph, assignment: Mapping[Slot, str]) -> None:
        for x, y, (i, j) in graph.overlapping_pairs():
            if assignment[x][i] != assignment[y][j]:
                raise ValidationError(
                    f"Crossing mismatch between {x.label} ('{assignment[x]}') "
                    f"and {y.label} ('{assignment[y]}')"
                )

    def _check_vocabulary(self, assignment: Mapping[Slot, str]) -> None:
        for slot, word in assignment.items():
            if word not in self.vocabulary:
                raise ValidationError(f"Invalid word '{word}' at {slot.label}")
