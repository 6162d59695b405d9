"""Fill orchestration.

Pipeline:
  1. Parse the pattern and derive slots.
  2. Build the constraint graph and the initial domains.
  3. Prune with node consistency and AC-3.
  4. Run the configured strategy (backtracking search, CP-SAT or trie fill).
  5. Render and validate the grid.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from ..core.constants import FILL_MARKER, FillStrategy, SolveStatus
from ..core.exceptions import SearchBudgetExceeded, StructuralError, ValidationError
from ..core.models import Assignment, SearchStats
from ..utils.logger import get_logger
from .arc_consistency import ac3
from .constraints import ConstraintGraph
from .cp_sat import solve_with_cp_sat
from .domains import DomainStore
from .grid import CrosswordGrid
from .renderer import LetterGrid, assignment_from_letters, letters_to_rows, render_letters
from .search import BacktrackingSearch, SearchBudget
from .trie_fill import fill_open_grid
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class FillerConfig:
    strategy: Union[FillStrategy, str] = FillStrategy.CSP
    unique_words: bool = True
    inference: bool = True
    seed: Optional[int] = None
    randomize: bool = False
    max_nodes: Optional[int] = None
    time_limit: Optional[float] = None
    validate: bool = True
    cp_sat_workers: int = 4
    fill_marker: str = FILL_MARKER

    def __post_init__(self) -> None:
        self.strategy = FillStrategy(self.strategy)

    def to_budget(self) -> SearchBudget:
        return SearchBudget(max_nodes=self.max_nodes, time_limit=self.time_limit)

    def make_rng(self) -> Optional[random.Random]:
        """Random source for tie-breaking; None keeps the search deterministic."""

        if not self.randomize and self.seed is None:
            return None
        return random.Random(self.seed)


@dataclass
class SolveResult:
    status: SolveStatus
    grid: CrosswordGrid
    assignment: Assignment = field(default_factory=dict)
    letters: Optional[LetterGrid] = None
    stats: SearchStats = field(default_factory=SearchStats)
    strategy: FillStrategy = FillStrategy.CSP
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def rows(self, blank: str = "#") -> List[str]:
        if self.letters is None:
            return []
        return letters_to_rows(self.letters, blank=blank)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "strategy": self.strategy.value,
            "message": self.message,
            "height": self.grid.height,
            "width": self.grid.width,
            "grid": self.letters,
            "slots": [
                {
                    "start": [slot.row, slot.col],
                    "direction": slot.direction.value,
                    "length": slot.length,
                    "word": self.assignment.get(slot),
                }
                for slot in self.grid.slots
            ],
            "stats": {
                "nodes": self.stats.nodes,
                "backtracks": self.stats.backtracks,
                "elapsed": round(self.stats.elapsed, 6),
            },
        }


class CrosswordFiller:
    """High-level entry point: pattern + vocabulary in, :class:`SolveResult` out."""

    def __init__(self, config: Optional[FillerConfig] = None) -> None:
        self.config = config or FillerConfig()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def fill(self, pattern: Union[str, CrosswordGrid], words: Iterable[str]) -> SolveResult:
        grid = (
            pattern
            if isinstance(pattern, CrosswordGrid)
            else CrosswordGrid.from_pattern(pattern, self.config.fill_marker)
        )
        vocabulary = list(dict.fromkeys(words))
        strategy = self.config.strategy
        LOGGER.info(
            "Filling %sx%s grid: %s slots, %s words, strategy=%s",
            grid.height,
            grid.width,
            len(grid.slots),
            len(vocabulary),
            strategy.value,
        )
        if strategy is FillStrategy.TRIE:
            return self._fill_open_grid(grid, vocabulary)

        graph = ConstraintGraph(grid.slots)
        domains = DomainStore.from_vocabulary(grid.slots, vocabulary)
        domains.enforce_node_consistency()
        empty = domains.empty_slots()
        if empty:
            return self._failure(
                SolveStatus.UNSATISFIABLE,
                grid,
                f"No {empty[0].length}-letter words for slot {empty[0].label}",
            )
        if not ac3(graph, domains):
            return self._failure(
                SolveStatus.UNSATISFIABLE, grid, "Arc consistency emptied a slot domain"
            )
        LOGGER.info("Domains after AC-3: %s candidates", domains.total_size())

        stats = SearchStats()
        if strategy is FillStrategy.CP_SAT:
            status, assignment = solve_with_cp_sat(
                graph,
                domains,
                unique_words=self.config.unique_words,
                time_limit=self.config.time_limit,
                seed=self.config.seed,
                num_workers=self.config.cp_sat_workers,
                stats=stats,
            )
        else:
            search = BacktrackingSearch(
                graph,
                domains,
                unique_words=self.config.unique_words,
                inference=self.config.inference,
                rng=self.config.make_rng(),
                budget=self.config.to_budget(),
            )
            stats = search.stats
            try:
                assignment = search.search()
            except SearchBudgetExceeded as exc:
                return self._failure(SolveStatus.BUDGET_EXCEEDED, grid, str(exc), stats)
            status = SolveStatus.SOLVED if assignment is not None else SolveStatus.EXHAUSTED

        if status is not SolveStatus.SOLVED or assignment is None:
            return self._failure(status, grid, "No assignment satisfies the grid", stats)
        return self._finish(grid, assignment, vocabulary, stats, graph)

    # ------------------------------------------------------------------
    # Strategies and helpers
    # ------------------------------------------------------------------
    def _fill_open_grid(self, grid: CrosswordGrid, vocabulary: List[str]) -> SolveResult:
        if not grid.is_fully_open or grid.height < 2 or grid.width < 2:
            raise StructuralError("Trie fill needs an open grid of at least 2x2 with no blocked cells")
        stats = SearchStats()
        try:
            letters = fill_open_grid(
                vocabulary,
                grid.height,
                grid.width,
                unique_words=self.config.unique_words,
                rng=self.config.make_rng(),
                budget=self.config.to_budget(),
                stats=stats,
            )
        except SearchBudgetExceeded as exc:
            return self._failure(SolveStatus.BUDGET_EXCEEDED, grid, str(exc), stats)
        if letters is None:
            return self._failure(SolveStatus.EXHAUSTED, grid, "No assignment satisfies the grid", stats)
        assignment = assignment_from_letters(grid, letters)
        return self._finish(grid, assignment, vocabulary, stats)

    def _finish(
        self,
        grid: CrosswordGrid,
        assignment: Assignment,
        vocabulary: List[str],
        stats: SearchStats,
        graph: Optional[ConstraintGraph] = None,
    ) -> SolveResult:
        if self.config.validate:
            validator = GridValidator(set(vocabulary), unique_words=self.config.unique_words)
            validation = validator.validate(grid, assignment, graph)
            if not validation.ok:
                raise ValidationError(f"Grid validation failed: {validation.messages}")
        LOGGER.info("Grid filled with %s words", len(assignment))
        return SolveResult(
            status=SolveStatus.SOLVED,
            grid=grid,
            assignment=dict(assignment),
            letters=render_letters(grid, assignment),
            stats=stats,
            strategy=self.config.strategy,
        )

    def _failure(
        self,
        status: SolveStatus,
        grid: CrosswordGrid,
        message: str,
        stats: Optional[SearchStats] = None,
    ) -> SolveResult:
        LOGGER.warning("Fill failed (%s): %s", status.value, message)
        return SolveResult(
            status=status,
            grid=grid,
            stats=stats or SearchStats(),
            strategy=self.config.strategy,
            message=message,
        )


def fill_crossword(
    pattern: Union[str, CrosswordGrid], words: Iterable[str], **options: Any
) -> SolveResult:
    """Shortcut for ``CrosswordFiller(FillerConfig(**options)).fill(pattern, words)``."""

    return CrosswordFiller(FillerConfig(**options)).fill(pattern, words)
