"""CP-SAT crossword filling backend using OR-Tools."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import SolveStatus
from ..core.exceptions import CrosswordError
from ..core.models import Assignment, Cell, SearchStats
from ..utils.logger import get_logger
from .constraints import ConstraintGraph
from .domains import DomainStore

LOGGER = get_logger(__name__)


def solve_with_cp_sat(
    graph: ConstraintGraph,
    domains: DomainStore,
    *,
    unique_words: bool = True,
    time_limit: Optional[float] = None,
    seed: Optional[int] = None,
    num_workers: int = 4,
    stats: Optional[SearchStats] = None,
) -> Tuple[SolveStatus, Optional[Assignment]]:
    """Fill every slot of ``graph`` from ``domains`` via CP-SAT.

    Args:
        graph: Constraint graph whose slots are filled.
        domains: Candidate words per slot, normally already arc consistent.
        unique_words: Forbid the same word in two slots.
        time_limit: Solver wall-clock limit in seconds.
        seed: Solver random seed.
        num_workers: Parallel CP-SAT search workers.
        stats: Optional counters updated with branches and wall time.

    Returns:
        ``(SOLVED, assignment)``, ``(UNSATISFIABLE, None)`` when the model is
        proven infeasible, or ``(BUDGET_EXCEEDED, None)`` when the time limit
        hits first.
    """
    slots = graph.slots
    if not slots:
        return SolveStatus.SOLVED, {}
    if domains.empty_slots():
        return SolveStatus.UNSATISFIABLE, None

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Shared word and letter numbering
    # ------------------------------------------------------------------
    vocabulary = list(dict.fromkeys(word for slot in slots for word in domains[slot]))
    word_ids = {word: index for index, word in enumerate(vocabulary)}
    alphabet = sorted({char for word in vocabulary for char in word})
    letter_ids = {char: index for index, char in enumerate(alphabet)}

    # ------------------------------------------------------------------
    # Step 2: Cell letter variables
    # ------------------------------------------------------------------
    cell_vars: Dict[Cell, cp_model.IntVar] = {}
    for slot in slots:
        for r, c in slot.cells:
            if (r, c) not in cell_vars:
                cell_vars[(r, c)] = model.new_int_var(0, len(alphabet) - 1, f"L_{r}_{c}")

    # ------------------------------------------------------------------
    # Step 3: Per-slot word variable tied to its letters by a table
    # ------------------------------------------------------------------
    word_vars = {}
    for slot in slots:
        word_var = model.new_int_var(
            0, len(vocabulary) - 1, f"W_{slot.row}_{slot.col}_{slot.direction.value}"
        )
        tuples = [
            [word_ids[word]] + [letter_ids[char] for char in word]
            for word in domains[slot]
        ]
        model.add_allowed_assignments([word_var] + [cell_vars[cell] for cell in slot.cells], tuples)
        word_vars[slot] = word_var

    if unique_words and len(word_vars) > 1:
        model.add_all_different(list(word_vars.values()))

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    if time_limit is not None:
        solver.parameters.max_time_in_seconds = time_limit
    if seed is not None:
        solver.parameters.random_seed = seed
    solver.parameters.num_workers = num_workers

    LOGGER.info(
        "CP-SAT: %d slots, %d cell vars, %d words, solving...",
        len(slots),
        len(cell_vars),
        len(vocabulary),
    )
    status = solver.solve(model)
    if stats is not None:
        stats.nodes += solver.num_branches
        stats.elapsed = solver.wall_time

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: model proven infeasible")
        return SolveStatus.UNSATISFIABLE, None
    if status == cp_model.MODEL_INVALID:
        raise CrosswordError(f"CP-SAT rejected the model: {model.validate()}")
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return SolveStatus.BUDGET_EXCEEDED, None

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 5: Extract solution
    # ------------------------------------------------------------------
    return SolveStatus.SOLVED, {slot: vocabulary[solver.value(var)] for slot, var in word_vars.items()}
