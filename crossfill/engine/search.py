"""Backtracking search over arc-consistent slot domains.

The search keeps an explicit stack of frames instead of recursing. Each
frame owns the slot it is filling, an iterator over that slot's ordered
candidates and the domain snapshot it was opened with, so backing out of a
frame restores the domains the parent saw without undoing any pruning.
"""

from __future__ import annotations

import random
import time
from collections import Counter
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from ..core.exceptions import SearchBudgetExceeded
from ..core.models import Assignment, SearchStats, Slot
from ..utils.logger import get_logger
from .arc_consistency import ac3
from .constraints import ConstraintGraph
from .domains import DomainStore


LOGGER = get_logger(__name__)


@dataclass
class SearchBudget:
    """Upper bounds on search effort. ``None`` disables a bound."""

    max_nodes: Optional[int] = None
    time_limit: Optional[float] = None

    def deadline(self, started: float) -> Optional[float]:
        return None if self.time_limit is None else started + self.time_limit

    def charge(self, stats: SearchStats, deadline: Optional[float]) -> None:
        """Count one search node and raise once either bound is crossed."""

        stats.nodes += 1
        if self.max_nodes is not None and stats.nodes > self.max_nodes:
            raise SearchBudgetExceeded(f"Search exceeded {self.max_nodes} nodes")
        if deadline is not None and time.monotonic() > deadline:
            raise SearchBudgetExceeded(f"Search exceeded {self.time_limit:.2f}s time limit")


@dataclass
class _Frame:
    slot: Slot
    candidates: Iterator[str]
    domains: DomainStore


class BacktrackingSearch:
    """MRV/degree variable selection with least-constraining value ordering.

    With ``inference`` enabled every tentative assignment runs a forward
    step on a copy of the frame's domains: the slot is pinned to its word,
    the word is withdrawn from the other open slots (when words must be
    unique) and AC-3 re-runs on the arcs pointing into the changed slots.
    """

    def __init__(
        self,
        graph: ConstraintGraph,
        domains: DomainStore,
        *,
        unique_words: bool = True,
        inference: bool = True,
        rng: Optional[random.Random] = None,
        budget: Optional[SearchBudget] = None,
    ) -> None:
        self.graph = graph
        self.domains = domains
        self.unique_words = unique_words
        self.inference = inference
        self.rng = rng
        self.budget = budget or SearchBudget()
        self.stats = SearchStats()
        self._deadline: Optional[float] = None

    # ------------------------------------------------------------------
    # Assignment checks
    # ------------------------------------------------------------------
    def assignment_complete(self, assignment: Assignment) -> bool:
        return all(assignment.get(slot) for slot in self.graph.slots)

    def consistent(self, assignment: Assignment) -> bool:
        """Return True when the words are distinct, fit their slots and agree at crossings."""

        seen: Set[str] = set()
        for slot, word in assignment.items():
            if self.unique_words:
                if word in seen:
                    return False
                seen.add(word)
            if len(word) != slot.length:
                return False
            for neighbor in self.graph.neighbors(slot):
                other = assignment.get(neighbor)
                if other is None:
                    continue
                i, j = self.graph.overlap(slot, neighbor)
                if word[i] != other[j]:
                    return False
        return True

    def _fits(self, slot: Slot, word: str, assignment: Assignment) -> bool:
        # Incremental form of consistent(): only the new slot is checked.
        if len(word) != slot.length:
            return False
        if self.unique_words and word in assignment.values():
            return False
        for neighbor in self.graph.neighbors(slot):
            other = assignment.get(neighbor)
            if other is None:
                continue
            i, j = self.graph.overlap(slot, neighbor)
            if word[i] != other[j]:
                return False
        return True

    # ------------------------------------------------------------------
    # Heuristics
    # ------------------------------------------------------------------
    def select_unassigned_slot(
        self, assignment: Assignment, domains: Optional[DomainStore] = None
    ) -> Optional[Slot]:
        """Pick the open slot with the fewest candidates, then the highest degree."""

        domains = self.domains if domains is None else domains
        unassigned = [slot for slot in self.graph.slots if slot not in assignment]
        if not unassigned:
            return None

        def rank(slot: Slot) -> Tuple[int, int]:
            return (domains.size(slot), -self.graph.degree(slot))

        best = min(rank(slot) for slot in unassigned)
        tied = [slot for slot in unassigned if rank(slot) == best]
        if self.rng is not None and len(tied) > 1:
            return self.rng.choice(tied)
        return tied[0]

    def order_domain_values(
        self, slot: Slot, assignment: Assignment, domains: Optional[DomainStore] = None
    ) -> List[str]:
        """Order candidates by how many neighbour candidates each one rules out.

        For every open neighbour the count is the number of its candidates
        whose letter at the crossing differs from the word's letter there.
        Ties keep vocabulary order, or are shuffled when an rng is set.
        """

        domains = self.domains if domains is None else domains
        profiles = []
        for neighbor in self.graph.neighbors(slot):
            if neighbor in assignment:
                continue
            i, j = self.graph.overlap(slot, neighbor)
            letters = Counter(word[j] for word in domains[neighbor])
            profiles.append((i, len(domains[neighbor]), letters))

        used = set(assignment.values()) if self.unique_words else set()
        candidates = [word for word in domains[slot] if word not in used]
        if self.rng is not None:
            self.rng.shuffle(candidates)

        def ruled_out(word: str) -> int:
            return sum(size - letters[word[i]] for i, size, letters in profiles)

        candidates.sort(key=ruled_out)
        return candidates

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search(self, assignment: Optional[Assignment] = None) -> Optional[Assignment]:
        """Return the first complete consistent assignment, or None if none exists.

        Raises :class:`SearchBudgetExceeded` when the budget runs out first.
        """

        started = time.monotonic()
        self._deadline = self.budget.deadline(started)
        try:
            return self._run(dict(assignment or {}))
        finally:
            self.stats.elapsed = time.monotonic() - started
            LOGGER.info(
                "Search visited %s nodes with %s backtracks in %.3fs",
                self.stats.nodes,
                self.stats.backtracks,
                self.stats.elapsed,
            )

    def _run(self, assignment: Assignment) -> Optional[Assignment]:
        if self.assignment_complete(assignment):
            return assignment
        stack: List[_Frame] = [self._open_frame(assignment, self.domains)]
        while stack:
            frame = stack[-1]
            # Retract the word this frame tried last before moving on.
            assignment.pop(frame.slot, None)
            domains = self._advance(frame, assignment)
            if domains is None:
                stack.pop()
                self.stats.backtracks += 1
                LOGGER.debug("Backtracking from %s", frame.slot.label)
                continue
            if self.assignment_complete(assignment):
                return dict(assignment)
            stack.append(self._open_frame(assignment, domains))
        return None

    def _open_frame(self, assignment: Assignment, domains: DomainStore) -> _Frame:
        slot = self.select_unassigned_slot(assignment, domains)
        assert slot is not None, "frame opened on a complete assignment"
        values = self.order_domain_values(slot, assignment, domains)
        return _Frame(slot=slot, candidates=iter(values), domains=domains)

    def _advance(self, frame: _Frame, assignment: Assignment) -> Optional[DomainStore]:
        for word in frame.candidates:
            self.budget.charge(self.stats, self._deadline)
            if not self._fits(frame.slot, word, assignment):
                continue
            assignment[frame.slot] = word
            if not self.inference:
                return frame.domains
            domains = self._infer(frame.slot, word, assignment, frame.domains)
            if domains is not None:
                return domains
            del assignment[frame.slot]
        return None

    def _infer(
        self, slot: Slot, word: str, assignment: Assignment, domains: DomainStore
    ) -> Optional[DomainStore]:
        local = domains.copy()
        local.assign(slot, word)
        changed = [slot]
        if self.unique_words:
            changed.extend(local.discard_word(word, exclude=assignment))
            if any(not local[other] for other in changed):
                return None
        arcs = [
            (neighbor, source)
            for source in changed
            for neighbor in self.graph.neighbors(source)
            if neighbor not in assignment
        ]
        if not ac3(self.graph, local, arcs):
            return None
        return local
