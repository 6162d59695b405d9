"""AC-3 arc consistency over slot domains."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Optional, Set, Tuple

from ..core.models import Slot
from ..utils.logger import get_logger
from .constraints import ConstraintGraph
from .domains import DomainStore


LOGGER = get_logger(__name__)

Arc = Tuple[Slot, Slot]


def revise(graph: ConstraintGraph, domains: DomainStore, x: Slot, y: Slot) -> bool:
    """Make ``x`` arc consistent with ``y``.

    Removes every word of ``domains[x]`` whose letter at the crossing matches
    no word of ``domains[y]``. Returns ``True`` when ``domains[x]`` shrank;
    slots that do not cross are left untouched.
    """

    overlap = graph.overlap(x, y)
    if overlap is None:
        return False
    i, j = overlap
    supported = {word[j] for word in domains[y]}
    current = domains[x]
    kept = [word for word in current if word[i] in supported]
    if len(kept) == len(current):
        return False
    domains.restrict(x, kept)
    return True


def ac3(
    graph: ConstraintGraph,
    domains: DomainStore,
    arcs: Optional[Iterable[Arc]] = None,
) -> bool:
    """Enforce arc consistency in place.

    The worklist starts with ``arcs`` or, when omitted, every ordered pair of
    distinct slots. Returns ``False`` as soon as a domain empties, ``True``
    once the worklist drains.
    """

    queue: Deque[Arc] = deque(graph.arcs() if arcs is None else arcs)
    pending: Set[Arc] = set(queue)
    revisions = 0
    while queue:
        arc = queue.popleft()
        pending.discard(arc)
        x, y = arc
        if not revise(graph, domains, x, y):
            continue
        revisions += 1
        if not domains[x]:
            LOGGER.debug("AC-3 emptied the domain of %s", x.label)
            return False
        for z in graph.neighbors(x):
            if z == y or (z, x) in pending:
                continue
            queue.append((z, x))
            pending.add((z, x))
    LOGGER.debug("AC-3 converged after %s revisions", revisions)
    return True


def is_arc_consistent(graph: ConstraintGraph, domains: DomainStore) -> bool:
    """Check that every word has a supporting word in every crossing slot."""

    for x, y, (i, j) in graph.overlapping_pairs():
        letters_x = {word[i] for word in domains[x]}
        letters_y = {word[j] for word in domains[y]}
        if letters_x != letters_y:
            return False
    return True
