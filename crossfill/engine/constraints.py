"""Binary overlap constraints between word slots."""

from __future__ import annotations

from collections import defaultdict
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from ..core.exceptions import UnknownSlotError
from ..core.models import Overlap, Slot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class ConstraintGraph:
    """Overlap table for every ordered pair of intersecting slots.

    Overlaps are kept in one flat mapping keyed by ``(x, y)``; the entry for
    ``(y, x)`` holds the same offsets swapped. Neighbour sets are derived from
    that mapping once, so the graph never holds references between slots.
    """

    def __init__(self, slots: Iterable[Slot]) -> None:
        self.slots: Tuple[Slot, ...] = tuple(dict.fromkeys(slots))
        self._known: FrozenSet[Slot] = frozenset(self.slots)
        self._overlaps: Dict[Tuple[Slot, Slot], Overlap] = {}
        self._build()
        neighbors: Dict[Slot, Set[Slot]] = defaultdict(set)
        for x, y in self._overlaps:
            neighbors[x].add(y)
        self._neighbors: Dict[Slot, FrozenSet[Slot]] = {
            slot: frozenset(neighbors.get(slot, ())) for slot in self.slots
        }

    def _build(self) -> None:
        for a, b in combinations(self.slots, 2):
            shared = set(a.cells) & set(b.cells)
            if not shared:
                continue
            if len(shared) > 1:
                LOGGER.debug(
                    "Slots %s and %s share %s cells; keeping one crossing",
                    a.label,
                    b.label,
                    len(shared),
                )
            cell = [c for c in a.cells if c in shared][-1]
            i, j = a.offset_of(cell), b.offset_of(cell)
            self._overlaps[(a, b)] = (i, j)
            self._overlaps[(b, a)] = (j, i)

    def _require(self, slot: Slot) -> None:
        if slot not in self._known:
            raise UnknownSlotError(f"Slot {slot.label} is not part of the constraint graph")

    def overlap(self, x: Slot, y: Slot) -> Optional[Overlap]:
        """Return ``(i, j)`` meaning ``word(x)[i] == word(y)[j]``, or ``None``."""

        self._require(x)
        self._require(y)
        return self._overlaps.get((x, y))

    def neighbors(self, slot: Slot) -> FrozenSet[Slot]:
        self._require(slot)
        return self._neighbors[slot]

    def degree(self, slot: Slot) -> int:
        return len(self.neighbors(slot))

    def arcs(self) -> Iterator[Tuple[Slot, Slot]]:
        """Yield every ordered pair of distinct slots."""

        for x in self.slots:
            for y in self.slots:
                if x != y:
                    yield (x, y)

    def overlapping_pairs(self) -> List[Tuple[Slot, Slot, Overlap]]:
        """Return each intersecting pair once, in slot order."""

        order = {slot: index for index, slot in enumerate(self.slots)}
        return [
            (x, y, offsets)
            for (x, y), offsets in self._overlaps.items()
            if order[x] < order[y]
        ]

    def __len__(self) -> int:
        return len(self.slots)

    def __contains__(self, slot: object) -> bool:
        return slot in self._known
