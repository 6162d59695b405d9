"""Candidate word sets per slot."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..core.exceptions import UnknownSlotError
from ..core.models import Slot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class DomainStore:
    """Maps each slot to its ordered list of candidate words.

    Domains only ever shrink. Lists are replaced rather than edited in place,
    which keeps :meth:`copy` a shallow copy that search frames can hold as
    snapshots without seeing later pruning.
    """

    def __init__(self, domains: Dict[Slot, List[str]]) -> None:
        self._domains = domains

    @classmethod
    def from_vocabulary(cls, slots: Iterable[Slot], words: Iterable[str]) -> "DomainStore":
        vocabulary = list(dict.fromkeys(words))
        return cls({slot: vocabulary for slot in slots})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __getitem__(self, slot: Slot) -> List[str]:
        try:
            return self._domains[slot]
        except KeyError:
            raise UnknownSlotError(f"No domain for slot {slot.label}") from None

    def __contains__(self, slot: object) -> bool:
        return slot in self._domains

    def __iter__(self) -> Iterator[Slot]:
        return iter(self._domains)

    def __len__(self) -> int:
        return len(self._domains)

    def size(self, slot: Slot) -> int:
        return len(self[slot])

    def total_size(self) -> int:
        return sum(len(words) for words in self._domains.values())

    def empty_slots(self) -> List[Slot]:
        return [slot for slot, words in self._domains.items() if not words]

    def is_node_consistent(self) -> bool:
        return all(
            len(word) == slot.length
            for slot, words in self._domains.items()
            for word in words
        )

    def as_dict(self) -> Dict[Slot, List[str]]:
        return {slot: list(words) for slot, words in self._domains.items()}

    # ------------------------------------------------------------------
    # Pruning
    # ------------------------------------------------------------------
    def enforce_node_consistency(self) -> int:
        """Drop every word whose length differs from its slot; return the count removed."""

        removed = 0
        for slot, words in self._domains.items():
            kept = [word for word in words if len(word) == slot.length]
            if len(kept) != len(words):
                removed += len(words) - len(kept)
                self._domains[slot] = kept
        LOGGER.debug("Node consistency removed %s candidates", removed)
        return removed

    def restrict(self, slot: Slot, words: Sequence[str]) -> None:
        """Replace the domain of ``slot`` with ``words`` (a subset of the current one)."""

        if slot not in self._domains:
            raise UnknownSlotError(f"No domain for slot {slot.label}")
        self._domains[slot] = list(words)

    def assign(self, slot: Slot, word: str) -> None:
        self.restrict(slot, [word])

    def discard_word(self, word: str, exclude: Optional[Iterable[Slot]] = None) -> List[Slot]:
        """Remove ``word`` from every domain except those in ``exclude``.

        Returns the slots whose domain changed.
        """

        skip = set(exclude or ())
        changed: List[Slot] = []
        for slot, words in self._domains.items():
            if slot in skip or len(word) != slot.length or word not in words:
                continue
            self._domains[slot] = [w for w in words if w != word]
            changed.append(slot)
        return changed

    def copy(self) -> "DomainStore":
        return DomainStore(dict(self._domains))

    def __repr__(self) -> str:
        return f"DomainStore(slots={len(self)}, candidates={self.total_size()})"
