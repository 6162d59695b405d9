"""Prefix-trie guided fill for grids without blocked cells.

Cells are filled one at a time in row-major order. A letter is only tried
when it extends both the row prefix and the column prefix to a path that
exists in the respective trie, so dead prefixes are cut off before a whole
word is ever formed. The fill keeps an explicit stack of cell frames, so
grid size is not bounded by the interpreter recursion limit.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set

from ..core.constants import BLANK_CELL
from ..core.models import SearchStats
from ..utils.logger import get_logger
from .renderer import LetterGrid
from .search import SearchBudget


LOGGER = get_logger(__name__)

_END = ""


@dataclass
class _CellFrame:
    index: int
    letters: Iterator[str]
    completed: List[str] = field(default_factory=list)


class WordTrie:
    """Nested-dict prefix tree; the empty-string key marks a complete word."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self.root: Dict[str, dict] = {}
        self._size = 0
        for word in words:
            self.insert(word)

    def insert(self, word: str) -> None:
        node = self.root
        for char in word:
            node = node.setdefault(char, {})
        if _END not in node:
            node[_END] = {}
            self._size += 1

    def node_for(self, prefix: str) -> Optional[dict]:
        node = self.root
        for char in prefix:
            node = node.get(char)
            if node is None:
                return None
        return node

    def children(self, prefix: str) -> Set[str]:
        node = self.node_for(prefix)
        if node is None:
            return set()
        return {key for key in node if key != _END}

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        node = self.node_for(word)
        return node is not None and _END in node

    def __len__(self) -> int:
        return self._size


def fill_open_grid(
    words: Iterable[str],
    height: int,
    width: int,
    *,
    unique_words: bool = True,
    rng: Optional[random.Random] = None,
    budget: Optional[SearchBudget] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[LetterGrid]:
    """Fill a ``height`` x ``width`` grid of open cells, or return None.

    Every row must be a word of length ``width`` and every column a word of
    length ``height``. Raises :class:`SearchBudgetExceeded` when ``budget``
    runs out.
    """

    vocabulary = list(dict.fromkeys(words))
    rows = WordTrie(w for w in vocabulary if len(w) == width)
    cols = rows if height == width else WordTrie(w for w in vocabulary if len(w) == height)
    LOGGER.debug("Trie fill %sx%s: %s row words, %s column words", height, width, len(rows), len(cols))

    budget = budget or SearchBudget()
    stats = stats if stats is not None else SearchStats()
    started = time.monotonic()
    deadline = budget.deadline(started)
    grid: LetterGrid = [[BLANK_CELL] * width for _ in range(height)]
    used: Set[str] = set()

    def column(c: int, upto: int) -> str:
        return "".join(grid[i][c] for i in range(upto))

    def letters_for(r: int, c: int) -> List[str]:
        allowed = rows.children("".join(grid[r][:c])) & cols.children(column(c, r))
        ordered = sorted(allowed)
        if rng is not None:
            rng.shuffle(ordered)
        return ordered

    def open_frame(index: int) -> _CellFrame:
        r, c = divmod(index, width)
        return _CellFrame(index=index, letters=iter(letters_for(r, c)))

    def advance(frame: _CellFrame) -> bool:
        r, c = divmod(frame.index, width)
        for letter in frame.letters:
            budget.charge(stats, deadline)
            grid[r][c] = letter
            completed: List[str] = []
            if c == width - 1:
                completed.append("".join(grid[r]))
            if r == height - 1:
                completed.append(column(c, height))
            if unique_words and (
                any(word in used for word in completed) or len(set(completed)) < len(completed)
            ):
                continue
            used.update(completed)
            frame.completed = completed
            return True
        grid[r][c] = BLANK_CELL
        return False

    def run() -> bool:
        total = height * width
        if total == 0:
            return True
        stack: List[_CellFrame] = [open_frame(0)]
        while stack:
            frame = stack[-1]
            # Release the words completed by the letter this frame tried last.
            used.difference_update(frame.completed)
            frame.completed = []
            if not advance(frame):
                stack.pop()
                if stack:
                    stats.backtracks += 1
                continue
            if frame.index + 1 == total:
                return True
            stack.append(open_frame(frame.index + 1))
        return False

    try:
        solved = run()
    finally:
        stats.elapsed = time.monotonic() - started
    if not solved:
        LOGGER.info("Trie fill exhausted after %s nodes", stats.nodes)
        return None
    LOGGER.info("Trie fill succeeded after %s nodes", stats.nodes)
    return [list(row) for row in grid]
