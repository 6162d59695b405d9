"""Built-in grid patterns (``_`` fillable, ``#`` blocked)."""

from __future__ import annotations

from typing import Tuple

MINI_PATTERNS: Tuple[str, ...] = (
    "_____\n_____\n_____\n_____\n_____",
    "#___#\n_____\n_____\n_____\n#___#",
    "#___#\n#___#\n_____\n_____\n_____",
    "_____\n_____\n_____\n#___#\n#___#",
    "#____\n#____\n_____\n____#\n____#",
    "##___\n#____\n_____\n____#\n___##",
    "___##\n____#\n_____\n#____\n##___",
    "#____\n_____\n_____\n_____\n____#",
    "____#\n_____\n_____\n_____\n#____",
    "##___\n#____\n_____\n_____\n____#",
    "#____\n_____\n_____\n____#\n___##",
)

# A sparse 7x12 structure whose slots range from 3 to 12 letters.
SAMPLE_STRUCTURE = (
    "######_####_\n"
    "____________\n"
    "_#####_####_\n"
    "_##_____###_\n"
    "_#####_####_\n"
    "_###______#_\n"
    "######_####_"
)

SAMPLE_WORDS: Tuple[str, ...] = (
    "adversarial", "alpha", "arc", "artificial", "bayes", "beta", "bit",
    "breadth", "byte", "classification", "classify", "condition", "constraint",
    "create", "depth", "distribution", "end", "false", "graph", "heuristic",
    "infer", "inference", "initial", "intelligence", "knowledge", "language",
    "learning", "line", "logic", "loss", "markov", "minimax", "network",
    "neural", "node", "optimization", "probability", "proposition", "prune",
    "reason", "recurrent", "regression", "resolution", "resolve",
    "satisfaction", "search", "sine", "start", "true", "truth", "uncertainty",
)


def get_pattern(index: int) -> str:
    """Return mini pattern ``index``; raises IndexError for unknown indices."""

    if not 0 <= index < len(MINI_PATTERNS):
        raise IndexError(f"No built-in pattern {index}; choose 0-{len(MINI_PATTERNS) - 1}")
    return MINI_PATTERNS[index]
