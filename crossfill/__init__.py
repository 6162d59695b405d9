"""Crossword fill as a constraint-satisfaction problem.

This package exposes the public API surface via:

- ``crossfill.engine.filler.CrosswordFiller``: parses a grid pattern, prunes
  slot domains with node consistency and AC-3, then runs a fill strategy.
- ``crossfill.engine.grid.CrosswordGrid``: pattern parsing and slot derivation.
- ``crossfill.data.vocabulary.Vocabulary``: loads and normalizes word lists.
"""

from .core.constants import Direction, FillStrategy, SolveStatus
from .core.models import Slot
from .engine.filler import CrosswordFiller, FillerConfig, SolveResult, fill_crossword
from .engine.grid import CrosswordGrid
from .data.vocabulary import Vocabulary, VocabularyConfig

__all__ = [
    "CrosswordFiller",
    "CrosswordGrid",
    "Direction",
    "FillStrategy",
    "FillerConfig",
    "Slot",
    "SolveResult",
    "SolveStatus",
    "Vocabulary",
    "VocabularyConfig",
    "fill_crossword",
]

__version__ = "0.1.0"
