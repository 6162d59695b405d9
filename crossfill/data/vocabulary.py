"""Vocabulary loading and filtering."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..core.exceptions import VocabularyLoadError
from ..utils.logger import get_logger
from .normalization import clean_word

LOGGER = get_logger(__name__)

# Ratings run from 1 (everyone knows it) to 5 (not a real answer).
DEFAULT_RATING = 2
DEFAULT_MAX_RATING = 4


@dataclass
class VocabularyConfig:
    """Configuration for word-list loading and filtering."""

    path: Path | str
    normalize: bool = True
    min_length: int = 2
    max_length: int = 24
    max_rating: Optional[int] = DEFAULT_MAX_RATING


class Vocabulary:
    """Ordered, deduplicated candidate words with optional difficulty ratings.

    When ratings are present the words are ordered easiest first; that order
    is what the solver falls back on when value ordering ties.
    """

    def __init__(
        self,
        words: Iterable[str],
        ratings: Optional[Mapping[str, int]] = None,
        *,
        normalize: bool = True,
    ) -> None:
        self.ratings: Dict[str, int] = {}
        ordered: Dict[str, None] = {}
        for raw in words:
            word = clean_word(raw) if normalize else raw
            if not word or word in ordered:
                continue
            ordered[word] = None
            if ratings is not None:
                self.ratings[word] = ratings.get(raw, ratings.get(word, DEFAULT_RATING))
        self.words: List[str] = list(ordered)
        if self.ratings:
            self.words.sort(key=lambda w: self.ratings[w])
        self._members = set(self.words)
        self._by_length: Dict[int, List[str]] = defaultdict(list)
        for word in self.words:
            self._by_length[len(word)].append(word)

    @classmethod
    def from_words(cls, words: Iterable[str], *, normalize: bool = True) -> "Vocabulary":
        return cls(words, normalize=normalize)

    @classmethod
    def from_file(cls, config: VocabularyConfig | Path | str) -> "Vocabulary":
        """Load a plain word list or a rated CSV/TSV export.

        Plain lists hold one word per line. Rated files carry the word in the
        first column and an integer rating in the last; rows rated below 1 or
        at/above ``max_rating`` are dropped, and rows whose last column is not
        a number (``word,clue text``) are kept unrated. Blank lines and ``#``
        comments are ignored in both.
        """

        if not isinstance(config, VocabularyConfig):
            config = VocabularyConfig(path=config)
        source = Path(config.path)
        if not source.exists():
            raise VocabularyLoadError(f"Missing word list: {source}")
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise VocabularyLoadError(f"Cannot read word list {source}: {exc}") from exc

        words: List[str] = []
        ratings: Dict[str, int] = {}
        skipped = 0
        for line in text.splitlines():
            entry = parse_entry(line)
            if entry is None:
                continue
            word, rating = entry
            if rating is not None:
                if rating < 1 or (config.max_rating is not None and rating >= config.max_rating):
                    skipped += 1
                    continue
                ratings[word] = rating
            words.append(word)

        vocabulary = cls(words, ratings or None, normalize=config.normalize)
        kept = vocabulary.filter_lengths(config.min_length, config.max_length)
        LOGGER.info(
            "Loaded %s words from %s (%s dropped by rating)",
            len(kept),
            source,
            skipped,
        )
        return kept

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def by_length(self, length: int) -> List[str]:
        return list(self._by_length.get(length, []))

    def lengths(self) -> List[int]:
        return sorted(self._by_length)

    def rating(self, word: str) -> Optional[int]:
        return self.ratings.get(word)

    def filter_lengths(self, min_length: int, max_length: int) -> "Vocabulary":
        kept = [w for w in self.words if min_length <= len(w) <= max_length]
        ratings = {w: self.ratings[w] for w in kept if w in self.ratings}
        return Vocabulary(kept, ratings or None, normalize=False)

    def __contains__(self, word: object) -> bool:
        return word in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __repr__(self) -> str:
        return f"Vocabulary({len(self)} words)"


def parse_entry(line: str) -> Optional[Tuple[str, Optional[int]]]:
    """Split one word-list line into ``(word, rating)``; None for blanks and comments."""

    line = line.strip()
    if not line or line.startswith("#"):
        return None
    delimiter = "\t" if "\t" in line else "," if "," in line else None
    if delimiter is None:
        return line, None
    fields = [field.strip() for field in line.split(delimiter)]
    word = fields[0].replace(" ", "")
    if not word:
        return None
    try:
        rating: Optional[int] = int(fields[-1])
    except ValueError:
        rating = None
    return word, rating
