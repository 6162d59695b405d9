"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

WORD_RE = re.compile(r"[^A-Za-z]")


def strip_diacritics(text: str) -> str:
    """Remove combining marks, so ``"café"`` becomes ``"cafe"``."""

    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``.

    Spaces, punctuation and digits are dropped, so multi-word answers such
    as ``"ice cream"`` collapse to ``"ICECREAM"``.
    """

    if not text:
        return ""
    ascii_word = WORD_RE.sub("", strip_diacritics(text))
    return ascii_word.upper()


__all__ = ["clean_word", "strip_diacritics"]
