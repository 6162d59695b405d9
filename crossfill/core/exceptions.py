"""Custom exception hierarchy for crossword filling."""


class CrosswordError(Exception):
    """Base exception for filler failures."""


class StructuralError(CrosswordError):
    """Raised when a grid pattern is malformed or unsupported by a strategy."""


class UnknownSlotError(CrosswordError, KeyError):
    """Raised when a slot outside the constraint graph is queried."""


class VocabularyLoadError(CrosswordError):
    """Raised when a word list cannot be read or parsed."""


class SearchBudgetExceeded(CrosswordError):
    """Raised when a search runs out of its node or time budget."""


class ValidationError(CrosswordError):
    """Raised when a filled grid fails the integrity checks."""
