"""
Orthographic correction heuristics for out-of-vocabulary words.

The corpus this was built for (Europarl, pt) predates the 1990 Portuguese
orthographic agreement, so many rejected words are old spellings of a
valid modern word that the oracle already lists among its suggestions.
Instead of trusting the top suggestion, we generate a handful of
rewrites of the word and accept the first one that is literally in the
suggestion list:

1. First letter uppercase        alemanha -> Alemanha
2. All letters uppercase         opec     -> OPEC
3. Drop one interior muted letter  acção  -> ação, adopção -> adoção
4. Swap one accent               politica -> política

Only one change is made at a time. A word that needs two drops, or a drop
plus an accent, stays unresolved.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterator, Mapping

from digrams.lexicon.accents import DEFAULT_ACCENT_TABLE

logger = logging.getLogger(__name__)

DEFAULT_MUTED_LETTERS = "cp"


def capitalized(word: str) -> str:
    """Uppercase only the first character."""
    return word[:1].upper() + word[1:]


def elisions(word: str, muted_letters: str = DEFAULT_MUTED_LETTERS) -> Iterator[str]:
    """
    Yield word with one interior muted letter removed, position by position.

    The first and last characters are never removed.

    Example:
        >>> list(elisions("acpção"))
        ['apção', 'acção']
    """
    for i in range(1, len(word) - 1):
        if word[i] in muted_letters:
            yield word[:i] + word[i + 1 :]


def accent_swaps(word: str, table: Mapping[str, str] = DEFAULT_ACCENT_TABLE) -> Iterator[str]:
    """
    Yield word with one character replaced by its accent-table entry,
    position by position.

    Example:
        >>> list(accent_swaps("pé"))
        ['pe']
    """
    for i, ch in enumerate(word):
        replacement = table.get(ch)
        if replacement is not None:
            yield word[:i] + replacement + word[i + 1 :]


def candidates(
    word: str,
    accent_table: Mapping[str, str] = DEFAULT_ACCENT_TABLE,
    muted_letters: str = DEFAULT_MUTED_LETTERS,
) -> Iterator[str]:
    """Yield every heuristic rewrite of word in priority order."""
    if not word:
        return
    yield capitalized(word)
    yield word.upper()
    yield from elisions(word, muted_letters)
    yield from accent_swaps(word, accent_table)


def correct(
    word: str,
    suggestions: Collection[str],
    accent_table: Mapping[str, str] = DEFAULT_ACCENT_TABLE,
    muted_letters: str = DEFAULT_MUTED_LETTERS,
) -> str | None:
    """
    Return the first heuristic rewrite of word found in suggestions.

    Args:
        word: Lowercase word the oracle rejected.
        suggestions: The oracle's suggestions for word.
        accent_table: Single-character replacements for the accent heuristic.
        muted_letters: Letters the elision heuristic may drop.

    Returns:
        The matching suggestion, or None if no rewrite matched.

    Example:
        >>> correct("alemanha", ["Alemanha", "alemanhas"])
        'Alemanha'
        >>> correct("acção", ["ação", "acção"])
        'ação'
        >>> correct("xpto", ["xpta"]) is None
        True
    """
    if not suggestions:
        return None
    allowed = suggestions if isinstance(suggestions, (set, frozenset)) else set(suggestions)

    for candidate in candidates(word, accent_table, muted_letters):
        if candidate in allowed:
            return candidate
    return None


class CorrectionEngine:
    """
    Correction heuristics bound to one accent table and muted-letter set.

    Attributes:
        accent_table: Single-character accent replacements.
        muted_letters: Letters the elision heuristic may drop.
    """

    def __init__(
        self,
        accent_table: Mapping[str, str] = DEFAULT_ACCENT_TABLE,
        muted_letters: str = DEFAULT_MUTED_LETTERS,
    ):
        self.accent_table = accent_table
        self.muted_letters = muted_letters

    def correct(self, word: str, suggestions: Collection[str]) -> str | None:
        """See :func:`correct`."""
        result = correct(word, suggestions, self.accent_table, self.muted_letters)
        if result is not None:
            logger.debug("Corrected %r -> %r", word, result)
        return result
