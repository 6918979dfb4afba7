"""
Word validation and correction against a lexical oracle.

- LexicalOracle adapters (pyspellchecker, enchant/Hunspell, in-memory)
- CorrectionEngine: capitalization, elision and accent heuristics
- CorrectionCache: at most one ``suggest`` call per distinct OOV word

Example:
    >>> from digrams.lexicon import StaticOracle, WordResolver
    >>> resolve = WordResolver(StaticOracle({"OPEC"}, {"opec": ["OPEC"]}))
    >>> resolve("opec").resolved_word
    'OPEC'
"""

from digrams.lexicon.accents import DEFAULT_ACCENT_TABLE, PORTUGUESE_ACCENTS, accent_table
from digrams.lexicon.cache import CorrectionCache, WordResolver
from digrams.lexicon.correction import (
    DEFAULT_MUTED_LETTERS,
    CorrectionEngine,
    candidates,
    correct,
)
from digrams.lexicon.oracle import (
    CountingOracle,
    EnchantOracle,
    LexicalOracle,
    SpellCheckerOracle,
    StaticOracle,
    create_oracle,
)

__all__ = [
    # Oracles
    "LexicalOracle",
    "SpellCheckerOracle",
    "EnchantOracle",
    "StaticOracle",
    "CountingOracle",
    "create_oracle",
    # Correction
    "CorrectionEngine",
    "correct",
    "candidates",
    "DEFAULT_MUTED_LETTERS",
    "DEFAULT_ACCENT_TABLE",
    "PORTUGUESE_ACCENTS",
    "accent_table",
    # Cache
    "CorrectionCache",
    "WordResolver",
]
