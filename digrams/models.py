"""
Data models for digrams.

Tokens flow out of the tokenizer; every word token is then classified as
one of the three resolution outcomes below. The outcomes are frozen so a
cached outcome can be handed out repeatedly without being mutated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """
    One whitespace-delimited chunk of a sentence.

    ``word`` is the case-folded word text when the chunk matched the
    language's word pattern, otherwise None (a not-a-word chunk).
    """

    sentence_index: int
    raw: str
    word: str | None = None

    @property
    def is_word(self) -> bool:
        """True if the chunk matched the word pattern."""
        return self.word is not None


@dataclass(frozen=True)
class Valid:
    """The oracle accepted the word as-is."""

    word: str

    @property
    def resolved_word(self) -> str:
        return self.word

    @property
    def is_resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class Corrected:
    """
    The word was rejected but a correction heuristic produced a string
    found in the oracle's suggestions. ``replacement`` is what gets counted.
    """

    word: str
    replacement: str

    @property
    def resolved_word(self) -> str:
        return self.replacement

    @property
    def is_resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class Unresolved:
    """No heuristic matched; the oracle's suggestions are kept for diagnostics."""

    word: str
    suggestions: tuple[str, ...] = ()

    @property
    def resolved_word(self) -> None:
        return None

    @property
    def is_resolved(self) -> bool:
        return False

    @property
    def diagnostic_key(self) -> str:
        """Key used in the unresolved table: ``"<word> -> <s1> <s2> ..."``."""
        return f"{self.word} -> {' '.join(self.suggestions)}"


ResolutionOutcome = Valid | Corrected | Unresolved
"""Result of resolving one word against the oracle."""

CacheEntry = Corrected | Unresolved
"""What the correction cache stores for an out-of-vocabulary word."""
