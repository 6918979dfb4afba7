"""
Lexical oracle adapters.

The oracle is the external dictionary: it answers whether a word exists
and, for words that do not, which nearby words do. Its suggestion search
is by far the most expensive step of a corpus pass, which is why the
correction cache sits in front of ``suggest``.

Adapters:
- SpellCheckerOracle: pyspellchecker word-frequency dictionaries
- EnchantOracle: pyenchant, which loads Hunspell dictionaries (pt_PT, en_GB, ...)
- StaticOracle: fixed in-memory lexicon, for tests and curated runs
- CountingOracle: wrapper that counts calls made to another oracle

Backend failures are raised as OracleQueryError; they are never retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from digrams.exceptions import ConfigurationError, OracleQueryError, OracleUnavailableError

if TYPE_CHECKING:
    from spellchecker import SpellChecker

    from digrams.config import OracleConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class LexicalOracle(Protocol):
    """Membership test plus nearest-word suggestions over a fixed lexicon."""

    def exists(self, word: str) -> bool:
        """Return True if word is in the lexicon verbatim."""
        ...

    def suggest(self, word: str) -> list[str]:
        """Return lexicon words close to word (may be empty)."""
        ...


# =============================================================================
# PYSPELLCHECKER
# =============================================================================


class SpellCheckerOracle:
    """
    Oracle backed by pyspellchecker.

    pyspellchecker ships word-frequency dictionaries for several languages
    (including "pt" and "en") and is case-insensitive, so the capitalization
    heuristics never fire with this backend; elision and accent correction
    still do.

    Suggestions are ordered by corpus frequency in the checker's
    dictionary (most frequent first), ties alphabetically.

    Example:
        >>> oracle = SpellCheckerOracle(language="en")
        >>> oracle.exists("house")
        True
        >>> "house" in oracle.suggest("hause")
        True
    """

    def __init__(
        self,
        language: str = "pt",
        local_dictionary: Path | None = None,
        distance: int = 2,
        extra_words: Iterable[str] = (),
        spell: SpellChecker | None = None,
    ):
        """
        Initialize the oracle.

        Args:
            language: pyspellchecker language code.
            local_dictionary: JSON word-frequency file used instead of the
                bundled dictionary for language.
            distance: Maximum edit distance for suggestions.
            extra_words: Words added to the dictionary.
            spell: Pre-built SpellChecker (other arguments are ignored).

        Raises:
            OracleUnavailableError: If the dictionary cannot be loaded.
        """
        if spell is None:
            from spellchecker import SpellChecker

            try:
                if local_dictionary is not None:
                    spell = SpellChecker(
                        language=None, local_dictionary=str(local_dictionary), distance=distance
                    )
                else:
                    spell = SpellChecker(language=language, distance=distance)
            except (ValueError, OSError) as e:
                source = local_dictionary or language
                raise OracleUnavailableError(
                    f"Cannot load pyspellchecker dictionary {source!r}: {e}"
                ) from e
            logger.debug("Initialized pyspellchecker oracle (language=%s)", language)

        self.spell = spell
        extra = [w.lower() for w in extra_words]
        if extra:
            self.spell.word_frequency.load_words(extra)

    def exists(self, word: str) -> bool:
        try:
            return word in self.spell
        except Exception as e:
            raise OracleQueryError(f"exists({word!r}) failed: {e}") from e

    def suggest(self, word: str) -> list[str]:
        try:
            candidates = self.spell.candidates(word) or set()
            return sorted(candidates, key=lambda w: (-self.spell[w], w))
        except Exception as e:
            raise OracleQueryError(f"suggest({word!r}) failed: {e}") from e


# =============================================================================
# ENCHANT / HUNSPELL
# =============================================================================


class EnchantOracle:
    """
    Oracle backed by pyenchant, typically over a Hunspell dictionary.

    Hunspell is case-aware: "alemanha" is rejected while "Alemanha" is in
    the suggestions, which is what the capitalization heuristics rely on.

    Example:
        >>> oracle = EnchantOracle("pt_PT")
        >>> oracle.exists("alemanha")
        False
        >>> "Alemanha" in oracle.suggest("alemanha")
        True
    """

    def __init__(self, tag: str = "pt_PT", personal_word_list: Path | None = None):
        """
        Initialize the oracle.

        Args:
            tag: Enchant dictionary tag ("pt_PT", "en_GB", ...).
            personal_word_list: Optional file of extra accepted words,
                one per line.

        Raises:
            OracleUnavailableError: If enchant or the dictionary is missing.
        """
        try:
            import enchant
        except ImportError as e:
            # pyenchant raises ImportError when the C library is missing too
            raise OracleUnavailableError(f"pyenchant is not usable: {e}") from e

        try:
            if personal_word_list is not None:
                self.dict = enchant.DictWithPWL(tag, str(personal_word_list))
            else:
                self.dict = enchant.Dict(tag)
        except enchant.errors.Error as e:
            raise OracleUnavailableError(f"Cannot load enchant dictionary {tag!r}: {e}") from e

        self.tag = tag
        self._error = enchant.errors.Error
        logger.debug("Initialized enchant oracle (tag=%s)", tag)

    def exists(self, word: str) -> bool:
        try:
            return self.dict.check(word)
        except (self._error, ValueError) as e:
            raise OracleQueryError(f"exists({word!r}) failed: {e}") from e

    def suggest(self, word: str) -> list[str]:
        try:
            return list(self.dict.suggest(word))
        except (self._error, ValueError) as e:
            raise OracleQueryError(f"suggest({word!r}) failed: {e}") from e


# =============================================================================
# IN-MEMORY / WRAPPERS
# =============================================================================


@dataclass
class StaticOracle:
    """
    Oracle over a fixed word set with explicit suggestion lists.

    Membership is exact (case-sensitive). Words without an entry in
    ``suggestions`` get no suggestions.

    Example:
        >>> oracle = StaticOracle({"a", "e", "Alemanha"}, {"alemanha": ["Alemanha"]})
        >>> oracle.exists("alemanha"), oracle.suggest("alemanha")
        (False, ['Alemanha'])
    """

    words: set[str] = field(default_factory=set)
    suggestions: Mapping[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.words = set(self.words)

    def exists(self, word: str) -> bool:
        return word in self.words

    def suggest(self, word: str) -> list[str]:
        return list(self.suggestions.get(word, []))


class CountingOracle:
    """
    Wraps an oracle and counts exists/suggest calls per word.

    Attributes:
        inner: The wrapped oracle.
        exists_calls: Number of exists() calls.
        suggest_calls: Mapping of word -> number of suggest() calls.
    """

    def __init__(self, inner: LexicalOracle):
        self.inner = inner
        self.exists_calls = 0
        self.suggest_calls: dict[str, int] = {}

    def exists(self, word: str) -> bool:
        self.exists_calls += 1
        return self.inner.exists(word)

    def suggest(self, word: str) -> list[str]:
        self.suggest_calls[word] = self.suggest_calls.get(word, 0) + 1
        return self.inner.suggest(word)

    @property
    def total_suggest_calls(self) -> int:
        return sum(self.suggest_calls.values())


# =============================================================================
# FACTORY
# =============================================================================


def create_oracle(config: OracleConfig) -> LexicalOracle:
    """
    Build the oracle described by an OracleConfig.

    Raises:
        OracleUnavailableError: If the backend cannot be initialized.
        ConfigurationError: For an unknown backend.
    """
    if config.backend == "spellchecker":
        return SpellCheckerOracle(
            language=config.language,
            local_dictionary=config.dictionary,
            distance=config.distance,
            extra_words=config.extra_words,
        )
    if config.backend == "enchant":
        oracle = EnchantOracle(config.language, personal_word_list=config.dictionary)
        for word in config.extra_words:
            oracle.dict.add_to_session(word)
        return oracle
    raise ConfigurationError(f"Unknown oracle backend {config.backend!r}")
