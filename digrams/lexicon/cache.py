"""
Memoization of oracle-rejected words.

``oracle.suggest`` is roughly ten times more expensive than everything
else in a pass, and a corpus repeats its misspellings and old spellings
thousands of times. The cache guarantees at most one ``suggest`` call per
distinct out-of-vocabulary word for the whole pass.

Valid words are not cached: ``exists`` is cheap.

Scaling limit: the cache is unbounded and never evicts. It holds one entry
per distinct OOV word of the corpus, which must fit in memory.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from digrams.lexicon.correction import CorrectionEngine
from digrams.lexicon.oracle import LexicalOracle
from digrams.models import CacheEntry, Corrected, ResolutionOutcome, Unresolved, Valid

logger = logging.getLogger(__name__)


class CorrectionCache:
    """
    First-writer-wins cache from OOV word to its correction outcome.

    Lookups and stores are lock-protected and each word is resolved under
    its own lock, so a single cache can be shared by several worker
    threads without any word being sent to ``suggest`` twice.

    Attributes:
        hits: Resolutions answered from the cache.
        misses: Resolutions that had to call ``suggest``.

    Example:
        >>> cache = CorrectionCache()
        >>> oracle = StaticOracle({"OPEC"}, {"opec": ["OPEC"]})
        >>> cache.resolve("opec", oracle, CorrectionEngine())
        Corrected(word='opec', replacement='OPEC')
        >>> cache.suggest_calls
        1
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._word_locks: dict[str, threading.Lock] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def get(self, word: str) -> CacheEntry | None:
        """Return the cached outcome for word, or None if not cached."""
        return self._entries.get(word)

    def entries(self) -> Iterator[tuple[str, CacheEntry]]:
        """Iterate over cached entries in key order."""
        for word in sorted(self._entries):
            yield word, self._entries[word]

    @property
    def suggest_calls(self) -> int:
        """Number of ``suggest`` calls made through this cache."""
        return self.misses

    def _store(self, word: str, entry: CacheEntry) -> CacheEntry:
        # An entry, once written, is authoritative for the rest of the pass
        existing = self._entries.setdefault(word, entry)
        if existing is entry:
            logger.debug("Cached %r: %s", word, type(entry).__name__)
        return existing

    def resolve(
        self,
        word: str,
        oracle: LexicalOracle,
        engine: CorrectionEngine,
    ) -> ResolutionOutcome:
        """
        Classify word as Valid, Corrected or Unresolved.

        Args:
            word: Case-folded word token.
            oracle: Lexical oracle.
            engine: Correction heuristics.

        Returns:
            Valid(word) if the oracle accepts it; otherwise the cached or
            freshly computed Corrected/Unresolved outcome.

        Raises:
            OracleQueryError: If the oracle fails.
        """
        if oracle.exists(word):
            return Valid(word)

        with self._lock:
            cached = self._entries.get(word)
            if cached is not None:
                self.hits += 1
                return cached
            word_lock = self._word_locks.setdefault(word, threading.Lock())

        # Per-word lock: other words keep querying the oracle in parallel
        with word_lock:
            with self._lock:
                cached = self._entries.get(word)
                if cached is not None:
                    self.hits += 1
                    return cached
                self.misses += 1

            try:
                suggestions = oracle.suggest(word)
                replacement = engine.correct(word, suggestions)
                if replacement is not None:
                    entry: CacheEntry = Corrected(word, replacement)
                else:
                    entry = Unresolved(word, tuple(suggestions))

                with self._lock:
                    return self._store(word, entry)
            finally:
                with self._lock:
                    self._word_locks.pop(word, None)


class WordResolver:
    """
    Binds an oracle, a correction engine and a cache into one callable.

    Example:
        >>> resolve = WordResolver(oracle, CorrectionEngine())
        >>> resolve("opec")
        Corrected(word='opec', replacement='OPEC')
    """

    def __init__(
        self,
        oracle: LexicalOracle,
        engine: CorrectionEngine | None = None,
        cache: CorrectionCache | None = None,
    ):
        self.oracle = oracle
        self.engine = engine or CorrectionEngine()
        self.cache = cache if cache is not None else CorrectionCache()

    def __call__(self, word: str) -> ResolutionOutcome:
        return self.cache.resolve(word, self.oracle, self.engine)
