"""
Corpus pass orchestrator.

A pass runs:
1. Normalizer: one composed Unicode form for the whole corpus
2. Tokenizer: sentence-indexed tokens, not-a-word chunks kept raw
3. Resolver: oracle check, cached correction of rejected words
4. Aggregator: unigram or bigram tables plus diagnostic tables

Every pass gets a fresh correction cache and fresh tables; nothing
carries over between passes.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from digrams.config import PipelineConfig
from digrams.counting.aggregator import CountStats, count_tokens
from digrams.counting.sharding import run_sharded
from digrams.counting.tables import COUNT_MODES, CountMode, CountResult
from digrams.lexicon.accents import accent_table
from digrams.lexicon.cache import CorrectionCache
from digrams.lexicon.correction import CorrectionEngine
from digrams.lexicon.oracle import LexicalOracle, create_oracle
from digrams.readers.corpus import read_corpus
from digrams.text.normalize import normalize
from digrams.text.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class PassStats:
    """Statistics for one corpus pass."""

    mode: str = ""
    tokens: int = 0
    sentences: int = 0
    not_words: int = 0
    valid: int = 0
    corrected: int = 0
    unresolved: int = 0
    pairs: int = 0
    suggest_calls: int = 0
    cache_hits: int = 0
    cache_size: int = 0
    workers: int = 1
    processing_time_ms: float = 0.0

    @classmethod
    def from_counts(cls, mode: str, counts: CountStats, **extra: Any) -> PassStats:
        return cls(
            mode=mode,
            tokens=counts.tokens,
            sentences=counts.sentences,
            not_words=counts.not_words,
            valid=counts.valid,
            corrected=counts.corrected,
            unresolved=counts.unresolved,
            pairs=counts.pairs,
            **extra,
        )

    def summary(self) -> str:
        """One-line human readable summary."""
        return (
            f"{self.mode}: {self.tokens} tokens, {self.valid} valid, "
            f"{self.corrected} corrected, {self.unresolved} unresolved, "
            f"{self.not_words} not-words; {self.suggest_calls} suggest calls, "
            f"{self.cache_hits} cache hits; {self.processing_time_ms / 1000:.2f}s"
        )


@dataclass
class PassResult:
    """Tables and statistics of one corpus pass."""

    result: CountResult
    stats: PassStats
    cache: CorrectionCache | None = None

    @property
    def mode(self) -> str:
        return self.result.mode


# =============================================================================
# PIPELINE
# =============================================================================


@dataclass
class CorpusPipeline:
    """
    Builds frequency tables from raw corpus text.

    Attributes:
        config: Pipeline configuration.
        oracle: Lexical oracle; built from ``config.oracle`` if None.
        tokenizer: Tokenizer for ``config.profile``.
        engine: Correction heuristics from ``config``.

    Example:
        >>> oracle = StaticOracle({"a", "e", "Alemanha", "OPEC"},
        ...                       {"alemanha": ["Alemanha"], "opec": ["OPEC"]})
        >>> pipeline = CorpusPipeline(oracle=oracle)
        >>> pipeline.count_words("A alemanha e a opec.").result.frequencies.to_dict()
        {'Alemanha': 1, 'OPEC': 1, 'a': 2, 'e': 1}
    """

    config: PipelineConfig = field(default_factory=PipelineConfig)
    oracle: LexicalOracle | None = None
    tokenizer: Tokenizer | None = field(default=None)
    engine: CorrectionEngine | None = field(default=None)

    def __post_init__(self) -> None:
        """Initialize pipeline components."""
        if self.oracle is None:
            # Fatal if the dictionary is missing: raises OracleUnavailableError
            self.oracle = create_oracle(self.config.oracle)

        if self.tokenizer is None:
            self.tokenizer = Tokenizer(self.config.profile)

        if self.engine is None:
            self.engine = CorrectionEngine(
                accent_table=accent_table(self.config.accent_table),
                muted_letters=self.config.muted_letters,
            )

    def prepare(self, raw_text: str) -> str:
        """Normalize raw corpus text."""
        return normalize(raw_text, self.config.normalization_form)

    def run(self, raw_text: str, mode: CountMode) -> PassResult:
        """
        Run one pass over raw text.

        Args:
            raw_text: Whole corpus text.
            mode: "unigram" or "bigram".

        Returns:
            PassResult with the three tables and statistics.

        Raises:
            OracleQueryError: If the oracle fails mid-pass.
        """
        if mode not in COUNT_MODES:
            raise ValueError(f"mode must be one of {COUNT_MODES}, got {mode!r}")

        start_time = time.time()
        text = self.prepare(raw_text)
        if not text.strip():
            logger.warning("Corpus is empty; all tables will be empty")

        workers = self.config.workers
        logger.info("Starting %s pass over %d characters", mode, len(text))

        if workers > 1:
            sharded = run_sharded(
                text,
                self.tokenizer,
                self.oracle,
                self.engine,
                mode,
                workers=workers,
                cache_policy=self.config.cache_policy,
            )
            result, counts = sharded.result, sharded.stats
            suggest_calls, cache_hits = sharded.suggest_calls, sharded.cache_hits
            cache_size = sum(len(c) for c in sharded.caches)
            cache = sharded.caches[0] if len(sharded.caches) == 1 else None
        else:
            cache = CorrectionCache()
            aggregator = count_tokens(
                self.tokenizer.tokenize(text),
                lambda word: cache.resolve(word, self.oracle, self.engine),
                mode,
            )
            result, counts = aggregator.result, aggregator.stats
            suggest_calls, cache_hits, cache_size = cache.suggest_calls, cache.hits, len(cache)

        stats = PassStats.from_counts(
            mode,
            counts,
            suggest_calls=suggest_calls,
            cache_hits=cache_hits,
            cache_size=cache_size,
            workers=workers,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        logger.info("Finished %s", stats.summary())
        return PassResult(result=result, stats=stats, cache=cache)

    def count_words(self, raw_text: str) -> PassResult:
        """Unigram pass over raw text."""
        return self.run(raw_text, "unigram")

    def count_digrams(self, raw_text: str) -> PassResult:
        """Bigram pass over raw text."""
        return self.run(raw_text, "bigram")

    def run_file(self, path: str | Path, mode: CountMode) -> PassResult:
        """
        Read a corpus file and run one pass over it.

        Raises:
            CorpusReadError: If the file cannot be read.
        """
        return self.run(read_corpus(path), mode)

    def get_info(self) -> dict[str, Any]:
        """Get pipeline configuration information."""
        return {
            "profile": self.config.profile.name,
            "oracle": type(self.oracle).__name__,
            "normalization_form": self.config.normalization_form,
            "muted_letters": self.engine.muted_letters,
            "accent_entries": len(self.engine.accent_table),
            "workers": self.config.workers,
            "cache_policy": self.config.cache_policy,
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def create_pipeline(
    config: PipelineConfig | None = None,
    oracle: LexicalOracle | None = None,
) -> CorpusPipeline:
    """
    Create a corpus pipeline.

    Args:
        config: Pipeline configuration (defaults for Portuguese if None).
        oracle: Oracle to use instead of the one described by config.

    Raises:
        OracleUnavailableError: If the configured oracle cannot be built.
    """
    return CorpusPipeline(config=config or PipelineConfig(), oracle=oracle)


def count_words(
    path: str | Path,
    config: PipelineConfig | None = None,
    oracle: LexicalOracle | None = None,
) -> PassResult:
    """Unigram tables for a corpus file."""
    return create_pipeline(config, oracle).run_file(path, "unigram")


def count_digrams(
    path: str | Path,
    config: PipelineConfig | None = None,
    oracle: LexicalOracle | None = None,
) -> PassResult:
    """Bigram tables for a corpus file."""
    return create_pipeline(config, oracle).run_file(path, "bigram")
