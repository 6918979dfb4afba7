"""
Sentence-aligned sharding for multi-worker passes.

The corpus is cut only at sentence terminators, so no bigram can span two
shards, and merging shard results is a plain per-key sum (commutative and
associative, hence independent of completion order).

Cache policies:
- "shared": one lock-protected CorrectionCache for every shard; each
  distinct OOV word still reaches ``suggest`` at most once.
- "per_shard": each shard gets its own cache; a word recurring in several
  shards is suggested once per shard.

Workers are threads. The oracle is shared unless ``oracle_factory`` is
given, in which case every shard builds its own (use this for backends
that are not safe to share between threads).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from digrams.counting.aggregator import CountStats, count_tokens
from digrams.counting.tables import CountMode, CountResult, merge_results
from digrams.lexicon.cache import CorrectionCache
from digrams.lexicon.correction import CorrectionEngine
from digrams.lexicon.oracle import LexicalOracle
from digrams.text.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shard:
    """A contiguous run of whole sentences."""

    first_sentence_index: int
    text: str


@dataclass
class ShardedResult:
    """Merged outcome of a sharded pass."""

    result: CountResult
    stats: CountStats
    caches: list[CorrectionCache] = field(default_factory=list)

    @property
    def suggest_calls(self) -> int:
        return sum(cache.suggest_calls for cache in self.caches)

    @property
    def cache_hits(self) -> int:
        return sum(cache.hits for cache in self.caches)


def shard_sentences(text: str, num_shards: int, terminator: str = ".") -> list[Shard]:
    """
    Split text into at most num_shards shards of whole sentences.

    Shards hold roughly equal numbers of characters. Joining the shard
    texts with the terminator gives back the original text.

    Example:
        >>> [s.text for s in shard_sentences("a b. c. d e", 2)]
        ['a b. c', ' d e']
    """
    if num_shards < 1:
        raise ValueError(f"num_shards must be >= 1, got {num_shards}")

    sentences = text.split(terminator)
    num_shards = min(num_shards, len(sentences))
    target = max(1, len(text) // num_shards)

    shards: list[Shard] = []
    group: list[str] = []
    group_start = 0
    group_size = 0

    for index, sentence in enumerate(sentences):
        group.append(sentence)
        group_size += len(sentence) + 1
        remaining_sentences = len(sentences) - index - 1
        remaining_shards = num_shards - len(shards) - 1
        if (
            group_size >= target and remaining_shards > 0 and remaining_sentences > 0
        ) or remaining_sentences < remaining_shards:
            shards.append(Shard(group_start, terminator.join(group)))
            group, group_start, group_size = [], index + 1, 0

    if group:
        shards.append(Shard(group_start, terminator.join(group)))

    return shards


def run_sharded(
    text: str,
    tokenizer: Tokenizer,
    oracle: LexicalOracle,
    engine: CorrectionEngine,
    mode: CountMode,
    workers: int = 4,
    cache_policy: str = "shared",
    cache: CorrectionCache | None = None,
    oracle_factory: Callable[[], LexicalOracle] | None = None,
) -> ShardedResult:
    """
    Count text on a thread pool and merge the shard results.

    Args:
        text: Normalized corpus text.
        tokenizer: Tokenizer for the corpus language.
        oracle: Lexical oracle (shared unless oracle_factory is given).
        engine: Correction heuristics.
        mode: "unigram" or "bigram".
        workers: Number of shards and worker threads.
        cache_policy: "shared" or "per_shard".
        cache: Cache to use with the "shared" policy (a new one if None).
        oracle_factory: Builds one oracle per shard when given.

    Returns:
        ShardedResult with merged tables, merged stats and the caches used.
    """
    if cache_policy not in ("shared", "per_shard"):
        raise ValueError(f"cache_policy must be 'shared' or 'per_shard', got {cache_policy!r}")

    shards = shard_sentences(text, workers, tokenizer.profile.sentence_terminator)
    shared_cache = cache if cache is not None else CorrectionCache()

    if cache_policy == "shared":
        caches = [shared_cache] * len(shards)
    else:
        caches = [CorrectionCache() for _ in shards]

    def work(shard: Shard, shard_cache: CorrectionCache):
        shard_oracle = oracle_factory() if oracle_factory is not None else oracle
        tokens = tokenizer.tokenize(shard.text, shard.first_sentence_index)
        return count_tokens(
            tokens, lambda word: shard_cache.resolve(word, shard_oracle, engine), mode
        )

    logger.info(
        "Counting %d shards on %d workers (%s, cache=%s)",
        len(shards),
        workers,
        mode,
        cache_policy,
    )
    with ThreadPoolExecutor(max_workers=workers) as pool:
        aggregators = list(pool.map(work, shards, caches))

    stats = CountStats()
    for aggregator in aggregators:
        stats.merge(aggregator.stats)

    unique_caches = [shared_cache] if cache_policy == "shared" else caches
    return ShardedResult(
        result=merge_results((a.result for a in aggregators), mode),
        stats=stats,
        caches=unique_caches,
    )
