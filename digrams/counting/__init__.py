"""
Frequency counting: tables, the unigram/bigram aggregator, sharded runs.
"""

from digrams.counting.aggregator import CountStats, FrequencyAggregator, count_tokens
from digrams.counting.sharding import Shard, ShardedResult, run_sharded, shard_sentences
from digrams.counting.tables import COUNT_MODES, CountResult, FrequencyTable, merge_results

__all__ = [
    # Tables
    "FrequencyTable",
    "CountResult",
    "merge_results",
    "COUNT_MODES",
    # Aggregation
    "FrequencyAggregator",
    "CountStats",
    "count_tokens",
    # Scale-out
    "Shard",
    "ShardedResult",
    "shard_sentences",
    "run_sharded",
]
