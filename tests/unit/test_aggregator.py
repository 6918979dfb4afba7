"""Tests for frequency tables, the aggregator and sharding."""

import pytest

from digrams.config import PORTUGUESE
from digrams.counting.aggregator import CountStats, FrequencyAggregator, count_tokens
from digrams.counting.sharding import run_sharded, shard_sentences
from digrams.counting.tables import CountResult, FrequencyTable, merge_results
from digrams.lexicon.cache import CorrectionCache, WordResolver
from digrams.lexicon.correction import CorrectionEngine
from digrams.lexicon.oracle import CountingOracle
from digrams.models import Corrected, Token, Unresolved, Valid
from digrams.text.tokenizer import Tokenizer

# =============================================================================
# TABLE TESTS
# =============================================================================


class TestFrequencyTable:
    """Tests for FrequencyTable."""

    def test_add_and_get(self):
        table = FrequencyTable()
        table.add("rua")
        table.add("rua", 2)
        assert table["rua"] == 3
        assert table["casa"] == 0
        assert "casa" not in table

    def test_negative_count(self):
        with pytest.raises(ValueError):
            FrequencyTable().add("rua", -1)

    def test_sorted_lines(self):
        """Lines are written in key order, not insertion order."""
        table = FrequencyTable([("rua", 2), ("a casa", 1), ("Alemanha", 4)])
        assert list(table.to_lines()) == ["Alemanha 4\n", "a casa 1\n", "rua 2\n"]

    def test_merge(self):
        left = FrequencyTable([("a", 1), ("b", 2)])
        right = FrequencyTable([("b", 3), ("c", 1)])
        assert left.merge(right).to_dict() == {"a": 1, "b": 5, "c": 1}
        assert left.total() == 7

    def test_equality(self):
        assert FrequencyTable([("a", 1)]) == FrequencyTable([("a", 1)])
        assert FrequencyTable([("a", 1)]) != FrequencyTable([("a", 2)])


class TestCountResult:
    """Tests for CountResult merging."""

    def test_mode_mismatch(self):
        with pytest.raises(ValueError):
            CountResult("unigram").merge(CountResult("bigram"))

    def test_merge_results(self):
        one = CountResult("unigram")
        one.frequencies.add("a")
        two = CountResult("unigram")
        two.frequencies.add("a")
        two.not_words.add("12")

        merged = merge_results([one, two], "unigram")
        assert merged.frequencies["a"] == 2
        assert merged.not_words["12"] == 1


# =============================================================================
# AGGREGATOR TESTS
# =============================================================================


def word(sentence, text):
    return Token(sentence, text, text.lower())


class TestFrequencyAggregator:
    """Tests for FrequencyAggregator."""

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            FrequencyAggregator("trigram")

    def test_unigram_counts_replacement(self):
        """Corrected words are counted under their replacement."""
        agg = FrequencyAggregator("unigram")
        agg.feed(word(0, "opec"), Corrected("opec", "OPEC"))
        agg.feed(word(0, "a"), Valid("a"))

        assert agg.result.frequencies.to_dict() == {"OPEC": 1, "a": 1}
        assert agg.stats.corrected == 1
        assert agg.stats.valid == 1

    def test_word_token_needs_outcome(self):
        with pytest.raises(ValueError):
            FrequencyAggregator("unigram").feed(word(0, "casa"))

    def test_not_a_word_kept_raw(self):
        agg = FrequencyAggregator("unigram")
        agg.feed(Token(0, "Rua,"))
        assert agg.result.not_words.to_dict() == {"Rua,": 1}

    def test_unresolved_key(self):
        agg = FrequencyAggregator("unigram")
        agg.feed(word(0, "xpto"), Unresolved("xpto", ("xpta", "apto")))
        agg.feed(word(0, "xpto"), Unresolved("xpto", ("xpta", "apto")))
        assert agg.result.unresolved.to_dict() == {"xpto -> xpta apto": 2}
        assert len(agg.result.frequencies) == 0

    def test_bigram_slot(self):
        """Pairs are formed from adjacent resolved words."""
        agg = FrequencyAggregator("bigram")
        assert agg.previous is None
        agg.feed(word(0, "a"), Valid("a"))
        assert agg.previous == "a"
        agg.feed(word(0, "casa"), Valid("casa"))
        assert agg.previous == "casa"
        assert agg.result.frequencies.to_dict() == {"a casa": 1}

    def test_bigram_reset_on_not_a_word(self):
        """A not-a-word between two words breaks adjacency."""
        agg = FrequencyAggregator("bigram")
        agg.feed(word(0, "casa"), Valid("casa"))
        agg.feed(Token(0, "xyz123"))
        agg.feed(word(0, "rua"), Valid("rua"))

        assert len(agg.result.frequencies) == 0
        assert agg.result.not_words["xyz123"] == 1

    def test_bigram_reset_on_unresolved(self):
        agg = FrequencyAggregator("bigram")
        agg.feed(word(0, "casa"), Valid("casa"))
        agg.feed(word(0, "xpto"), Unresolved("xpto"))
        agg.feed(word(0, "rua"), Valid("rua"))

        assert len(agg.result.frequencies) == 0
        assert agg.result.unresolved["xpto -> "] == 1

    def test_bigram_reset_on_sentence_end(self):
        agg = FrequencyAggregator("bigram")
        agg.feed(word(0, "casa"), Valid("casa"))
        agg.end_sentence()
        agg.feed(word(1, "rua"), Valid("rua"))

        assert len(agg.result.frequencies) == 0
        assert agg.stats.sentences == 1


class TestCountTokens:
    """Tests for count_tokens() over tokenizer output."""

    @pytest.fixture
    def tokenizer(self):
        return Tokenizer(PORTUGUESE)

    def test_sentence_boundary_breaks_pairs(self, tokenizer, oracle):
        tokens = tokenizer.tokenize("a casa. rua de casa")
        agg = count_tokens(tokens, WordResolver(oracle), "bigram")

        assert agg.result.frequencies.to_dict() == {"a casa": 1, "de casa": 1, "rua de": 1}
        assert agg.stats.sentences == 2

    def test_pairs_per_clean_sentence(self, tokenizer, oracle):
        """A sentence of k resolved words gives k-1 pairs."""
        agg = count_tokens(
            tokenizer.tokenize("a casa de rua. o parlamento europeu"),
            WordResolver(oracle),
            "bigram",
        )
        assert agg.stats.pairs == (4 - 1) + (3 - 1)
        assert agg.result.frequencies.total() == agg.stats.pairs

    def test_unigram_totals(self, tokenizer, oracle):
        """Every token lands in exactly one of the three tables."""
        agg = count_tokens(
            tokenizer.tokenize("A alemanha, e xpto 12. A opec e a casa."),
            WordResolver(oracle),
            "unigram",
        )
        result = agg.result
        total = result.frequencies.total() + result.not_words.total() + result.unresolved.total()

        assert total == agg.stats.tokens == 10
        assert result.not_words.to_dict() == {"12": 1, "alemanha,": 1}
        assert result.unresolved.to_dict() == {"xpto -> xpta apto": 1}

    def test_stats_merge(self):
        stats = CountStats(tokens=2, valid=1).merge(CountStats(tokens=3, valid=2, pairs=1))
        assert (stats.tokens, stats.valid, stats.pairs) == (5, 3, 1)


# =============================================================================
# SHARDING TESTS
# =============================================================================


class TestSharding:
    """Tests for sentence-aligned sharding."""

    CORPUS = (
        "A alemanha e a opec. A casa de rua. O parlamento europeu e a acção. "
        "xpto de casa. A opec e a alemanha. Rua 12 de casa."
    )

    def test_shards_are_whole_sentences(self):
        shards = shard_sentences(self.CORPUS, 3)
        assert len(shards) == 3
        assert ".".join(s.text for s in shards) == self.CORPUS

    def test_first_sentence_indices(self):
        shards = shard_sentences("a. b. c. d", 2)
        sentences = [s.text.split(".") for s in shards]
        assert shards[0].first_sentence_index == 0
        assert shards[1].first_sentence_index == len(sentences[0])

    def test_more_shards_than_sentences(self):
        shards = shard_sentences("a b. c", 8)
        assert [s.text for s in shards] == ["a b", " c"]

    def test_invalid_shard_count(self):
        with pytest.raises(ValueError):
            shard_sentences("a", 0)

    @pytest.mark.parametrize("mode", ["unigram", "bigram"])
    @pytest.mark.parametrize("workers", [1, 2, 4])
    def test_sharded_equals_sequential(self, oracle, mode, workers):
        """Merged shard tables equal a single-threaded pass."""
        tokenizer = Tokenizer(PORTUGUESE)
        sequential = count_tokens(tokenizer.tokenize(self.CORPUS), WordResolver(oracle), mode)

        sharded = run_sharded(
            self.CORPUS, tokenizer, oracle, CorrectionEngine(), mode, workers=workers
        )

        assert sharded.result == sequential.result
        assert sharded.stats == sequential.stats

    def test_shared_cache_one_suggest_per_word(self, oracle):
        counting = CountingOracle(oracle)
        sharded = run_sharded(
            self.CORPUS,
            Tokenizer(PORTUGUESE),
            counting,
            CorrectionEngine(),
            "unigram",
            workers=3,
        )
        assert all(calls == 1 for calls in counting.suggest_calls.values())
        assert len(sharded.caches) == 1
        assert sharded.suggest_calls == counting.total_suggest_calls

    def test_per_shard_cache(self, oracle):
        """Each shard has its own cache; results are unchanged."""
        counting = CountingOracle(oracle)
        sharded = run_sharded(
            self.CORPUS,
            Tokenizer(PORTUGUESE),
            counting,
            CorrectionEngine(),
            "unigram",
            workers=3,
            cache_policy="per_shard",
        )
        assert len(sharded.caches) == 3
        assert counting.suggest_calls["opec"] >= 2
        assert sharded.result.frequencies["OPEC"] == 2

    def test_explicit_shared_cache(self, oracle):
        cache = CorrectionCache()
        sharded = run_sharded(
            self.CORPUS,
            Tokenizer(PORTUGUESE),
            oracle,
            CorrectionEngine(),
            "unigram",
            workers=2,
            cache=cache,
        )
        assert sharded.caches == [cache]
        assert "opec" in cache

    def test_invalid_cache_policy(self, oracle):
        with pytest.raises(ValueError):
            run_sharded(
                "a",
                Tokenizer(PORTUGUESE),
                oracle,
                CorrectionEngine(),
                "unigram",
                cache_policy="global",
            )
