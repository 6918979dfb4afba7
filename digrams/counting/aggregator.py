"""
Unigram and bigram counting over a resolved token stream.

Bigram mode keeps a one-word "previous" slot per sentence:

    Empty      --resolved(w)-->          Holding(w)
    Holding(p) --resolved(w)-->          Holding(w), emits "p w"
    any        --not-a-word/unresolved-> Empty
    any        --end of sentence-->      Empty

so a pair is only counted between two adjacent resolved words of the
same sentence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from digrams.counting.tables import COUNT_MODES, CountMode, CountResult
from digrams.models import Corrected, ResolutionOutcome, Token, Unresolved

logger = logging.getLogger(__name__)

Resolver = Callable[[str], ResolutionOutcome]


@dataclass
class CountStats:
    """Token dispositions seen by an aggregator."""

    tokens: int = 0
    sentences: int = 0
    not_words: int = 0
    valid: int = 0
    corrected: int = 0
    unresolved: int = 0
    pairs: int = 0

    def merge(self, other: CountStats) -> CountStats:
        self.tokens += other.tokens
        self.sentences += other.sentences
        self.not_words += other.not_words
        self.valid += other.valid
        self.corrected += other.corrected
        self.unresolved += other.unresolved
        self.pairs += other.pairs
        return self


class FrequencyAggregator:
    """
    Accumulates one mode's tables from (token, outcome) pairs.

    Call :meth:`end_sentence` at every sentence boundary; :func:`count_tokens`
    does this automatically from the tokens' sentence indices.

    Example:
        >>> agg = FrequencyAggregator("bigram")
        >>> agg.feed(Token(0, "a", "a"), Valid("a"))
        >>> agg.feed(Token(0, "casa", "casa"), Valid("casa"))
        >>> agg.result.frequencies["a casa"]
        1
    """

    def __init__(self, mode: CountMode):
        if mode not in COUNT_MODES:
            raise ValueError(f"mode must be one of {COUNT_MODES}, got {mode!r}")
        self.mode = mode
        self.result = CountResult(mode=mode)
        self.stats = CountStats()
        self._previous: str | None = None

    @property
    def previous(self) -> str | None:
        """Word held in the bigram slot (None = Empty)."""
        return self._previous

    def end_sentence(self) -> None:
        """Reset adjacency at a sentence boundary."""
        self._previous = None
        self.stats.sentences += 1

    def feed(self, token: Token, outcome: ResolutionOutcome | None = None) -> None:
        """
        Count one token.

        Args:
            token: Token from the tokenizer.
            outcome: Resolution of ``token.word``; must be given for word
                tokens and is ignored for not-a-word tokens.
        """
        self.stats.tokens += 1

        if not token.is_word:
            self.stats.not_words += 1
            self.result.not_words.add(token.raw)
            self._previous = None
            return

        if outcome is None:
            raise ValueError(f"Word token {token.raw!r} needs a resolution outcome")

        if isinstance(outcome, Unresolved):
            self.stats.unresolved += 1
            self.result.unresolved.add(outcome.diagnostic_key)
            self._previous = None
            return

        if isinstance(outcome, Corrected):
            self.stats.corrected += 1
        else:
            self.stats.valid += 1

        word = outcome.resolved_word
        if self.mode == "unigram":
            self.result.frequencies.add(word)
            return

        if self._previous is not None:
            self.result.frequencies.add(f"{self._previous} {word}")
            self.stats.pairs += 1
        self._previous = word


def count_tokens(
    tokens: Iterable[Token],
    resolve: Resolver,
    mode: CountMode,
) -> FrequencyAggregator:
    """
    Resolve and count a token stream.

    Sentence boundaries are taken from changes of ``token.sentence_index``.

    Args:
        tokens: Tokens in corpus order.
        resolve: Callable mapping a case-folded word to its outcome.
        mode: "unigram" or "bigram".

    Returns:
        The aggregator, holding ``result`` and ``stats``.
    """
    aggregator = FrequencyAggregator(mode)
    current_sentence: int | None = None

    for token in tokens:
        if token.sentence_index != current_sentence:
            if current_sentence is not None:
                aggregator.end_sentence()
            current_sentence = token.sentence_index

        outcome = resolve(token.word) if token.word is not None else None
        aggregator.feed(token, outcome)

    if current_sentence is not None:
        aggregator.end_sentence()

    logger.debug(
        "Counted %d tokens (%s): %d not-words, %d unresolved",
        aggregator.stats.tokens,
        mode,
        aggregator.stats.not_words,
        aggregator.stats.unresolved,
    )
    return aggregator
