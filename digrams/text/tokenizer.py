"""
Configuration-driven word tokenizer.

The corpus is split into sentences on the profile's terminator, each
sentence into whitespace-delimited chunks, and each chunk is tested in
full against the profile's word pattern::

    L+(D L+)*        L = letter class, D = interior delimiter

A chunk that does not match in full ("xyz123", "(casa", "co--op") is a
not-a-word token and keeps its raw form. A matching chunk is case-folded.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from digrams.config import LanguageProfile
from digrams.models import Token

logger = logging.getLogger(__name__)


def build_word_pattern(profile: LanguageProfile) -> re.Pattern[str]:
    """
    Compile the case-insensitive word pattern for a profile.

    Args:
        profile: Language profile with letters and interior delimiter.

    Returns:
        Compiled pattern, meant to be used with ``fullmatch``.

    Example:
        >>> pattern = build_word_pattern(PORTUGUESE)
        >>> bool(pattern.fullmatch("Guarda-Chuva"))
        True
        >>> bool(pattern.fullmatch("guarda-"))
        False
    """
    # Escape every char so letter sets may hold "]", "^", "-" or "\"
    letter_class = "[" + "".join(re.escape(ch) for ch in profile.letters) + "]"
    delimiter = re.escape(profile.interior_delimiter)

    if profile.max_interior_joins is None:
        joins = "*"
    else:
        joins = f"{{0,{profile.max_interior_joins}}}"

    return re.compile(f"{letter_class}+(?:{delimiter}{letter_class}+){joins}", re.IGNORECASE)


class Tokenizer:
    """
    Splits normalized text into sentence-indexed tokens.

    Attributes:
        profile: Language profile the word pattern was built from.
        pattern: Compiled word pattern.

    Example:
        >>> tokenizer = Tokenizer(PORTUGUESE)
        >>> [t.word for t in tokenizer.tokenize("A casa. Rua 12")]
        ['a', 'casa', 'rua', None]
    """

    def __init__(self, profile: LanguageProfile):
        self.profile = profile
        self.pattern = build_word_pattern(profile)

    def sentences(self, text: str) -> list[str]:
        """Split text on the sentence terminator."""
        return text.split(self.profile.sentence_terminator)

    def classify(self, chunk: str, sentence_index: int = 0) -> Token:
        """Build the token for a single whitespace-free chunk."""
        if self.pattern.fullmatch(chunk):
            return Token(sentence_index=sentence_index, raw=chunk, word=chunk.lower())
        return Token(sentence_index=sentence_index, raw=chunk)

    def tokenize(self, text: str, first_sentence_index: int = 0) -> Iterator[Token]:
        """
        Yield every chunk of text as a Token, in order.

        Args:
            text: Normalized text.
            first_sentence_index: Index given to the first sentence, so
                shards of one corpus keep distinct indices.

        Yields:
            Token objects; ``token.word`` is None for not-a-word chunks.
        """
        for offset, sentence in enumerate(self.sentences(text)):
            index = first_sentence_index + offset
            for chunk in sentence.split():
                yield self.classify(chunk, index)

    def tokenize_words(self, text: str) -> Iterator[tuple[int, str]]:
        """Yield ``(sentence_index, word)`` for word tokens only."""
        for token in self.tokenize(text):
            if token.word is not None:
                yield token.sentence_index, token.word
