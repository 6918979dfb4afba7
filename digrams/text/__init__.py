"""
Text preparation: Unicode normalization, tokenizing, language detection.

Example:
    >>> from digrams.text import Tokenizer, normalize
    >>> from digrams.config import PORTUGUESE
    >>> tokens = list(Tokenizer(PORTUGUESE).tokenize(normalize("A alemanha.")))
    >>> [t.word for t in tokens]
    ['a', 'alemanha']
"""

from digrams.text.language import detect_language, detect_profile
from digrams.text.normalize import normalize
from digrams.text.tokenizer import Tokenizer, build_word_pattern

__all__ = [
    "normalize",
    "Tokenizer",
    "build_word_pattern",
    "detect_language",
    "detect_profile",
]
