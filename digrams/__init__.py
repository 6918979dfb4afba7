"""
digrams: word and digram frequency tables from a raw text corpus.

Words are validated against a lexical oracle (pyspellchecker or a
Hunspell dictionary through enchant). Rejected words are rescued by a few
orthographic heuristics (capitalization, dropped muted consonants, single
accent swaps) checked against the oracle's suggestions, with one
``suggest`` call per distinct rejected word for the whole pass.

Example:
    >>> import digrams
    >>> result = digrams.count_digrams("europarl.pt")
    >>> result.result.frequencies["parlamento europeu"]
    1234
    >>> digrams.write_result(result.result, "2_grams.words")
"""

from digrams.config import (
    BUILTIN_PROFILES,
    ENGLISH,
    PORTUGUESE,
    LanguageProfile,
    OracleConfig,
    PipelineConfig,
    get_profile,
    load_config,
)
from digrams.counting import CountResult, FrequencyTable
from digrams.exceptions import (
    ConfigurationError,
    CorpusReadError,
    DigramsError,
    OracleError,
    OracleQueryError,
    OracleUnavailableError,
)
from digrams.lexicon import (
    CorrectionCache,
    CorrectionEngine,
    EnchantOracle,
    LexicalOracle,
    SpellCheckerOracle,
    StaticOracle,
    correct,
)
from digrams.models import Corrected, Token, Unresolved, Valid
from digrams.pipeline import (
    CorpusPipeline,
    PassResult,
    PassStats,
    count_digrams,
    count_words,
    create_pipeline,
)
from digrams.readers import make_sample, read_corpus, write_result, write_table
from digrams.text import Tokenizer, normalize

__version__ = "0.1.0"
__all__ = [
    # Main API
    "count_words",
    "count_digrams",
    "create_pipeline",
    "CorpusPipeline",
    "PassResult",
    "PassStats",
    # Configuration
    "PipelineConfig",
    "OracleConfig",
    "LanguageProfile",
    "PORTUGUESE",
    "ENGLISH",
    "BUILTIN_PROFILES",
    "get_profile",
    "load_config",
    # Text
    "normalize",
    "Tokenizer",
    # Lexicon
    "LexicalOracle",
    "SpellCheckerOracle",
    "EnchantOracle",
    "StaticOracle",
    "CorrectionEngine",
    "CorrectionCache",
    "correct",
    # Models
    "Token",
    "Valid",
    "Corrected",
    "Unresolved",
    # Tables & IO
    "FrequencyTable",
    "CountResult",
    "read_corpus",
    "write_table",
    "write_result",
    "make_sample",
    # Exceptions
    "DigramsError",
    "ConfigurationError",
    "CorpusReadError",
    "OracleError",
    "OracleUnavailableError",
    "OracleQueryError",
]
