"""
Exception classes for digrams.

All digrams exceptions inherit from DigramsError,
making it easy to catch all library errors.

Per-token outcomes (not-a-word, unresolved) are never raised; they are
counted in the diagnostic tables. Exceptions here are fatal for a run.

Example:
    >>> try:
    ...     result = digrams.count_words("corpus.txt")
    ... except digrams.CorpusReadError as e:
    ...     print(f"Cannot read corpus: {e}")
    ... except digrams.DigramsError as e:
    ...     print(f"digrams error: {e}")
"""


class DigramsError(Exception):
    """
    Base exception for all digrams errors.

    Catch this to handle any digrams-specific error.
    """

    pass


class ConfigurationError(DigramsError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> LanguageProfile(name="x", letters="", interior_delimiter="-")
        ConfigurationError: letters must not be empty
    """

    pass


class CorpusReadError(DigramsError):
    """
    Raised when the corpus file cannot be read or is not valid UTF-8.
    """

    pass


class OracleError(DigramsError):
    """
    Base class for lexical oracle failures.
    """

    pass


class OracleUnavailableError(OracleError):
    """
    Raised when the oracle backend cannot be initialized.

    Typically a missing dictionary (e.g. no pt_PT Hunspell files installed).
    """

    pass


class OracleQueryError(OracleError):
    """
    Raised when an exists/suggest query fails.

    Oracle answers are deterministic, so a failure means a broken setup.
    It is never retried.
    """

    pass
