"""
Corpus readers and table writers.
"""

from digrams.readers.corpus import (
    BIGRAM_NAMING,
    UNIGRAM_NAMING,
    OutputNaming,
    diagnostic_paths,
    make_sample,
    read_corpus,
    write_result,
    write_table,
)

__all__ = [
    "read_corpus",
    "write_table",
    "write_result",
    "diagnostic_paths",
    "make_sample",
    "OutputNaming",
    "UNIGRAM_NAMING",
    "BIGRAM_NAMING",
]
