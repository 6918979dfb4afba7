"""
Corpus input and frequency-table output.

The corpus is read whole (a pass is never streamed). Tables are written
one ``"<key> <count>"`` line per entry, sorted by key.

Output naming: the main table path carries a marker that is rewritten
for the two diagnostic tables, e.g. for unigrams::

    dic_corpus_unique.words            resolved words
    not_dic_corpus_unique.words        not-a-word chunks
    not_check_dic_corpus_unique.words  unresolved words with suggestions

and for bigrams ``2_grams.words`` / ``not_2_grams.words`` /
``not_2_grams_not_check_dic.words``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from digrams.counting.tables import CountResult, FrequencyTable
from digrams.exceptions import CorpusReadError
from digrams.text.normalize import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputNaming:
    """How diagnostic table paths are derived from the main table path."""

    marker: str
    not_words: str
    unresolved: str
    fallback_not_words_suffix: str = ".not_words"
    fallback_unresolved_suffix: str = ".unresolved"


UNIGRAM_NAMING = OutputNaming(marker="dic", not_words="not_dic", unresolved="not_check_dic")
BIGRAM_NAMING = OutputNaming(
    marker="2_grams", not_words="not_2_grams", unresolved="not_2_grams_not_check_dic"
)

NAMING_BY_MODE = {"unigram": UNIGRAM_NAMING, "bigram": BIGRAM_NAMING}


def read_corpus(path: str | Path) -> str:
    """
    Read a UTF-8 corpus file.

    Raises:
        CorpusReadError: If the file is missing, unreadable or not UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CorpusReadError(f"Corpus {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CorpusReadError(f"Cannot read corpus {path}: {e}") from e

    logger.info("Read corpus %s (%d characters)", path, len(text))
    return text


def write_table(table: FrequencyTable, path: str | Path) -> Path:
    """
    Write a table as sorted ``"<key> <count>"`` lines.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.writelines(table.to_lines())
    logger.info("Wrote %d entries to %s", len(table), path)
    return path


def diagnostic_paths(path: str | Path, mode: str) -> tuple[Path, Path]:
    """
    Derive the not-a-word and unresolved table paths from the main path.

    Only the file name is rewritten; the first occurrence of the marker is
    replaced. Without a marker, suffixes are appended instead.

    Example:
        >>> diagnostic_paths("/tmp/dic_small.words", "unigram")
        (PosixPath('/tmp/not_dic_small.words'), PosixPath('/tmp/not_check_dic_small.words'))
    """
    path = Path(path)
    naming = NAMING_BY_MODE[mode]
    name = path.name

    if naming.marker in name:
        not_words = name.replace(naming.marker, naming.not_words, 1)
        unresolved = name.replace(naming.marker, naming.unresolved, 1)
    else:
        not_words = name + naming.fallback_not_words_suffix
        unresolved = name + naming.fallback_unresolved_suffix

    return path.with_name(not_words), path.with_name(unresolved)


def write_result(result: CountResult, path: str | Path) -> dict[str, Path]:
    """
    Write the three tables of a count result.

    Args:
        result: Unigram or bigram result.
        path: Path of the main table; diagnostic paths are derived from it.

    Returns:
        Mapping of table role to written path.
    """
    path = Path(path)
    not_words_path, unresolved_path = diagnostic_paths(path, result.mode)
    return {
        "frequencies": write_table(result.frequencies, path),
        "not_words": write_table(result.not_words, not_words_path),
        "unresolved": write_table(result.unresolved, unresolved_path),
    }


def make_sample(
    source: str | Path,
    destination: str | Path,
    num_lines: int = 1_000,
    form: str = "NFKC",
    keep_newlines: bool = False,
) -> Path:
    """
    Write the first num_lines lines of a big corpus to a small sample file.

    Each line is normalized. Lines are concatenated without a separator
    unless keep_newlines is set (Europarl lines end with a period, so
    sentence boundaries survive either way).

    Raises:
        CorpusReadError: If the source cannot be read.
    """
    if num_lines < 1:
        raise ValueError(f"num_lines must be >= 1, got {num_lines}")

    source = Path(source)
    destination = Path(destination)
    separator = "\n" if keep_newlines else ""

    lines = []
    try:
        with open(source, encoding="utf-8") as f:
            for line in f:
                lines.append(normalize(line.rstrip("\r\n"), form))
                if len(lines) >= num_lines:
                    break
    except UnicodeDecodeError as e:
        raise CorpusReadError(f"Corpus {source} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CorpusReadError(f"Cannot read corpus {source}: {e}") from e

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(separator.join(lines), encoding="utf-8")
    logger.info("Wrote %d-line sample of %s to %s", len(lines), source, destination)
    return destination
