"""
Frequency tables and per-mode count results.

A FrequencyTable is a Counter that always iterates and serializes in
lexicographic key order, so two runs over the same corpus write
byte-identical files.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Literal

CountMode = Literal["unigram", "bigram"]
COUNT_MODES: tuple[str, ...] = ("unigram", "bigram")


class FrequencyTable:
    """
    Key -> occurrence count, ordered by key.

    Example:
        >>> table = FrequencyTable()
        >>> table.add("rua"); table.add("casa"); table.add("rua")
        >>> list(table.to_lines())
        ['casa 1\\n', 'rua 2\\n']
    """

    def __init__(self, counts: Iterable[tuple[str, int]] | None = None):
        self._counts: Counter[str] = Counter()
        if counts is not None:
            for key, count in counts:
                self.add(key, count)

    def add(self, key: str, count: int = 1) -> None:
        """Increment key by count."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        self._counts[key] += count

    def merge(self, other: FrequencyTable) -> FrequencyTable:
        """Add every count of other into this table and return self."""
        self._counts.update(other._counts)
        return self

    def total(self) -> int:
        """Sum of all counts."""
        return sum(self._counts.values())

    def items(self) -> Iterator[tuple[str, int]]:
        """Iterate (key, count) in key order."""
        for key in sorted(self._counts):
            yield key, self._counts[key]

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        return self._counts.most_common(n)

    def to_lines(self) -> Iterator[str]:
        """Yield ``"<key> <count>\\n"`` lines in key order."""
        for key, count in self.items():
            yield f"{key} {count}\n"

    def to_dict(self) -> dict[str, int]:
        return dict(self.items())

    def __getitem__(self, key: str) -> int:
        return self._counts.get(key, 0)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._counts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"FrequencyTable({self.to_dict()!r})"


@dataclass
class CountResult:
    """
    The three tables produced by one count mode.

    Attributes:
        mode: "unigram" or "bigram".
        frequencies: Resolved words (unigram) or word pairs (bigram).
        not_words: Raw chunks that failed the word pattern.
        unresolved: ``"<word> -> <suggestions>"`` for uncorrectable words.
    """

    mode: CountMode
    frequencies: FrequencyTable = field(default_factory=FrequencyTable)
    not_words: FrequencyTable = field(default_factory=FrequencyTable)
    unresolved: FrequencyTable = field(default_factory=FrequencyTable)

    def merge(self, other: CountResult) -> CountResult:
        """Sum other's tables into this result and return self."""
        if other.mode != self.mode:
            raise ValueError(f"Cannot merge {other.mode} counts into {self.mode} counts")
        self.frequencies.merge(other.frequencies)
        self.not_words.merge(other.not_words)
        self.unresolved.merge(other.unresolved)
        return self

    def tables(self) -> dict[str, FrequencyTable]:
        """Tables by role name."""
        return {
            "frequencies": self.frequencies,
            "not_words": self.not_words,
            "unresolved": self.unresolved,
        }


def merge_results(results: Iterable[CountResult], mode: CountMode) -> CountResult:
    """Merge results of one mode by summing counts per key."""
    merged = CountResult(mode=mode)
    for result in results:
        merged.merge(result)
    return merged
