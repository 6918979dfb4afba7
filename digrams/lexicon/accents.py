"""
Accent equivalence table used by the accent-substitution heuristic.

Each character maps to exactly one replacement. Some entries strip an
accent (ê -> e) and some add one (e -> é), covering the two directions of
transcription noise. The table is not a bijection: "a" maps to "á" while
"á", "à", "ã" and "â" all map back to "a".
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

PORTUGUESE_ACCENTS: Mapping[str, str] = MappingProxyType(
    {
        "ê": "e",
        "á": "a",
        "à": "a",
        "é": "e",
        "e": "é",
        "ã": "a",
        "a": "á",
        "â": "a",
        "õ": "o",
        "o": "õ",
        "í": "i",
        "i": "í",
        "ç": "c",
        "c": "ç",
    }
)

DEFAULT_ACCENT_TABLE = PORTUGUESE_ACCENTS


def accent_table(overrides: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """
    Return a read-only accent table.

    Args:
        overrides: Table to use instead of the Portuguese default.
            Passing an empty mapping disables the heuristic.
    """
    if overrides is None:
        return DEFAULT_ACCENT_TABLE
    return MappingProxyType(dict(overrides))
