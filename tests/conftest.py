"""
Pytest configuration and fixtures for digrams tests.
"""

from pathlib import Path

import pytest

from digrams.lexicon.oracle import StaticOracle

# Portuguese lexicon for "A alemanha e a opec." and a few old spellings
LEXICON = {
    "a",
    "e",
    "o",
    "de",
    "casa",
    "rua",
    "Alemanha",
    "OPEC",
    "ação",
    "adoção",
    "política",
    "europeu",
    "parlamento",
}

SUGGESTIONS = {
    "alemanha": ["Alemanha", "alemanhas"],
    "opec": ["OPEC", "opeca"],
    "acção": ["ação", "acção"],
    "adopção": ["adoção"],
    "politica": ["política", "politicas"],
    "xpto": ["xpta", "apto"],
}


@pytest.fixture
def oracle() -> StaticOracle:
    """Small case-sensitive Portuguese oracle."""
    return StaticOracle(LEXICON, SUGGESTIONS)


@pytest.fixture
def corpus_file(tmp_path: Path) -> Path:
    """Write the reference sentence to a corpus file."""
    path = tmp_path / "corpus.txt"
    path.write_text("A alemanha e a opec.", encoding="utf-8")
    return path
