"""Tests for the orthographic correction heuristics and accent table."""

import pytest

from digrams.lexicon.accents import PORTUGUESE_ACCENTS, accent_table
from digrams.lexicon.correction import (
    CorrectionEngine,
    accent_swaps,
    candidates,
    capitalized,
    correct,
    elisions,
)


class TestAccentTable:
    """Tests for the accent equivalence table."""

    def test_portuguese_entries(self):
        """The built-in table has both stripping and adding entries."""
        assert len(PORTUGUESE_ACCENTS) == 14
        assert PORTUGUESE_ACCENTS["ê"] == "e"
        assert PORTUGUESE_ACCENTS["e"] == "é"
        assert PORTUGUESE_ACCENTS["c"] == "ç"

    def test_read_only(self):
        """The built-in table cannot be mutated."""
        with pytest.raises(TypeError):
            PORTUGUESE_ACCENTS["u"] = "ú"

    def test_override(self):
        """A custom table replaces the default."""
        table = accent_table({"n": "ñ"})
        assert dict(table) == {"n": "ñ"}

    def test_default(self):
        """No override gives the Portuguese table."""
        assert accent_table() is PORTUGUESE_ACCENTS


class TestRewrites:
    """Tests for the individual rewrite generators."""

    def test_capitalized(self):
        assert capitalized("alemanha") == "Alemanha"
        assert capitalized("") == ""

    def test_elisions_interior_only(self):
        """First and last characters are never removed."""
        assert list(elisions("cpc")) == ["cc"]
        assert list(elisions("pacto")) == ["pato"]

    def test_elisions_one_at_a_time(self):
        """Each rewrite drops exactly one letter."""
        assert list(elisions("adopcção")) == ["adocção", "adopção"]

    def test_elisions_custom_letters(self):
        assert list(elisions("facto", "t")) == ["faco"]

    def test_accent_swaps_each_position(self):
        """Every mapped position gives one rewrite."""
        assert list(accent_swaps("pe")) == ["pé"]
        assert list(accent_swaps("ao")) == ["áo", "aõ"]

    def test_accent_swaps_unmapped(self):
        assert list(accent_swaps("xyz")) == []

    def test_candidates_order(self):
        """Capitalization first, then uppercase, elisions, accent swaps."""
        assert list(candidates("acto", {"o": "ó"})) == ["Acto", "ACTO", "ato", "actó"]

    def test_candidates_empty_word(self):
        assert list(candidates("")) == []


class TestCorrect:
    """Tests for correct()."""

    def test_capitalization(self):
        assert correct("alemanha", ["Alemanha", "alemanhas"]) == "Alemanha"

    def test_uppercase(self):
        assert correct("opec", ["OPEC"]) == "OPEC"

    def test_elision(self):
        assert correct("acção", ["ação", "acção"]) == "ação"
        assert correct("adopção", ["adoção"]) == "adoção"

    def test_accent(self):
        assert correct("politica", ["política", "politicas"]) == "política"

    def test_priority(self):
        """Capitalization wins over a later heuristic."""
        assert correct("acto", ["ato", "Acto"]) == "Acto"

    def test_capitalization_before_accent(self):
        assert correct("politica", ["Politica", "política"]) == "Politica"

    def test_suggestion_order_irrelevant(self):
        """The heuristic order decides, not the suggestion order."""
        assert correct("acto", ["ACTO", "Acto"]) == "Acto"

    def test_two_changes_needed(self):
        """Only one change is made per rewrite."""
        assert correct("acçao", ["ação"]) is None

    def test_two_muted_letters(self):
        """Removing both muted letters would need two rewrites."""
        assert correct("adopcção", ["adoção"]) is None

    def test_no_match(self):
        assert correct("xpto", ["xpta", "apto"]) is None

    def test_empty_suggestions(self):
        assert correct("alemanha", []) is None

    def test_empty_accent_table_disables_swaps(self):
        assert correct("politica", ["política"], accent_table={}) is None


class TestCorrectionEngine:
    """Tests for CorrectionEngine."""

    def test_defaults(self):
        engine = CorrectionEngine()
        assert engine.muted_letters == "cp"
        assert engine.accent_table is PORTUGUESE_ACCENTS

    def test_correct(self):
        engine = CorrectionEngine(muted_letters="c")
        assert engine.correct("acção", ["ação"]) == "ação"
        assert engine.correct("adopção", ["adoção"]) is None
