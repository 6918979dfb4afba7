"""Tests for corpus reading, table writing and sampling."""

from pathlib import Path

import pytest

from digrams.counting.tables import CountResult, FrequencyTable
from digrams.exceptions import CorpusReadError
from digrams.readers.corpus import (
    diagnostic_paths,
    make_sample,
    read_corpus,
    write_result,
    write_table,
)


class TestReadCorpus:
    """Tests for read_corpus()."""

    def test_read(self, corpus_file):
        assert read_corpus(corpus_file) == "A alemanha e a opec."

    def test_missing(self, tmp_path):
        with pytest.raises(CorpusReadError, match="Cannot read"):
            read_corpus(tmp_path / "missing.txt")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("acção".encode("latin-1"))

        with pytest.raises(CorpusReadError, match="UTF-8"):
            read_corpus(path)


class TestOutputNaming:
    """Tests for diagnostic table paths."""

    def test_unigram_names(self):
        not_words, unresolved = diagnostic_paths("out/dic_corpus_unique.words", "unigram")
        assert not_words == Path("out/not_dic_corpus_unique.words")
        assert unresolved == Path("out/not_check_dic_corpus_unique.words")

    def test_bigram_names(self):
        not_words, unresolved = diagnostic_paths("2_grams_small.words", "bigram")
        assert not_words == Path("not_2_grams_small.words")
        assert unresolved == Path("not_2_grams_not_check_dic_small.words")

    def test_directory_not_rewritten(self):
        """Only the file name carries the marker."""
        not_words, _ = diagnostic_paths("dic/dic_small.words", "unigram")
        assert not_words == Path("dic/not_dic_small.words")

    def test_no_marker(self):
        not_words, unresolved = diagnostic_paths("counts.txt", "bigram")
        assert not_words == Path("counts.txt.not_words")
        assert unresolved == Path("counts.txt.unresolved")


class TestWriteTables:
    """Tests for write_table() and write_result()."""

    def test_write_table(self, tmp_path):
        table = FrequencyTable([("rua", 2), ("casa", 1)])
        path = write_table(table, tmp_path / "nested" / "dic.words")

        assert path.read_text(encoding="utf-8") == "casa 1\nrua 2\n"

    def test_empty_table(self, tmp_path):
        path = write_table(FrequencyTable(), tmp_path / "empty.words")
        assert path.read_text(encoding="utf-8") == ""

    def test_write_result(self, tmp_path):
        result = CountResult("unigram")
        result.frequencies.add("OPEC")
        result.not_words.add("12")
        result.unresolved.add("xpto -> xpta apto", 3)

        written = write_result(result, tmp_path / "dic_small.words")

        assert set(written) == {"frequencies", "not_words", "unresolved"}
        assert written["not_words"].name == "not_dic_small.words"
        assert written["frequencies"].read_text(encoding="utf-8") == "OPEC 1\n"
        assert written["not_words"].read_text(encoding="utf-8") == "12 1\n"
        assert written["unresolved"].read_text(encoding="utf-8") == "xpto -> xpta apto 3\n"

    def test_deterministic_output(self, tmp_path):
        """Insertion order does not change the written bytes."""
        one = write_table(FrequencyTable([("b", 1), ("a", 2)]), tmp_path / "one")
        two = write_table(FrequencyTable([("a", 2), ("b", 1)]), tmp_path / "two")
        assert one.read_bytes() == two.read_bytes()


class TestMakeSample:
    """Tests for make_sample()."""

    @pytest.fixture
    def big_corpus(self, tmp_path):
        path = tmp_path / "europarl.pt"
        path.write_text("".join(f"Frase {i}.\n" for i in range(50)), encoding="utf-8")
        return path

    def test_first_lines_joined(self, big_corpus, tmp_path):
        sample = make_sample(big_corpus, tmp_path / "small.pt", num_lines=3)
        assert sample.read_text(encoding="utf-8") == "Frase 0.Frase 1.Frase 2."

    def test_keep_newlines(self, big_corpus, tmp_path):
        sample = make_sample(big_corpus, tmp_path / "small.pt", num_lines=2, keep_newlines=True)
        assert sample.read_text(encoding="utf-8") == "Frase 0.\nFrase 1."

    def test_short_source(self, big_corpus, tmp_path):
        sample = make_sample(big_corpus, tmp_path / "small.pt", num_lines=1000)
        assert sample.read_text(encoding="utf-8").count(".") == 50

    def test_normalizes_lines(self, tmp_path):
        source = tmp_path / "ligatures.txt"
        source.write_text("\ufb01m\n", encoding="utf-8")
        sample = make_sample(source, tmp_path / "out.txt", num_lines=1)
        assert sample.read_text(encoding="utf-8") == "fim"

    def test_invalid_line_count(self, big_corpus, tmp_path):
        with pytest.raises(ValueError):
            make_sample(big_corpus, tmp_path / "small.pt", num_lines=0)

    def test_missing_source(self, tmp_path):
        with pytest.raises(CorpusReadError):
            make_sample(tmp_path / "missing", tmp_path / "small.pt")
