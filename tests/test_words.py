# Area: Config Tests
"""Tests for word list files."""

import pytest

from alias_engine.errors import ConfigurationError
from alias_engine.words import load_word_list


class TestPlainText:
    """One word per line."""

    def test_skips_blank_and_comment_lines(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# party words\napple\n\n  river  \n#castle\n", encoding="utf-8")
        entries = load_word_list(path)
        assert [e.text for e in entries] == ["apple", "river"]
        assert all(e.complexity == 1 and e.taboo_words == () for e in entries)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_word_list(tmp_path / "missing.txt")


class TestCsv:
    """CSV with text, complexity and taboo columns."""

    def test_reads_complexity_and_taboo_words(self, tmp_path):
        path = tmp_path / "words.csv"
        path.write_text(
            "text,complexity,taboo1,taboo2,taboo3\n"
            "apple,1,fruit,red,tree\n"
            "democracy,3,vote,,\n",
            encoding="utf-8",
        )
        apple, democracy = load_word_list(path)
        assert apple.taboo_words == ("fruit", "red", "tree")
        assert democracy.complexity == 3
        assert democracy.taboo_words == ("vote",)

    def test_complexity_column_optional(self, tmp_path):
        path = tmp_path / "words.csv"
        path.write_text("text,taboo1\napple,fruit\n", encoding="utf-8")
        (apple,) = load_word_list(path)
        assert apple.complexity == 1
        assert apple.taboo_words == ("fruit",)

    def test_rows_without_text_skipped(self, tmp_path):
        path = tmp_path / "words.csv"
        path.write_text("text,complexity\n,2\napple,\n", encoding="utf-8")
        assert [e.text for e in load_word_list(path)] == ["apple"]

    def test_requires_text_column(self, tmp_path):
        path = tmp_path / "words.csv"
        path.write_text("word,complexity\napple,1\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="text"):
            load_word_list(path)

    @pytest.mark.parametrize("value", ["hard", "0", "4"])
    def test_invalid_complexity(self, tmp_path, value):
        path = tmp_path / "words.csv"
        path.write_text(f"text,complexity\napple,{value}\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match=":2:"):
            load_word_list(path)
