"""Tests for the BibTeX reader and title matching."""

import pytest

from bibfetchers.model import StandardField
from bibfetchers.utils import parse_bibtex, title_score, titles_match


class TestParseBibtex:
    """Tests for parse_bibtex."""

    def test_single_entry(self):
        text = """
        @Article{Knuth1984,
          author  = {Donald E. Knuth},
          title   = {Literate {P}rogramming},
          journal = "The Computer Journal",
          year    = 1984,
          pages   = {97--111}
        }
        """
        (entry,) = parse_bibtex(text)

        assert entry.entry_type == "article"
        assert entry.citation_key == "Knuth1984"
        assert entry.get(StandardField.TITLE) == "Literate Programming"
        assert entry.get(StandardField.JOURNAL) == "The Computer Journal"
        assert entry.get(StandardField.YEAR) == "1984"
        assert entry.get(StandardField.PAGES) == "97--111"

    def test_skips_comments_and_expands_strings(self):
        text = """
        @comment{ignore me}
        @string{acm = "ACM Press"}
        @misc{a, title = {First}, publisher = acm, month = jan}
        @book{b, title = {Second}}
        """
        entries = parse_bibtex(text)

        assert [e.citation_key for e in entries] == ["a", "b"]
        assert entries[0].get(StandardField.PUBLISHER) == "ACM Press"
        assert entries[0].get(StandardField.MONTH) == "January"
        assert entries[1].entry_type == "book"

    def test_aliases_and_unknown_fields(self):
        text = "@online{x, journaltitle = {J}, date = {2021-05-04}, fjournal = {Full}, custom = {c}}"
        (entry,) = parse_bibtex(text)

        assert entry.entry_type == "online"
        assert entry.get(StandardField.JOURNAL) == "J"
        assert entry.get(StandardField.YEAR) == "2021"
        assert set(entry.fields) == {StandardField.JOURNAL, StandardField.YEAR}

    @pytest.mark.parametrize("text", ["", "   ", "no entries here"])
    def test_nothing_to_parse(self, text):
        assert parse_bibtex(text) == []


class TestTitleMatching:
    """Tests for fuzzy title matching."""

    def test_ignores_case_braces_and_punctuation(self):
        assert titles_match("{Deep} Learning: A Survey", "deep learning a survey")
        assert title_score("A, B.", "a b") == 100

    def test_different_titles(self):
        assert not titles_match("Deep Learning", "Shallow Parsing of German")

    @pytest.mark.parametrize("a,b", [(None, "x"), ("x", None), ("", "")])
    def test_missing_titles_never_match(self, a, b):
        assert not titles_match(a, b)
