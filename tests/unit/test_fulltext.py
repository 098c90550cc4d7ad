"""Tests for the full-text fallback chain."""

from unittest.mock import patch

import pytest
import requests

from bibfetchers.exceptions import MissingAPIKeyError, NetworkError, RateLimitError
from bibfetchers.fetchers.arxiv import ArXiv
from bibfetchers.fetchers.base import FulltextFetcher
from bibfetchers.fulltext import FulltextResult, find_fulltext
from bibfetchers.model import BibEntry, StandardField


class FakeFetcher(FulltextFetcher):
    """Fetcher that returns or raises a canned outcome and records calls."""

    def __init__(self, name, result=None, error=None):
        self._name = name
        self.result = result
        self.error = error
        self.calls = 0

    @property
    def name(self):
        return self._name

    def find_fulltext(self, entry):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


class TestFindFulltext:
    """Tests for find_fulltext."""

    def test_first_hit_wins(self, doi_entry):
        """Should stop at the first fetcher that finds a URL."""
        chain = [
            FakeFetcher("a"),
            FakeFetcher("b", result="https://b.example/paper.pdf"),
            FakeFetcher("c", result="https://c.example/paper.pdf"),
        ]
        result = find_fulltext(doi_entry, fetchers=chain)

        assert result == FulltextResult(url="https://b.example/paper.pdf", fetcher="b")
        assert [f.calls for f in chain] == [1, 1, 0]

    def test_none_when_chain_exhausted(self, doi_entry):
        chain = [FakeFetcher("a"), FakeFetcher("b", result="")]
        assert find_fulltext(doi_entry, fetchers=chain) is None

    def test_empty_chain(self, doi_entry):
        assert find_fulltext(doi_entry, fetchers=[]) is None

    @pytest.mark.parametrize(
        "error",
        [
            NetworkError("connection reset"),
            RateLimitError("slow down"),
            MissingAPIKeyError("Springer requires an API key"),
        ],
    )
    def test_source_failures_are_skipped(self, doi_entry, error):
        """Should move on when a fetcher fails at the source or lacks a key."""
        chain = [
            FakeFetcher("broken", error=error),
            FakeFetcher("good", result="https://good.example/x.pdf"),
        ]
        result = find_fulltext(doi_entry, fetchers=chain)
        assert result.fetcher == "good"

    def test_programming_errors_propagate(self, doi_entry):
        chain = [
            FakeFetcher("buggy", error=RuntimeError("boom")),
            FakeFetcher("good", result="https://good.example/x.pdf"),
        ]
        with pytest.raises(RuntimeError):
            find_fulltext(doi_entry, fetchers=chain)
        assert chain[1].calls == 0

    def test_offline_arxiv_falls_through(self, settings):
        """Should move past arXiv when its client cannot reach the server."""
        arxiv_fetcher = ArXiv(settings)
        entry = BibEntry(fields={StandardField.EPRINT: "1706.03762"})
        chain = [arxiv_fetcher, FakeFetcher("good", result="https://good.example/x.pdf")]
        error = requests.exceptions.ConnectionError("offline")
        with patch.object(arxiv_fetcher._client._session, "get", side_effect=error):
            result = find_fulltext(entry, fetchers=chain)

        assert result.fetcher == "good"

    def test_default_chain_comes_from_registry(self, settings):
        """Should build the registry chain from the given settings."""
        hit = FakeFetcher("hit", result="https://x.example/x.pdf")
        with patch("bibfetchers.fulltext.fulltext_fetchers", return_value=(hit,)) as mock_chain:
            result = find_fulltext(BibEntry(), settings=settings)

        mock_chain.assert_called_once_with(settings)
        assert result.url == "https://x.example/x.pdf"
