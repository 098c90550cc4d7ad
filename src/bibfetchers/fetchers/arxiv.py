"""arXiv fetcher."""

import logging
import re

import arxiv
import requests

from bibfetchers.config.settings import Settings
from bibfetchers.exceptions import FetchError, NetworkError
from bibfetchers.fetchers.base import (
    ConfiguredFetcher,
    FulltextFetcher,
    IdBasedFetcher,
    IdFetcher,
    SearchBasedFetcher,
)
from bibfetchers.identifiers import ArXivIdentifier, IdentifierType
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.matching import titles_match

logger = logging.getLogger(__name__)


class ArXiv(ConfiguredFetcher, IdBasedFetcher, SearchBasedFetcher, IdFetcher, FulltextFetcher):
    """Look up, search and locate preprints on arXiv."""

    name = "ArXiv"
    identifier_type = IdentifierType.ARXIV

    MAX_RESULTS = 20

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self._client = arxiv.Client(page_size=self.MAX_RESULTS, num_retries=1)

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        arxiv_id = ArXivIdentifier.parse(identifier)
        if arxiv_id is None:
            return None
        result = self._first(arxiv.Search(id_list=[arxiv_id.with_version]))
        return self._to_entry(result) if result else None

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        results = self._results(arxiv.Search(query=query, max_results=self.MAX_RESULTS))
        return [self._to_entry(r) for r in results]

    def find_identifier(self, entry: BibEntry) -> ArXivIdentifier | None:
        """Return the arXiv id of an entry, searching by title if it has none."""
        eprint = entry.get(StandardField.EPRINT)
        if eprint:
            arxiv_id = ArXivIdentifier.parse(eprint)
            if arxiv_id is not None:
                return arxiv_id

        title = entry.get(StandardField.TITLE)
        if not title:
            return None
        # arXiv query syntax breaks on embedded quotes
        query = 'ti:"{}"'.format(re.sub(r'["{}]', "", title))
        for result in self._results(arxiv.Search(query=query, max_results=5)):
            if titles_match(title, result.title):
                return ArXivIdentifier.parse(result.get_short_id())
        return None

    def find_fulltext(self, entry: BibEntry) -> str | None:
        arxiv_id = self.find_identifier(entry)
        if arxiv_id is None:
            return None
        result = self._first(arxiv.Search(id_list=[arxiv_id.with_version]))
        return result.pdf_url if result else None

    def _first(self, search: arxiv.Search) -> arxiv.Result | None:
        results = self._results(search)
        return results[0] if results else None

    def _results(self, search: arxiv.Search) -> list[arxiv.Result]:
        try:
            return list(self._client.results(search))
        except arxiv.HTTPError as e:
            raise FetchError("arXiv request failed", details=str(e)) from e
        except arxiv.ArxivError as e:
            raise FetchError("Unexpected answer from arXiv", details=str(e)) from e
        except requests.RequestException as e:
            raise NetworkError("arXiv request failed", details=str(e)) from e

    def _to_entry(self, result: arxiv.Result) -> BibEntry:
        entry = BibEntry(entry_type="article")
        entry.set(StandardField.TITLE, result.title)
        entry.set(StandardField.AUTHOR, join_authors([a.name for a in result.authors]))
        if result.published:
            entry.set(StandardField.YEAR, str(result.published.year))
        entry.set(StandardField.ABSTRACT, result.summary)
        entry.set(StandardField.DOI, result.doi)
        entry.set(StandardField.JOURNAL, result.journal_ref)
        entry.set(StandardField.EPRINT, result.get_short_id())
        entry.set(StandardField.EPRINTTYPE, "arXiv")
        entry.set(StandardField.PRIMARYCLASS, result.primary_category)
        entry.set(StandardField.URL, result.entry_id)
        if result.categories:
            entry.set(
                StandardField.KEYWORDS,
                self.settings.imports.keyword_separator.join(result.categories),
            )
        return entry
