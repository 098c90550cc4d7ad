"""IEEE Xplore search and full-text lookup."""

import logging
from typing import Any

from bibfetchers.fetchers.base import ConfiguredFetcher, FulltextFetcher, SearchBasedFetcher
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json

logger = logging.getLogger(__name__)

_CONTENT_TYPES = {
    "Journals": "article",
    "Magazines": "article",
    "Early Access Articles": "article",
    "Conferences": "inproceedings",
    "Books": "incollection",
    "Standards": "misc",
}


class IEEE(ConfiguredFetcher, SearchBasedFetcher, FulltextFetcher):
    """Query the IEEE Xplore metadata API. Requires an API key."""

    name = "IEEEXplore"

    API_URL = "https://ieeexploreapi.ieee.org/api/v1/search/articles"
    STAMP_URL = "https://ieeexplore.ieee.org/stamp/stamp.jsp?tp=&arnumber={number}"

    MAX_RECORDS = 25

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        return [self._to_entry(article) for article in self._articles({"querytext": query})]

    def find_fulltext(self, entry: BibEntry) -> str | None:
        """Return the stamp page of an IEEE article identified by its DOI."""
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        # IEEE DOIs all live under the 10.1109 prefix
        if doi is None or not doi.normalized.startswith("10.1109/"):
            return None
        articles = self._articles({"doi": doi.normalized}, max_records=1)
        if not articles:
            return None
        article = articles[0]
        if article.get("pdf_url"):
            return article["pdf_url"]
        if article.get("article_number"):
            return self.STAMP_URL.format(number=article["article_number"])
        return None

    def _articles(self, params: dict[str, str], max_records: int = MAX_RECORDS) -> list[dict[str, Any]]:
        key = self._require_key(self.settings.api_keys.ieee, self.name)
        data = get_json(
            self.API_URL,
            params={**params, "apikey": key, "format": "json", "max_records": max_records},
            timeout=self.timeout,
        )
        return (data or {}).get("articles") or []

    def _to_entry(self, article: dict[str, Any]) -> BibEntry:
        entry_type = _CONTENT_TYPES.get(article.get("content_type", ""), "misc")
        entry = BibEntry(entry_type=entry_type)
        entry.set(StandardField.TITLE, article.get("title"))
        authors = (article.get("authors") or {}).get("authors") or []
        entry.set(StandardField.AUTHOR, join_authors([a.get("full_name", "") for a in authors]))
        entry.set(
            StandardField.BOOKTITLE if entry_type in ("inproceedings", "incollection") else StandardField.JOURNAL,
            article.get("publication_title"),
        )
        if article.get("publication_year"):
            entry.set(StandardField.YEAR, str(article["publication_year"]))
        entry.set(StandardField.VOLUME, article.get("volume"))
        entry.set(StandardField.NUMBER, article.get("issue"))
        if article.get("start_page"):
            pages = article["start_page"]
            if article.get("end_page"):
                pages = f"{pages}--{article['end_page']}"
            entry.set(StandardField.PAGES, pages)
        entry.set(StandardField.DOI, article.get("doi"))
        entry.set(StandardField.PUBLISHER, article.get("publisher"))
        entry.set(StandardField.ISSN, article.get("issn"))
        entry.set(StandardField.ABSTRACT, article.get("abstract"))
        entry.set(StandardField.URL, article.get("html_url"))

        terms = ((article.get("index_terms") or {}).get("author_terms") or {}).get("terms") or []
        if terms:
            entry.set(StandardField.KEYWORDS, self.settings.imports.keyword_separator.join(terms))
        return entry
