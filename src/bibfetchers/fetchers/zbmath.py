"""zbMATH Open search."""

from typing import Any

from bibfetchers.fetchers.base import ConfiguredFetcher, SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json


class ZbMATH(ConfiguredFetcher, SearchBasedFetcher):
    """Search the zbMATH Open document index."""

    name = "zbMATH"

    API_URL = "https://api.zbmath.org/v1/document/_search"

    RESULTS_PER_PAGE = 20

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = get_json(
            self.API_URL,
            params={"search_string": query, "page": 0, "results_per_page": self.RESULTS_PER_PAGE},
            timeout=self.timeout,
        )
        return [self._to_entry(doc) for doc in (data or {}).get("result") or []]

    def _to_entry(self, doc: dict[str, Any]) -> BibEntry:
        entry = BibEntry(entry_type="book" if (doc.get("document_type") or {}).get("code") == "b" else "article")
        entry.set(StandardField.TITLE, (doc.get("title") or {}).get("title"))
        authors = ((doc.get("contributors") or {}).get("authors")) or []
        entry.set(StandardField.AUTHOR, join_authors([a.get("name", "") for a in authors]))
        if doc.get("year"):
            entry.set(StandardField.YEAR, str(doc["year"]))

        sources = doc.get("source") or {}
        series = sources.get("series") or []
        if series:
            entry.set(StandardField.JOURNAL, series[0].get("title"))
            entry.set(StandardField.VOLUME, series[0].get("volume"))
            entry.set(StandardField.NUMBER, series[0].get("issue"))
        entry.set(StandardField.PAGES, sources.get("pages"))

        for link in doc.get("links") or []:
            if link.get("type") == "doi":
                entry.set(StandardField.DOI, link.get("identifier"))
            elif link.get("type") == "arxiv":
                entry.set(StandardField.EPRINT, link.get("identifier"))
                entry.set(StandardField.EPRINTTYPE, "arXiv")

        keywords = [k for k in doc.get("keywords") or [] if isinstance(k, str)]
        if keywords:
            entry.set(StandardField.KEYWORDS, self.settings.imports.keyword_separator.join(keywords))
        if doc.get("identifier"):
            entry.set(StandardField.ZBL, str(doc["identifier"]))
        return entry
