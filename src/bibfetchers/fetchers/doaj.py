"""Directory of Open Access Journals search."""

from typing import Any
from urllib.parse import quote

from bibfetchers.fetchers.base import ConfiguredFetcher, SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json


class DOAJFetcher(ConfiguredFetcher, SearchBasedFetcher):
    """Search articles indexed by DOAJ."""

    name = "DOAJ"

    API_URL = "https://doaj.org/api/search/articles/"

    PAGE_SIZE = 20

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = get_json(
            self.API_URL + quote(query, safe=""),
            params={"pageSize": self.PAGE_SIZE},
            timeout=self.timeout,
        )
        return [self.to_entry(item.get("bibjson", {})) for item in (data or {}).get("results") or []]

    def to_entry(self, bibjson: dict[str, Any]) -> BibEntry:
        """Map a DOAJ ``bibjson`` record onto a BibEntry."""
        entry = BibEntry(entry_type="article")
        entry.set(StandardField.TITLE, bibjson.get("title"))
        entry.set(StandardField.AUTHOR, join_authors([a.get("name", "") for a in bibjson.get("author", [])]))
        entry.set(StandardField.YEAR, bibjson.get("year"))
        entry.set(StandardField.MONTH, bibjson.get("month"))
        entry.set(StandardField.ABSTRACT, bibjson.get("abstract"))

        journal = bibjson.get("journal") or {}
        entry.set(StandardField.JOURNAL, journal.get("title"))
        entry.set(StandardField.PUBLISHER, journal.get("publisher"))
        entry.set(StandardField.VOLUME, journal.get("volume"))
        entry.set(StandardField.NUMBER, journal.get("number"))
        issns = journal.get("issns") or []
        if issns:
            entry.set(StandardField.ISSN, issns[0])

        start, end = bibjson.get("start_page"), bibjson.get("end_page")
        if start:
            entry.set(StandardField.PAGES, f"{start}--{end}" if end else start)

        for identifier in bibjson.get("identifier", []):
            if (identifier.get("type") or "").lower() == "doi":
                entry.set(StandardField.DOI, identifier.get("id"))
        for link in bibjson.get("link", []):
            if link.get("type") == "fulltext":
                entry.set(StandardField.URL, link.get("url"))
                break

        keywords = bibjson.get("keywords") or []
        if keywords:
            entry.set(StandardField.KEYWORDS, self.settings.imports.keyword_separator.join(keywords))
        return entry
