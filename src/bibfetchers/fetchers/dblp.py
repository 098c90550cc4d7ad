"""DBLP computer science bibliography search."""

import re
from typing import Any

from bibfetchers.fetchers.base import ConfiguredFetcher, SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json

_TYPES = {
    "Journal Articles": "article",
    "Conference and Workshop Papers": "inproceedings",
    "Books and Theses": "book",
    "Parts in Books or Collections": "incollection",
    "Informal and Other Publications": "misc",
}


class DBLPFetcher(ConfiguredFetcher, SearchBasedFetcher):
    """Query the DBLP publication search API."""

    name = "DBLP"

    API_URL = "https://dblp.org/search/publ/api"

    HITS = 30

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = get_json(
            self.API_URL,
            params={"q": query, "format": "json", "h": self.HITS},
            timeout=self.timeout,
        )
        hits = ((data or {}).get("result") or {}).get("hits") or {}
        return [self._to_entry(hit.get("info", {})) for hit in hits.get("hit", [])]

    def _to_entry(self, info: dict[str, Any]) -> BibEntry:
        entry_type = _TYPES.get(info.get("type", ""), "misc")
        entry = BibEntry(entry_type=entry_type)
        if self.settings.imports.keep_source_citation_key and info.get("key"):
            entry.citation_key = f"DBLP:{info['key']}"

        entry.set(StandardField.TITLE, (info.get("title") or "").rstrip("."))
        authors = (info.get("authors") or {}).get("author") or []
        # A single author comes back as a dict, not a list
        if isinstance(authors, dict):
            authors = [authors]
        # Homonyms are disambiguated with a numeric suffix ("Jane Doe 0001")
        names = [re.sub(r"\s+\d{4}$", "", a.get("text", "")) for a in authors]
        entry.set(StandardField.AUTHOR, join_authors(names))

        venue = info.get("venue")
        if isinstance(venue, list):
            venue = venue[0] if venue else None
        entry.set(StandardField.BOOKTITLE if entry_type == "inproceedings" else StandardField.JOURNAL, venue)
        entry.set(StandardField.YEAR, info.get("year"))
        entry.set(StandardField.VOLUME, info.get("volume"))
        entry.set(StandardField.NUMBER, info.get("number"))
        entry.set(StandardField.PAGES, info.get("pages"))
        entry.set(StandardField.DOI, info.get("doi"))
        entry.set(StandardField.URL, info.get("ee") if isinstance(info.get("ee"), str) else info.get("url"))
        return entry
