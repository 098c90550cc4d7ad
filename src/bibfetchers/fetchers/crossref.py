"""Crossref metadata fetcher and DOI finder."""

import logging
from typing import Any

from bibfetchers.fetchers.base import (
    EntryBasedFetcher,
    IdBasedFetcher,
    IdFetcher,
    SearchBasedFetcher,
)
from bibfetchers.identifiers import DOI, IdentifierType
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json
from bibfetchers.utils.matching import titles_match

logger = logging.getLogger(__name__)

# Crossref work types mapped to BibTeX entry types
_ENTRY_TYPES = {
    "journal-article": "article",
    "proceedings-article": "inproceedings",
    "book": "book",
    "monograph": "book",
    "edited-book": "book",
    "book-chapter": "incollection",
    "dissertation": "phdthesis",
    "report": "techreport",
    "posted-content": "misc",
}


def entry_from_crossref(work: dict[str, Any]) -> BibEntry:
    """Map a Crossref ``message`` work record onto a BibEntry."""
    entry = BibEntry(entry_type=_ENTRY_TYPES.get(work.get("type", ""), "misc"))

    titles = work.get("title") or []
    if titles:
        entry.set(StandardField.TITLE, titles[0])

    entry.set(
        StandardField.AUTHOR,
        join_authors(
            [
                f"{a.get('family', '')}, {a.get('given', '')}".strip(", ")
                for a in work.get("author", [])
            ]
        ),
    )

    containers = work.get("container-title") or []
    if containers:
        field = (
            StandardField.BOOKTITLE
            if entry.entry_type in ("inproceedings", "incollection")
            else StandardField.JOURNAL
        )
        entry.set(field, containers[0])

    issued = (work.get("issued") or {}).get("date-parts") or [[]]
    if issued[0] and issued[0][0]:
        entry.set(StandardField.YEAR, str(issued[0][0]))
        if len(issued[0]) > 1:
            entry.set(StandardField.MONTH, str(issued[0][1]))

    entry.set(StandardField.DOI, work.get("DOI"))
    entry.set(StandardField.PUBLISHER, work.get("publisher"))
    entry.set(StandardField.VOLUME, work.get("volume"))
    entry.set(StandardField.NUMBER, work.get("issue"))
    entry.set(StandardField.PAGES, (work.get("page") or "").replace("-", "--") or None)
    entry.set(StandardField.URL, work.get("URL"))
    isbns = work.get("ISBN") or []
    if isbns:
        entry.set(StandardField.ISBN, isbns[0])
    issns = work.get("ISSN") or []
    if issns:
        entry.set(StandardField.ISSN, issns[0])
    return entry


class CrossRef(IdBasedFetcher, SearchBasedFetcher, EntryBasedFetcher, IdFetcher):
    """Query the Crossref REST API."""

    name = "Crossref"
    identifier_type = IdentifierType.DOI

    # CrossRef API endpoint
    API_URL = "https://api.crossref.org/works"

    ROWS = 20

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        doi = DOI.parse(identifier)
        if doi is None:
            return None
        data = get_json(f"{self.API_URL}/{doi.normalized}")
        if not data:
            return None
        return entry_from_crossref(data.get("message", {}))

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = get_json(self.API_URL, params={"query": query, "rows": self.ROWS})
        return self._items(data)

    def search_by_entry(self, entry: BibEntry) -> list[BibEntry]:
        """Search Crossref with the bibliographic fields of an entry."""
        terms = [
            entry.get(StandardField.TITLE),
            entry.get(StandardField.AUTHOR),
            entry.get(StandardField.YEAR),
        ]
        query = " ".join(t for t in terms if t)
        if not query:
            return []
        data = get_json(
            self.API_URL,
            params={"query.bibliographic": query, "rows": self.ROWS},
        )
        return self._items(data)

    def find_identifier(self, entry: BibEntry) -> DOI | None:
        """Find the DOI of an entry by searching Crossref for its title."""
        existing = entry.get(StandardField.DOI)
        if existing:
            doi = DOI.parse(existing)
            if doi is not None:
                return doi

        title = entry.get(StandardField.TITLE)
        if not title:
            return None
        for candidate in self.search_by_entry(entry):
            if titles_match(title, candidate.get(StandardField.TITLE)):
                doi_text = candidate.get(StandardField.DOI)
                if doi_text:
                    logger.debug(f"Crossref matched '{title[:60]}' to {doi_text}")
                    return DOI.parse(doi_text)
        return None

    def _items(self, data: dict | None) -> list[BibEntry]:
        if not data:
            return []
        items = data.get("message", {}).get("items", [])
        return [entry_from_crossref(item) for item in items]
