"""SAO/NASA Astrophysics Data System fetcher."""

from typing import Any

from bibfetchers.fetchers.base import (
    ConfiguredFetcher,
    EntryBasedFetcher,
    IdBasedFetcher,
    SearchBasedFetcher,
)
from bibfetchers.identifiers import DOI, ArXivIdentifier
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json

_DOCTYPES = {
    "article": "article",
    "eprint": "misc",
    "inproceedings": "inproceedings",
    "book": "book",
    "inbook": "incollection",
    "phdthesis": "phdthesis",
    "techreport": "techreport",
}


class AstrophysicsDataSystem(ConfiguredFetcher, IdBasedFetcher, SearchBasedFetcher, EntryBasedFetcher):
    """Query the ADS search API. Requires an API token."""

    name = "SAO/NASA ADS"

    API_URL = "https://api.adsabs.harvard.edu/v1/search/query"

    FIELDS = "bibcode,title,author,year,doi,pub,volume,issue,page,abstract,keyword,doctype,identifier"

    ROWS = 20

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        """Resolve a bibcode, DOI or arXiv id."""
        identifier = identifier.strip()
        if not identifier:
            return None
        doi = DOI.parse(identifier)
        arxiv_id = ArXivIdentifier.parse(identifier)
        if doi is not None:
            query = f'doi:"{doi.normalized}"'
        elif arxiv_id is not None:
            query = f'identifier:"arXiv:{arxiv_id.normalized}"'
        else:
            query = f'identifier:"{identifier}"'
        entries = self._query(query, rows=1)
        return entries[0] if entries else None

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        return self._query(query)

    def search_by_entry(self, entry: BibEntry) -> list[BibEntry]:
        terms = []
        title = entry.get(StandardField.TITLE)
        if title:
            terms.append(f'title:"{title}"')
        authors = entry.authors
        if authors:
            terms.append(f'author:"{authors[0]}"')
        year = entry.get(StandardField.YEAR)
        if year:
            terms.append(f"year:{year}")
        if not terms:
            return []
        return self._query(" ".join(terms), rows=5)

    def _query(self, query: str, rows: int = ROWS) -> list[BibEntry]:
        token = self._require_key(self.settings.api_keys.astrophysics_data_system, self.name)
        data = get_json(
            self.API_URL,
            params={"q": query, "fl": self.FIELDS, "rows": rows},
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )
        docs = ((data or {}).get("response") or {}).get("docs") or []
        return [self._to_entry(doc) for doc in docs]

    def _to_entry(self, doc: dict[str, Any]) -> BibEntry:
        entry = BibEntry(
            entry_type=_DOCTYPES.get(doc.get("doctype", ""), "misc"),
            citation_key=doc.get("bibcode") if self.settings.imports.keep_source_citation_key else None,
        )
        entry.set(StandardField.TITLE, _first(doc.get("title")))
        entry.set(StandardField.AUTHOR, join_authors(doc.get("author") or []))
        entry.set(StandardField.YEAR, doc.get("year"))
        entry.set(StandardField.DOI, _first(doc.get("doi")))
        entry.set(StandardField.JOURNAL, doc.get("pub"))
        entry.set(StandardField.VOLUME, doc.get("volume"))
        entry.set(StandardField.NUMBER, doc.get("issue"))
        entry.set(StandardField.PAGES, _first(doc.get("page")))
        entry.set(StandardField.ABSTRACT, doc.get("abstract"))
        keywords = doc.get("keyword") or []
        if keywords:
            entry.set(StandardField.KEYWORDS, self.settings.imports.keyword_separator.join(keywords))
        if doc.get("bibcode"):
            entry.set(StandardField.URL, f"https://ui.adsabs.harvard.edu/abs/{doc['bibcode']}")
        return entry


def _first(values: list[str] | None) -> str | None:
    return values[0] if values else None
