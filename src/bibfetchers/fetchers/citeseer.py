"""CiteSeerX search."""

from typing import Any

from bibfetchers.fetchers.base import SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import post_json


class CiteSeer(SearchBasedFetcher):
    """Search the CiteSeerX digital library."""

    name = "CiteSeerX"

    API_URL = "https://citeseerx.ist.psu.edu/api/search"
    DOC_URL = "https://citeseerx.ist.psu.edu/doc_view/pid/{pid}"

    PAGE_SIZE = 20

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = post_json(
            self.API_URL,
            {
                "queryString": query,
                "page": 1,
                "pageSize": self.PAGE_SIZE,
                "must_have_pdf": "false",
                "sortBy": "relevance",
            },
        )
        return [self._to_entry(doc) for doc in (data or {}).get("response") or []]

    def _to_entry(self, doc: dict[str, Any]) -> BibEntry:
        entry = BibEntry(entry_type="article")
        entry.set(StandardField.TITLE, doc.get("title"))
        entry.set(StandardField.AUTHOR, join_authors(doc.get("authors") or []))
        if doc.get("year"):
            entry.set(StandardField.YEAR, str(doc["year"]))
        entry.set(StandardField.JOURNAL, doc.get("venue"))
        entry.set(StandardField.PUBLISHER, doc.get("publisher"))
        entry.set(StandardField.ABSTRACT, doc.get("abstract"))
        if doc.get("id"):
            entry.set(StandardField.URL, self.DOC_URL.format(pid=doc["id"]))
        return entry
