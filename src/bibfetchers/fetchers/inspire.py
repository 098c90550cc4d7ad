"""INSPIRE-HEP literature search."""

from typing import Any

from bibfetchers.fetchers.base import ConfiguredFetcher, SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json


class INSPIREFetcher(ConfiguredFetcher, SearchBasedFetcher):
    """Search the INSPIRE high-energy physics database."""

    name = "INSPIRE"

    API_URL = "https://inspirehep.net/api/literature"

    SIZE = 25

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = get_json(
            self.API_URL,
            params={"q": query, "size": self.SIZE, "sort": "mostrecent"},
            timeout=self.timeout,
        )
        hits = ((data or {}).get("hits") or {}).get("hits") or []
        return [self._to_entry(hit.get("metadata", {})) for hit in hits]

    def _to_entry(self, record: dict[str, Any]) -> BibEntry:
        doc_types = record.get("document_type") or []
        entry = BibEntry(entry_type="inproceedings" if "conference paper" in doc_types else "article")
        if self.settings.imports.keep_source_citation_key:
            entry.citation_key = (record.get("texkeys") or [None])[0]

        titles = record.get("titles") or []
        if titles:
            entry.set(StandardField.TITLE, titles[0].get("title"))
        entry.set(StandardField.AUTHOR, join_authors([a.get("full_name", "") for a in record.get("authors", [])]))

        publication = (record.get("publication_info") or [{}])[0]
        entry.set(StandardField.JOURNAL, publication.get("journal_title"))
        entry.set(StandardField.VOLUME, publication.get("journal_volume"))
        if publication.get("year"):
            entry.set(StandardField.YEAR, str(publication["year"]))
        elif record.get("earliest_date"):
            entry.set(StandardField.YEAR, record["earliest_date"][:4])

        dois = record.get("dois") or []
        if dois:
            entry.set(StandardField.DOI, dois[0].get("value"))
        eprints = record.get("arxiv_eprints") or []
        if eprints:
            entry.set(StandardField.EPRINT, eprints[0].get("value"))
            entry.set(StandardField.EPRINTTYPE, "arXiv")
        abstracts = record.get("abstracts") or []
        if abstracts:
            entry.set(StandardField.ABSTRACT, abstracts[0].get("value"))
        return entry
