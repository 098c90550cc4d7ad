"""PubMed/Medline fetcher using the NCBI E-utilities."""

import re
from typing import Any

from bibfetchers.fetchers.base import IdBasedFetcher, SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json


class MedlineFetcher(IdBasedFetcher, SearchBasedFetcher):
    """Search PubMed and resolve PubMed ids."""

    name = "Medline/PubMed"

    EUTILS_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"

    PMID_PATTERN = re.compile(r"^(?:pmid:?\s*)?(\d{1,9})$", re.IGNORECASE)

    MAX_RESULTS = 50

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        match = self.PMID_PATTERN.match(identifier.strip())
        if not match:
            return None
        entries = self._summaries([match.group(1)])
        return entries[0] if entries else None

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        data = get_json(
            f"{self.EUTILS_URL}/esearch.fcgi",
            params={"db": "pubmed", "term": query, "retmode": "json", "retmax": self.MAX_RESULTS},
        )
        ids = ((data or {}).get("esearchresult") or {}).get("idlist") or []
        return self._summaries(ids)

    def _summaries(self, pmids: list[str]) -> list[BibEntry]:
        if not pmids:
            return []
        data = get_json(
            f"{self.EUTILS_URL}/esummary.fcgi",
            params={"db": "pubmed", "id": ",".join(pmids), "retmode": "json"},
        )
        result = (data or {}).get("result") or {}
        return [
            self._to_entry(pmid, result[pmid])
            for pmid in result.get("uids", [])
            if "error" not in result.get(pmid, {"error": True})
        ]

    def _to_entry(self, pmid: str, summary: dict[str, Any]) -> BibEntry:
        entry = BibEntry(entry_type="article")
        entry.set(StandardField.TITLE, (summary.get("title") or "").rstrip("."))
        entry.set(StandardField.AUTHOR, join_authors([a.get("name", "") for a in summary.get("authors", [])]))
        entry.set(StandardField.JOURNAL, summary.get("fulljournalname") or summary.get("source"))
        entry.set(StandardField.YEAR, (summary.get("pubdate") or "")[:4] or None)
        entry.set(StandardField.VOLUME, summary.get("volume"))
        entry.set(StandardField.NUMBER, summary.get("issue"))
        entry.set(StandardField.PAGES, summary.get("pages"))
        entry.set(StandardField.ISSN, summary.get("issn"))
        for article_id in summary.get("articleids", []):
            if article_id.get("idtype") == "doi":
                entry.set(StandardField.DOI, article_id.get("value"))
        entry.set(StandardField.PMID, pmid)
        return entry
