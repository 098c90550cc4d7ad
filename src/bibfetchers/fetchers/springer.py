"""Springer Nature metadata search and SpringerLink full text."""

import logging
from typing import Any

from bibfetchers.fetchers.base import ConfiguredFetcher, FulltextFetcher, SearchBasedFetcher
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json

logger = logging.getLogger(__name__)

API_URL = "https://api.springernature.com/meta/v2/json"

# Springer DOI prefixes; other DOIs are never on SpringerLink
SPRINGER_DOI_PREFIXES = ("10.1007/", "10.1186/", "10.1140/", "10.1057/", "10.1038/")


def query_springer(api_key: str, query: str, timeout: float, page_size: int = 20) -> list[dict[str, Any]]:
    data = get_json(
        API_URL,
        params={"q": query, "api_key": api_key, "s": 1, "p": page_size},
        timeout=timeout,
    )
    return (data or {}).get("records") or []


class SpringerFetcher(ConfiguredFetcher, SearchBasedFetcher):
    """Search the Springer Nature metadata API. Requires an API key."""

    name = "Springer"

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        key = self._require_key(self.settings.api_keys.springer, self.name)
        return [self._to_entry(record) for record in query_springer(key, query, self.timeout)]

    def _to_entry(self, record: dict[str, Any]) -> BibEntry:
        content_type = (record.get("contentType") or "").lower()
        entry = BibEntry(entry_type="incollection" if content_type == "chapter" else "article")
        entry.set(StandardField.TITLE, record.get("title"))
        entry.set(StandardField.AUTHOR, join_authors([c.get("creator", "") for c in record.get("creators", [])]))
        entry.set(
            StandardField.BOOKTITLE if entry.entry_type == "incollection" else StandardField.JOURNAL,
            record.get("publicationName"),
        )
        entry.set(StandardField.YEAR, (record.get("publicationDate") or "")[:4] or None)
        entry.set(StandardField.VOLUME, record.get("volume"))
        entry.set(StandardField.NUMBER, record.get("number"))
        if record.get("startingPage"):
            pages = record["startingPage"]
            if record.get("endingPage"):
                pages = f"{pages}--{record['endingPage']}"
            entry.set(StandardField.PAGES, pages)
        entry.set(StandardField.DOI, record.get("doi"))
        entry.set(StandardField.PUBLISHER, record.get("publisher"))
        entry.set(StandardField.ISSN, record.get("issn"))
        entry.set(StandardField.ISBN, record.get("isbn"))
        abstract = record.get("abstract")
        if isinstance(abstract, dict):
            abstract = abstract.get("p")
        if isinstance(abstract, str):
            entry.set(StandardField.ABSTRACT, abstract)
        return entry


class SpringerLink(ConfiguredFetcher, FulltextFetcher):
    """Return the SpringerLink PDF of an open-access Springer DOI."""

    name = "SpringerLink"

    PDF_URL = "https://link.springer.com/content/pdf/{doi}.pdf"

    def find_fulltext(self, entry: BibEntry) -> str | None:
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        if doi is None or not doi.normalized.lower().startswith(SPRINGER_DOI_PREFIXES):
            return None

        key = self._require_key(self.settings.api_keys.springer, self.name)
        records = query_springer(key, f"doi:{doi.normalized}", self.timeout, page_size=1)
        if not records:
            return None
        if str(records[0].get("openaccess", "")).lower() != "true":
            logger.debug(f"SpringerLink: {doi} is not open access")
            return None
        return self.PDF_URL.format(doi=doi.normalized)
