"""DOI lookup and direct DOI resolution."""

import logging

from bibfetchers.fetchers.base import (
    ConfiguredFetcher,
    EntryBasedFetcher,
    FulltextFetcher,
    IdBasedFetcher,
)
from bibfetchers.fetchers.crossref import entry_from_crossref
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField
from bibfetchers.utils.http import get_json, head_url

logger = logging.getLogger(__name__)


class DoiFetcher(ConfiguredFetcher, IdBasedFetcher, EntryBasedFetcher):
    """Resolve DOIs to entries through the Crossref works endpoint."""

    name = "DOI"

    CROSSREF_API = "https://api.crossref.org/works"

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        """Look up the metadata registered for a DOI.

        Args:
            identifier: DOI in any common form (bare, doi:, https://doi.org/).

        Returns:
            The entry, or None if the DOI is malformed or not registered.
        """
        doi = DOI.parse(identifier)
        if doi is None:
            logger.debug(f"Not a DOI: {identifier!r}")
            return None

        data = get_json(
            f"{self.CROSSREF_API}/{doi.normalized}",
            params={"mailto": self.settings.http.contact_email},
            timeout=self.timeout,
        )
        if not data:
            return None
        entry = entry_from_crossref(data.get("message", {}))
        if not entry.has(StandardField.DOI):
            entry.set(StandardField.DOI, doi.normalized)
        return entry

    def search_by_entry(self, entry: BibEntry) -> list[BibEntry]:
        doi = entry.get(StandardField.DOI)
        if not doi:
            return []
        found = self.resolve_by_id(doi)
        return [found] if found else []


class DoiResolution(FulltextFetcher):
    """Follow the DOI resolver and accept the target if it serves a PDF."""

    name = "DOI Resolution"

    def find_fulltext(self, entry: BibEntry) -> str | None:
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        if doi is None:
            return None

        # Some publishers redirect straight to the PDF
        target = head_url(doi.uri, headers={"Accept": "application/pdf"})
        if target is None:
            return None
        url, content_type = target
        if "pdf" in content_type.lower():
            return url
        return None
