"""American Chemical Society full-text location."""

from bibfetchers.fetchers.base import FulltextFetcher
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField
from bibfetchers.utils.http import get_text


class ACS(FulltextFetcher):
    """Return the ACS PDF link when the abstract page offers one."""

    name = "ACS"

    ABSTRACT_URL = "https://pubs.acs.org/doi/abs/{doi}"
    PDF_URL = "https://pubs.acs.org/doi/pdf/{doi}"

    # ACS publications use this DOI prefix
    DOI_PREFIX = "10.1021/"

    def find_fulltext(self, entry: BibEntry) -> str | None:
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        if doi is None or not doi.normalized.startswith(self.DOI_PREFIX):
            return None

        page = get_text(self.ABSTRACT_URL.format(doi=doi.normalized))
        if page and f"/doi/pdf/{doi.normalized}" in page:
            return self.PDF_URL.format(doi=doi.normalized)
        return None
