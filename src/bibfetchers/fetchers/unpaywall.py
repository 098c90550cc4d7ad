"""Open-access copies located through Unpaywall."""

from bibfetchers.fetchers.base import ConfiguredFetcher, FulltextFetcher
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField
from bibfetchers.utils.http import get_json


class OpenAccessDoi(ConfiguredFetcher, FulltextFetcher):
    """Ask Unpaywall for the best open-access location of a DOI."""

    name = "Open Access DOI"

    API_URL = "https://api.unpaywall.org/v2"

    def find_fulltext(self, entry: BibEntry) -> str | None:
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        if doi is None:
            return None

        # Unpaywall requires an email parameter
        data = get_json(
            f"{self.API_URL}/{doi.normalized}",
            params={"email": self.settings.http.contact_email},
            timeout=self.timeout,
        )
        if not data:
            return None
        best_oa = data.get("best_oa_location") or {}
        return best_oa.get("url_for_pdf") or best_oa.get("url") or None
