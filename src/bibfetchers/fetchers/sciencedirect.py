"""ScienceDirect full-text location through the Elsevier article API."""

from bibfetchers.fetchers.base import ConfiguredFetcher, FulltextFetcher
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField
from bibfetchers.utils.http import get_json


class ScienceDirect(ConfiguredFetcher, FulltextFetcher):
    """Find the ScienceDirect page of an Elsevier article. Requires an API key."""

    name = "ScienceDirect"

    API_URL = "https://api.elsevier.com/content/article/doi/{doi}"

    # Elsevier journals publish under this DOI prefix
    DOI_PREFIX = "10.1016/"

    def find_fulltext(self, entry: BibEntry) -> str | None:
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        if doi is None or not doi.normalized.startswith(self.DOI_PREFIX):
            return None

        key = self._require_key(self.settings.api_keys.elsevier, self.name)
        data = get_json(
            self.API_URL.format(doi=doi.normalized),
            headers={"X-ELS-APIKey": key},
            timeout=self.timeout,
        )
        if not data:
            return None
        coredata = (data.get("full-text-retrieval-response") or {}).get("coredata") or {}
        for link in coredata.get("link") or []:
            if link.get("@rel") == "scidir":
                return link.get("@href")
        return None
