"""ACM Digital Library search."""

import logging
import re

from bibfetchers.fetchers.base import ConfiguredFetcher, SearchBasedFetcher
from bibfetchers.fetchers.doi import DoiFetcher
from bibfetchers.model import BibEntry
from bibfetchers.utils.http import get_text

logger = logging.getLogger(__name__)

_DOI_LINK = re.compile(r'href="/doi/(?:abs/|full/|pdf/)?(10\.\d{4,}/[^"?#\s]+)"')


class ACMPortalFetcher(ConfiguredFetcher, SearchBasedFetcher):
    """Search the ACM Digital Library and resolve the hits by DOI."""

    name = "ACM Portal"

    SEARCH_URL = "https://dl.acm.org/action/doSearch"

    MAX_RESULTS = 20

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        page = get_text(self.SEARCH_URL, params={"AllField": query}, timeout=self.timeout)
        if not page:
            return []

        dois = self.dois_from_page(page)[: self.MAX_RESULTS]
        logger.debug(f"ACM search '{query}' returned {len(dois)} DOIs")
        doi_fetcher = DoiFetcher(self.settings)
        entries = []
        for doi in dois:
            entry = doi_fetcher.resolve_by_id(doi)
            if entry is not None:
                entries.append(entry)
        return entries

    @staticmethod
    def dois_from_page(page: str) -> list[str]:
        """Collect DOIs linked from a search result page, in page order."""
        seen: dict[str, None] = {}
        for doi in _DOI_LINK.findall(page):
            seen.setdefault(doi, None)
        return list(seen)
