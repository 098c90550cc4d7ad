"""Look up an entry from nothing but its title."""

import logging

from bibfetchers.fetchers.base import ConfiguredFetcher, IdBasedFetcher
from bibfetchers.fetchers.crossref import CrossRef
from bibfetchers.fetchers.doi import DoiFetcher
from bibfetchers.model import BibEntry, StandardField

logger = logging.getLogger(__name__)


class TitleFetcher(ConfiguredFetcher, IdBasedFetcher):
    """Treat the identifier as a title, find its DOI, then resolve the DOI."""

    name = "Title"

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        title = identifier.strip()
        if not title:
            return None

        doi = CrossRef().find_identifier(BibEntry(fields={StandardField.TITLE: title}))
        if doi is None:
            logger.debug(f"No DOI found for title '{title[:60]}'")
            return None
        return DoiFetcher(self.settings).resolve_by_id(doi.normalized)
