"""Walk the full-text fallback chain until a fetcher finds the document."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from bibfetchers.config.settings import Settings, load_settings
from bibfetchers.exceptions import ConfigError, FetchError
from bibfetchers.fetchers.base import FulltextFetcher
from bibfetchers.fetchers.registry import fulltext_fetchers
from bibfetchers.model import BibEntry

logger = logging.getLogger(__name__)


@dataclass
class FulltextResult:
    """Where the full text was found and who found it."""

    url: str
    fetcher: str


def find_fulltext(
    entry: BibEntry,
    fetchers: Sequence[FulltextFetcher] | None = None,
    settings: Settings | None = None,
) -> FulltextResult | None:
    """Try each full-text fetcher in order and return the first hit.

    A fetcher that finds nothing, fails at the source, or lacks an API key is
    skipped. Any other exception propagates.

    Args:
        entry: Entry whose full text is wanted.
        fetchers: Chain to walk. Defaults to the registry's full-text chain.
        settings: Settings used to build the default chain.

    Returns:
        The first URL found, or None if every fetcher came up empty.
    """
    if fetchers is None:
        fetchers = fulltext_fetchers(settings or load_settings())

    for fetcher in fetchers:
        try:
            url = fetcher.find_fulltext(entry)
        except (FetchError, ConfigError) as e:
            logger.debug(f"{fetcher.name} failed: {e.message}")
            continue
        if url:
            logger.info(f"Full text found by {fetcher.name}: {url}")
            return FulltextResult(url=url, fetcher=fetcher.name)
        logger.debug(f"{fetcher.name} found no full text")
    return None
