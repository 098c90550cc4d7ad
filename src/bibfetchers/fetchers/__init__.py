"""Bibliographic fetchers and the registry that selects them."""

from bibfetchers.fetchers.base import (
    ConfiguredFetcher,
    EntryBasedFetcher,
    FulltextFetcher,
    IdBasedFetcher,
    IdFetcher,
    SearchBasedFetcher,
    WebFetcher,
)
from bibfetchers.fetchers.registry import (
    FetcherCategory,
    entry_based_fetchers,
    fetchers_for,
    find_by_name,
    fulltext_fetchers,
    id_based_fetcher_for_field,
    id_based_fetchers,
    id_fetcher_for_field,
    id_fetcher_for_identifier_type,
    id_fetchers,
    search_based_fetchers,
    sort_by_name,
)

__all__ = [
    # Contracts
    "WebFetcher",
    "ConfiguredFetcher",
    "IdBasedFetcher",
    "SearchBasedFetcher",
    "EntryBasedFetcher",
    "IdFetcher",
    "FulltextFetcher",
    # Registry
    "FetcherCategory",
    "sort_by_name",
    "id_based_fetcher_for_field",
    "id_fetcher_for_identifier_type",
    "id_fetcher_for_field",
    "search_based_fetchers",
    "id_based_fetchers",
    "entry_based_fetchers",
    "id_fetchers",
    "fulltext_fetchers",
    "fetchers_for",
    "find_by_name",
]
