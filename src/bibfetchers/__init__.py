"""bibfetchers: pick, configure and order bibliographic metadata fetchers.

The registry maps an entry field or identifier type to one fetcher, and
builds the fetcher list of each retrieval mode:

    >>> from bibfetchers import load_settings, search_based_fetchers
    >>> settings = load_settings()
    >>> [f.name for f in search_based_fetchers(settings)][:3]
    ['ACM Portal', 'ArXiv', 'CiteSeerX']

Full-text lookups walk a fixed fallback chain:

    >>> from bibfetchers import BibEntry, StandardField, find_fulltext
    >>> entry = BibEntry(fields={StandardField.DOI: "10.1145/3292500.3330701"})
    >>> result = find_fulltext(entry, settings=settings)
"""

__version__ = "0.3.0"

# Configuration
from bibfetchers.config.settings import Settings, get_settings, load_settings
from bibfetchers.exceptions import (
    BibfetchersError,
    ConfigError,
    DispatchError,
    EntryNotFoundError,
    FetchError,
    MissingAPIKeyError,
    NetworkError,
    RateLimitError,
    UnknownFetcherError,
    UnsupportedIdentifierTypeError,
)

# Fetchers
from bibfetchers.fetchers import (
    EntryBasedFetcher,
    FetcherCategory,
    FulltextFetcher,
    IdBasedFetcher,
    IdFetcher,
    SearchBasedFetcher,
    WebFetcher,
    entry_based_fetchers,
    fetchers_for,
    fulltext_fetchers,
    id_based_fetcher_for_field,
    id_based_fetchers,
    id_fetcher_for_field,
    id_fetcher_for_identifier_type,
    id_fetchers,
    search_based_fetchers,
)
from bibfetchers.fulltext import FulltextResult, find_fulltext
from bibfetchers.identifiers import DOI, ISBN, ArXivIdentifier, Identifier, IdentifierType
from bibfetchers.model import BibEntry, StandardField

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "BibfetchersError",
    "FetchError",
    "EntryNotFoundError",
    "RateLimitError",
    "NetworkError",
    "ConfigError",
    "MissingAPIKeyError",
    "DispatchError",
    "UnsupportedIdentifierTypeError",
    "UnknownFetcherError",
    # Model
    "BibEntry",
    "StandardField",
    "Identifier",
    "IdentifierType",
    "DOI",
    "ArXivIdentifier",
    "ISBN",
    # Contracts
    "WebFetcher",
    "IdBasedFetcher",
    "SearchBasedFetcher",
    "EntryBasedFetcher",
    "IdFetcher",
    "FulltextFetcher",
    # Registry
    "FetcherCategory",
    "id_based_fetcher_for_field",
    "id_fetcher_for_identifier_type",
    "id_fetcher_for_field",
    "search_based_fetchers",
    "id_based_fetchers",
    "entry_based_fetchers",
    "id_fetchers",
    "fulltext_fetchers",
    "fetchers_for",
    # Full text
    "find_fulltext",
    "FulltextResult",
    # Configuration
    "Settings",
    "get_settings",
    "load_settings",
]
