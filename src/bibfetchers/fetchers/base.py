"""Capability contracts for bibliographic fetchers.

A concrete fetcher inherits every contract it can satisfy; the registry only
ever talks to fetchers through these interfaces.
"""

from abc import ABC, abstractmethod

from bibfetchers.config.settings import Settings
from bibfetchers.exceptions import MissingAPIKeyError
from bibfetchers.identifiers import Identifier, IdentifierType
from bibfetchers.model import BibEntry


class WebFetcher(ABC):
    """Root of all fetcher contracts."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable display name, used for ordering and presentation."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"


class ConfiguredFetcher(WebFetcher):
    """Fetcher that reads preferences or credentials from the settings."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def timeout(self) -> float:
        return self.settings.http.timeout

    def _require_key(self, key: str | None, source: str) -> str:
        """Return the API key for a source or raise if it is not set.

        Raises:
            MissingAPIKeyError: If the key is not configured.
        """
        if not key:
            raise MissingAPIKeyError(f"{source} requires an API key")
        return key


class IdBasedFetcher(WebFetcher):
    """Looks up a single entry by an identifier string."""

    @abstractmethod
    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        """Fetch the entry for an identifier.

        Args:
            identifier: Source-specific identifier (DOI, ISBN, arXiv id, ...).

        Returns:
            The entry, or None if the identifier is well-formed but unknown.
        """


class SearchBasedFetcher(WebFetcher):
    """Runs a free-text query against a source."""

    @abstractmethod
    def search(self, query: str) -> list[BibEntry]:
        """Search the source. May return an empty list."""


class EntryBasedFetcher(WebFetcher):
    """Finds entries matching a partially known entry."""

    @abstractmethod
    def search_by_entry(self, entry: BibEntry) -> list[BibEntry]:
        """Return candidate entries that complete the given one."""


class IdFetcher(WebFetcher):
    """Finds an identifier for an entry."""

    identifier_type: IdentifierType

    @abstractmethod
    def find_identifier(self, entry: BibEntry) -> Identifier | None:
        """Return the identifier of the given entry, if the source knows it."""


class FulltextFetcher(WebFetcher):
    """Locates the full text of an entry."""

    @abstractmethod
    def find_fulltext(self, entry: BibEntry) -> str | None:
        """Return a URL to the full text, or None if none could be found."""
